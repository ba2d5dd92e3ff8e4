"""
Appointment API Endpoints

Whitelisted functions for frontend/external use. All endpoints require an
authenticated session; the caller's identity and role are resolved from
it and never taken from the request body.
"""

import frappe
from typing import Any, Dict, Optional

from dentist_booking.dentist_booking.persistence import get_booking_service
from dentist_booking.dentist_booking.scheduling.errors import BookingError

from dentist_booking.api.shared import (
	get_current_actor,
	parse_appointment_datetime,
	serialize_appointment,
	serialize_appointments,
	throw_booking_error,
	validate_docname,
)


@frappe.whitelist(methods=["GET"])
def get_appointments(dentist: Optional[str] = None) -> Dict[str, Any]:
	"""
	Lista las citas visibles para el usuario.

	Administradores ven todas; los clientes solo las propias.

	Args:
		dentist: filtra por dentista (opcional)

	Returns:
		dict: {"success": True, "count": int, "data": [appointment, ...]}

	Example:
		```javascript
		frappe.call({
			method: "dentist_booking.api.appointments.get_appointments",
			args: { dentist: "DENT-00001" },
			callback: function(r) {
				console.log(r.message.data);
			}
		});
		```
	"""
	actor = get_current_actor()
	if dentist:
		dentist = validate_docname(dentist, "dentist")

	service = get_booking_service()

	try:
		appointments = service.list_appointments(actor, provider_id=dentist)
		data = serialize_appointments(appointments, service.get_provider)
	except BookingError as e:
		throw_booking_error(e)

	return {
		"success": True,
		"count": len(appointments),
		"data": data,
	}


@frappe.whitelist(methods=["GET"])
def get_appointment(name: str) -> Dict[str, Any]:
	"""
	Obtiene el detalle de una cita del usuario autenticado.

	Args:
		name: id de la cita

	Returns:
		dict: {"success": True, "data": appointment}
	"""
	actor = get_current_actor()
	name = validate_docname(name, "appointment")

	service = get_booking_service()

	try:
		appointment = service.get_appointment(actor, name)
		data = serialize_appointment(appointment, service.get_provider(appointment.provider_id))
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": data}


@frappe.whitelist(methods=["POST"])
def add_appointment(dentist: str, appt_date: str) -> Dict[str, Any]:
	"""
	Reserva una cita con un dentista.

	El cliente se toma de la sesión. Falla si el horario no está dentro de
	la disponibilidad del dentista o si el usuario ya alcanzó su cuota.

	Args:
		dentist: id del dentista
		appt_date: fecha y hora (YYYY-MM-DD HH:MM:SS o ISO 8601)

	Returns:
		dict: {"success": True, "data": appointment}

	Example:
		```javascript
		frappe.call({
			method: "dentist_booking.api.appointments.add_appointment",
			args: {
				dentist: "DENT-00001",
				appt_date: "2026-01-21 14:00:00"
			},
			callback: function(r) {
				console.log("Cita reservada:", r.message.data);
			}
		});
		```
	"""
	actor = get_current_actor()
	dentist = validate_docname(dentist, "dentist")
	requested_at = parse_appointment_datetime(appt_date)

	service = get_booking_service()

	try:
		appointment = service.propose_appointment(actor, dentist, requested_at)
		data = serialize_appointment(appointment, service.get_provider(appointment.provider_id))
	except BookingError as e:
		throw_booking_error(e)

	frappe.logger("dentist_booking").info(
		f"Appointment {appointment.id} booked by {actor.id} with {dentist} at {requested_at}"
	)

	return {"success": True, "data": data}


@frappe.whitelist(methods=["POST", "PUT"])
def update_appointment(
	name: str,
	appt_date: Optional[str] = None,
	dentist: Optional[str] = None,
) -> Dict[str, Any]:
	"""
	Reprograma una cita.

	Solo el dueño o un administrador pueden modificarla. Si cambia la fecha
	o el dentista se vuelve a validar la disponibilidad y la cuota.

	Args:
		name: id de la cita
		appt_date: nueva fecha y hora (opcional)
		dentist: nuevo dentista (opcional)

	Returns:
		dict: {"success": True, "data": appointment}
	"""
	actor = get_current_actor()
	name = validate_docname(name, "appointment")
	new_requested_at = parse_appointment_datetime(appt_date) if appt_date else None
	if dentist:
		dentist = validate_docname(dentist, "dentist")

	service = get_booking_service()

	try:
		appointment = service.reschedule_appointment(
			actor,
			name,
			new_requested_at,
			provider_id=dentist or None,
		)
		data = serialize_appointment(appointment, service.get_provider(appointment.provider_id))
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": data}


@frappe.whitelist(methods=["POST", "DELETE"])
def delete_appointment(name: str) -> Dict[str, Any]:
	"""
	Cancela (elimina) una cita.

	Args:
		name: id de la cita

	Returns:
		dict: {"success": True, "data": {}}
	"""
	actor = get_current_actor()
	name = validate_docname(name, "appointment")

	try:
		get_booking_service().cancel_appointment(actor, name)
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": {}}
