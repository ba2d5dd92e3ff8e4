"""
Dentist API Endpoints

Public read access to dentists and their weekly availability; create,
update and delete are restricted to administrators by the booking service.
"""

import frappe
from typing import Any, Dict, Optional

from dentist_booking.dentist_booking.persistence import get_booking_service
from dentist_booking.dentist_booking.scheduling.errors import BookingError

from dentist_booking.api.shared import (
	get_current_actor,
	parse_availability,
	parse_optional_int,
	serialize_dentist,
	throw_booking_error,
	validate_docname,
)


@frappe.whitelist(allow_guest=True, methods=["GET"])
def get_dentists() -> Dict[str, Any]:
	"""
	Lista todos los dentistas con su disponibilidad semanal.

	Returns:
		dict: {"success": True, "count": int, "data": [dentist, ...]}
	"""
	try:
		dentists = get_booking_service().list_providers()
	except BookingError as e:
		throw_booking_error(e)

	return {
		"success": True,
		"count": len(dentists),
		"data": [serialize_dentist(d) for d in dentists],
	}


@frappe.whitelist(allow_guest=True, methods=["GET"])
def get_dentist(name: str) -> Dict[str, Any]:
	name = validate_docname(name, "dentist")

	try:
		dentist = get_booking_service().get_provider(name)
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": serialize_dentist(dentist)}


@frappe.whitelist(methods=["POST"])
def create_dentist(
	dentist_name: str,
	years_of_experience: Any,
	area_of_expertise: str,
	available_datetime: Any,
) -> Dict[str, Any]:
	"""
	Crea un dentista. Solo administradores.

	Args:
		dentist_name: nombre único (máximo 50 caracteres)
		years_of_experience: años de experiencia
		area_of_expertise: especialidad
		available_datetime: JSON list [{"weekday": 3, "start_hour": 12, "end_hour": 18}, ...]
			weekday: 0 = domingo ... 6 = sábado

	Returns:
		dict: {"success": True, "data": dentist}
	"""
	actor = get_current_actor()
	windows = parse_availability(available_datetime)
	years = parse_optional_int(years_of_experience, "years_of_experience")

	try:
		dentist = get_booking_service().upsert_provider(
			actor,
			name=dentist_name,
			years_of_experience=years,
			specialty=area_of_expertise,
			windows=windows,
		)
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": serialize_dentist(dentist)}


@frappe.whitelist(methods=["POST", "PUT"])
def update_dentist(
	name: str,
	dentist_name: Optional[str] = None,
	years_of_experience: Any = None,
	area_of_expertise: Optional[str] = None,
	available_datetime: Any = None,
) -> Dict[str, Any]:
	"""
	Actualiza un dentista. Solo administradores.

	Los campos omitidos conservan su valor actual. Las citas ya confirmadas
	no se invalidan si la disponibilidad se reduce.
	"""
	actor = get_current_actor()
	name = validate_docname(name, "dentist")
	service = get_booking_service()

	try:
		current = service.get_provider(name)
		windows = (
			parse_availability(available_datetime)
			if available_datetime not in (None, "")
			else list(current.availability)
		)
		years = parse_optional_int(years_of_experience, "years_of_experience")

		dentist = service.upsert_provider(
			actor,
			name=dentist_name if dentist_name is not None else current.name,
			years_of_experience=years if years is not None else current.years_of_experience,
			specialty=area_of_expertise if area_of_expertise is not None else current.specialty,
			windows=windows,
			provider_id=name,
		)
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": serialize_dentist(dentist)}


@frappe.whitelist(methods=["POST", "DELETE"])
def delete_dentist(name: str) -> Dict[str, Any]:
	actor = get_current_actor()
	name = validate_docname(name, "dentist")

	try:
		get_booking_service().delete_provider(actor, name)
	except BookingError as e:
		throw_booking_error(e)

	return {"success": True, "data": {}}
