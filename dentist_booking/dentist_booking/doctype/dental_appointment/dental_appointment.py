# Copyright (c) 2026, Dentist Booking contributors
# For license information, please see license.txt

"""
Dental Appointment DocType

Cita confirmada entre un cliente y un dentista. Las citas solo se crean o
reprograman a través del BookingService, que valida disponibilidad y cuota
antes de escribir.
"""

import frappe
from frappe import _
from frappe.model.document import Document


class DentalAppointment(Document):

	def before_insert(self) -> None:
		self._require_booking_service()

	def validate(self) -> None:
		if self.is_new():
			return
		for fieldname in ("client", "dentist", "scheduled_at"):
			if self.has_value_changed(fieldname):
				self._require_booking_service()
				break

	def _require_booking_service(self) -> None:
		"""
		Rechaza escrituras que no pasaron por la validación de elegibilidad.
		"""
		if not self.flags.via_booking_service:
			frappe.throw(
				_("Appointments must be booked or rescheduled through the booking API"),
				frappe.ValidationError,
			)
