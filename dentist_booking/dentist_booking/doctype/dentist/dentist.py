# Copyright (c) 2026, Dentist Booking contributors
# For license information, please see license.txt

"""
Dentist DocType

Dentista con disponibilidad semanal recurrente.
"""

import frappe
from frappe import _
from frappe.model.document import Document

from dentist_booking.dentist_booking.scheduling.availability import validate_availability_set
from dentist_booking.dentist_booking.scheduling.errors import BookingError
from dentist_booking.dentist_booking.scheduling.models import ProviderDraft
from dentist_booking.dentist_booking.persistence.frappe_repository import windows_from_rows
from dentist_booking.api.shared.errors import throw_booking_error


class Dentist(Document):
	"""
	Dentist with availability validation.

	Validations:
	- dentist_name required, trimmed, max 50 chars (unique at DB level)
	- years_of_experience >= 0
	- area_of_expertise required
	- At least one availability row, each with start_hour <= end_hour
	"""

	def validate(self) -> None:
		self.dentist_name = (self.dentist_name or "").strip()
		windows = windows_from_rows(self.available_datetime)

		try:
			ProviderDraft.build(
				self.dentist_name,
				self.years_of_experience,
				self.area_of_expertise,
				windows,
			).validate()
			validate_availability_set(windows)
		except BookingError as e:
			throw_booking_error(e)

	def on_trash(self) -> None:
		"""Bloquea el borrado si el dentista aún tiene citas."""
		if frappe.db.exists("Dental Appointment", {"dentist": self.name}):
			frappe.throw(
				_(f"Dentist {self.name} still has appointments"),
				frappe.LinkExistsError,
			)
