# Copyright (c) 2026, Dentist Booking contributors
# For license information, please see license.txt

from frappe.model.document import Document


class DentistAvailability(Document):
	"""Child row of Dentist: weekday (0 = Sunday), start_hour, end_hour."""

	pass
