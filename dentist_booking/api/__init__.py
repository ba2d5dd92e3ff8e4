"""
Dentist Booking API

Structure:
    api/
    ├── __init__.py              # This file
    ├── appointments/            # Appointments domain
    │   └── endpoints.py
    ├── dentists/                # Dentists domain
    │   └── endpoints.py
    └── shared/                  # Session actor, validators, error mapping

Usage:
    frappe.call("dentist_booking.api.appointments.add_appointment", ...)
    frappe.call("dentist_booking.api.dentists.get_dentists")
"""

from . import appointments
from . import dentists
from . import shared

__all__ = [
	"appointments",
	"dentists",
	"shared",
]
