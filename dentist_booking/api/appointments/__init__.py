"""
Appointments API Domain

Booking, listing, rescheduling and cancelling a user's appointments.
"""

from .endpoints import (
	add_appointment,
	delete_appointment,
	get_appointment,
	get_appointments,
	update_appointment,
)

__all__ = [
	"add_appointment",
	"delete_appointment",
	"get_appointment",
	"get_appointments",
	"update_appointment",
]
