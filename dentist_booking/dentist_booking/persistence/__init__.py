"""
Persistence Module

Wires the scheduling engine to the site database:
- Frappe-backed repository (frappe_repository.py)
- Booking service factory reading the quota from site config
"""

import frappe
from frappe.utils import cint

from dentist_booking.dentist_booking.scheduling.booking import BookingService
from dentist_booking.dentist_booking.scheduling.config import BookingConfig, DEFAULT_MAX_ACTIVE_APPOINTMENTS

from .frappe_repository import FrappeRepository


MAX_ACTIVE_APPOINTMENTS_KEY = "dentist_booking_max_active_appointments"
EXCLUDE_RESCHEDULED_KEY = "dentist_booking_exclude_rescheduled_from_quota"


def get_booking_config() -> BookingConfig:
	"""
	Lee la configuración desde site_config.json.

	Keys:
		dentist_booking_max_active_appointments: cuota Q (default 1)
		dentist_booking_exclude_rescheduled_from_quota: 1/0 (default 1)
	"""
	conf = frappe.conf or {}
	return BookingConfig(
		max_active_appointments=cint(conf.get(MAX_ACTIVE_APPOINTMENTS_KEY) or DEFAULT_MAX_ACTIVE_APPOINTMENTS),
		exclude_rescheduled_from_quota=bool(cint(conf.get(EXCLUDE_RESCHEDULED_KEY, 1))),
	)


def get_booking_service() -> BookingService:
	return BookingService(FrappeRepository(), get_booking_config())


__all__ = [
	"FrappeRepository",
	"get_booking_config",
	"get_booking_service",
]
