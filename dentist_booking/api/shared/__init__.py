"""
Shared utilities for Dentist Booking API.

Session actor resolution, input validators and the mapping from
scheduling rejections to Frappe exceptions.
"""

from .errors import (
    AppointmentNotAvailableError,
    AppointmentQuotaExceededError,
    BookingConflictError,
    BookingStorageUnavailableError,
    InvalidAvailabilityWindowError,
    throw_booking_error,
)
from .serializers import serialize_appointment, serialize_appointments, serialize_dentist
from .session import ADMINISTRATOR_ROLES, MANAGER_ROLE, get_current_actor
from .validators import (
    parse_appointment_datetime,
    parse_availability,
    parse_optional_int,
    validate_docname,
)

__all__ = [
    "AppointmentNotAvailableError",
    "AppointmentQuotaExceededError",
    "BookingConflictError",
    "BookingStorageUnavailableError",
    "InvalidAvailabilityWindowError",
    "throw_booking_error",
    "serialize_appointment",
    "serialize_appointments",
    "serialize_dentist",
    "ADMINISTRATOR_ROLES",
    "MANAGER_ROLE",
    "get_current_actor",
    "parse_appointment_datetime",
    "parse_availability",
    "parse_optional_int",
    "validate_docname",
]
