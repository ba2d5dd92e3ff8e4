"""
Scheduling Engine

Core business logic for dentist appointments, independent of Frappe:
- Availability calendar (availability.py)
- Eligibility evaluation (eligibility.py)
- Appointment ledger (ledger.py)
- Booking service (booking.py)
- Storage interface (repository.py)
"""

from .booking import BookingService
from .config import BookingConfig, DEFAULT_MAX_ACTIVE_APPOINTMENTS
from .errors import (
	BookingError,
	ConflictError,
	ForbiddenError,
	InvalidRequestError,
	InvalidWindowError,
	NotAvailableError,
	NotFoundError,
	QuotaExceededError,
	StorageUnavailableError,
)
from .models import Actor, Appointment, AvailabilityWindow, Decision, Provider, Role
from .repository import InMemoryRepository, Repository

__all__ = [
	"BookingService",
	"BookingConfig",
	"DEFAULT_MAX_ACTIVE_APPOINTMENTS",
	"BookingError",
	"ConflictError",
	"ForbiddenError",
	"InvalidRequestError",
	"InvalidWindowError",
	"NotAvailableError",
	"NotFoundError",
	"QuotaExceededError",
	"StorageUnavailableError",
	"Actor",
	"Appointment",
	"AvailabilityWindow",
	"Decision",
	"Provider",
	"Role",
	"InMemoryRepository",
	"Repository",
]
