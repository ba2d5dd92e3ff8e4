"""
Booking Configuration

Injected once when the booking service is built.
"""

from dataclasses import dataclass

from .errors import InvalidRequestError


# Maximum concurrently Confirmed appointments for a non-administrator (Q)
DEFAULT_MAX_ACTIVE_APPOINTMENTS = 1


@dataclass(frozen=True)
class BookingConfig:
	"""
	Attributes:
		max_active_appointments: quota Q for non-administrator actors
		exclude_rescheduled_from_quota: when rescheduling, do not count the
			appointment being moved against its owner's quota
	"""

	max_active_appointments: int = DEFAULT_MAX_ACTIVE_APPOINTMENTS
	exclude_rescheduled_from_quota: bool = True

	def __post_init__(self) -> None:
		if (
			isinstance(self.max_active_appointments, bool)
			or not isinstance(self.max_active_appointments, int)
			or self.max_active_appointments < 1
		):
			raise InvalidRequestError(
				"max_active_appointments must be a positive integer",
				value=self.max_active_appointments,
			)
