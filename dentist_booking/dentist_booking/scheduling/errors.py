"""
Booking Errors

Typed rejections raised by the scheduling engine. Each kind has a stable
code and a distinct message so callers can tell "time not offered" from
"fully booked" from "not your appointment".
"""

from typing import Optional


class BookingError(Exception):
	"""Base class for every rejection raised by the scheduling engine."""

	code = "booking_error"
	default_message = "The booking request could not be processed"
	retryable = False

	def __init__(self, message: Optional[str] = None, **context) -> None:
		self.message = message or self.default_message
		self.context = context
		super().__init__(self.message)


class NotFoundError(BookingError):
	code = "not_found"
	default_message = "The requested record does not exist"


class NotAvailableError(BookingError):
	code = "rejected_not_available"
	default_message = "The requested time is not offered by this dentist"


class QuotaExceededError(BookingError):
	code = "rejected_quota_exceeded"
	default_message = "You have reached the maximum number of active appointments"


class ForbiddenError(BookingError):
	code = "forbidden"
	default_message = "You are not allowed to change this appointment"


class InvalidWindowError(BookingError):
	code = "rejected_invalid_window"
	default_message = "The availability windows are invalid"


class InvalidRequestError(BookingError):
	code = "invalid_request"
	default_message = "The request is missing required fields or has malformed values"


class ConflictError(BookingError):
	code = "conflict"
	default_message = "The request conflicts with an existing record"


class StorageUnavailableError(BookingError):
	"""Repository failure. The only kind a caller may retry."""

	code = "storage_unavailable"
	default_message = "The booking store is temporarily unavailable, please retry"
	retryable = True
