"""
Booking Error Mapping

Translates scheduling engine rejections into Frappe exceptions, one class
per rejection kind so each maps to a distinct HTTP status and message.
"""

from typing import Dict, Type

import frappe
from frappe import _

from dentist_booking.dentist_booking.scheduling.errors import (
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


class AppointmentNotAvailableError(frappe.ValidationError):
    pass


class AppointmentQuotaExceededError(frappe.ValidationError):
    pass


class InvalidAvailabilityWindowError(frappe.ValidationError):
    pass


class BookingConflictError(frappe.ValidationError):
    http_status_code = 409


class BookingStorageUnavailableError(frappe.ValidationError):
    http_status_code = 503


FRAPPE_EXCEPTIONS: Dict[Type[BookingError], Type[Exception]] = {
    NotFoundError: frappe.DoesNotExistError,
    ForbiddenError: frappe.PermissionError,
    NotAvailableError: AppointmentNotAvailableError,
    QuotaExceededError: AppointmentQuotaExceededError,
    InvalidWindowError: InvalidAvailabilityWindowError,
    InvalidRequestError: frappe.ValidationError,
    ConflictError: BookingConflictError,
    StorageUnavailableError: BookingStorageUnavailableError,
}

TITLES: Dict[Type[BookingError], str] = {
    NotFoundError: "Not Found",
    ForbiddenError: "Not Permitted",
    NotAvailableError: "Time Not Offered",
    QuotaExceededError: "Fully Booked",
    InvalidWindowError: "Invalid Availability",
    InvalidRequestError: "Invalid Request",
    ConflictError: "Conflict",
    StorageUnavailableError: "Try Again",
}


def throw_booking_error(error: BookingError) -> None:
    """
    Raise the Frappe exception matching a booking rejection.

    Args:
        error: rejection raised by the scheduling engine

    Raises:
        frappe.ValidationError / PermissionError / DoesNotExistError subclass
    """
    exc = FRAPPE_EXCEPTIONS.get(type(error), frappe.ValidationError)
    title = TITLES.get(type(error), "Booking Error")

    if error.retryable:
        frappe.logger("dentist_booking").warning(f"{error.code}: {error.message} {error.context}")

    frappe.throw(_(error.message), exc, title=_(title))
