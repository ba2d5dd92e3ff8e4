"""
Booking Validators

Input validation for whitelisted endpoints. Values are normalized here so
the scheduling engine only ever sees typed values.
"""

import json
import re
from datetime import datetime
from typing import Any, List, Optional

import frappe
import pytz
from frappe import _
from frappe.utils import cint, get_datetime, get_system_timezone

from dentist_booking.dentist_booking.scheduling.models import AvailabilityWindow


# Dentist and appointment ids are autonamed (DENT-00001, APPT-00001)
DOCNAME_PATTERN = re.compile(r"^[\w.@ -]{1,140}$")


def validate_docname(name: str, field_name: str = "name") -> str:
    """
    Check that an id received from the client looks like a docname.

    Raises:
        frappe.ValidationError: If the id is missing or malformed
    """
    name = str(name or "").strip()
    if not name:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)
    if not DOCNAME_PATTERN.match(name):
        frappe.throw(_(f"Invalid {field_name}"), frappe.ValidationError)
    return name


def parse_appointment_datetime(value: Any, field_name: str = "appt_date") -> datetime:
    """
    Parse an appointment timestamp into a naive site-local datetime.

    Accepts "YYYY-MM-DD HH:MM:SS" or ISO 8601 with an offset
    (e.g. "2023-03-29T07:01:07+07:00"). Aware values are converted to the
    system timezone before the offset is dropped, since availability is
    matched on the local hour.

    Raises:
        frappe.ValidationError: If the value is missing or not a datetime
    """
    if not value:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    try:
        if isinstance(value, datetime):
            parsed = value
        else:
            text = str(value).strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text) if "T" in text else get_datetime(text)
    except (TypeError, ValueError):
        frappe.throw(
            _(f"Invalid {field_name} format. Use YYYY-MM-DD HH:MM:SS or ISO 8601"),
            frappe.ValidationError,
        )

    if parsed.tzinfo is not None:
        tz = pytz.timezone(get_system_timezone() or "UTC")
        parsed = parsed.astimezone(tz).replace(tzinfo=None)

    return parsed


def parse_availability(value: Any, field_name: str = "available_datetime") -> List[AvailabilityWindow]:
    """
    Parse availability windows sent as a JSON string or a list of dicts.

    Range checks happen in the scheduling engine; this only enforces shape.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            frappe.throw(_(f"Invalid {field_name}: expected a JSON list"), frappe.ValidationError)

    if not isinstance(value, list):
        frappe.throw(_(f"Invalid {field_name}: expected a list"), frappe.ValidationError)

    windows = []
    for idx, row in enumerate(value, 1):
        if not isinstance(row, dict):
            frappe.throw(_(f"{field_name} row {idx} must be an object"), frappe.ValidationError)

        missing = [key for key in ("weekday", "start_hour", "end_hour") if row.get(key) in (None, "")]
        if missing:
            frappe.throw(
                _(f"{field_name} row {idx} is missing {', '.join(missing)}"),
                frappe.ValidationError,
            )

        windows.append(
            AvailabilityWindow(
                weekday=cint(row["weekday"]),
                start_hour=cint(row["start_hour"]),
                end_hour=cint(row["end_hour"]),
            )
        )

    return windows


def parse_optional_int(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        frappe.throw(_(f"{field_name} must be a number"), frappe.ValidationError)
