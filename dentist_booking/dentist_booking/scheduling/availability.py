"""
Availability Calendar

Answers whether a dentist's recurring weekly windows are open at a given
moment, and validates a window set before it is committed.

Weekdays follow the 0 = Sunday convention. Hours are read from the
timestamp as given: no timezone conversion happens here.
"""

from datetime import datetime
from typing import Iterable

from .errors import InvalidWindowError
from .models import AvailabilityWindow


WEEKDAYS = range(0, 7)
HOURS = range(0, 24)


def weekday_of(at: datetime) -> int:
	"""Weekday of a timestamp with Sunday = 0."""
	return int(at.strftime("%w"))


def is_open(windows: Iterable[AvailabilityWindow], at: datetime) -> bool:
	"""
	Verifica si algún window cubre el instante solicitado.

	Args:
		windows: availability windows del dentista
		at: instante solicitado

	Returns:
		bool: True si existe un window con el mismo weekday y
		start_hour <= hour <= end_hour (ambos extremos incluidos)
	"""
	weekday = weekday_of(at)
	hour = at.hour

	for window in windows:
		if window.weekday != weekday:
			continue
		if window.start_hour <= hour <= window.end_hour:
			return True

	return False


def validate_availability_set(windows: Iterable[AvailabilityWindow]) -> None:
	"""
	Valida un conjunto de windows antes de guardarlo.

	Raises:
		InvalidWindowError: si el conjunto está vacío, algún weekday u hora
		está fuera de rango, o start_hour > end_hour
	"""
	windows = list(windows or ())

	if not windows:
		raise InvalidWindowError("Please add an available datetime")

	for idx, window in enumerate(windows, 1):
		if window.weekday not in WEEKDAYS:
			raise InvalidWindowError(
				f"Row {idx}: weekday must be between 0 and 6",
				window=window.as_dict(),
			)

		if window.start_hour not in HOURS or window.end_hour not in HOURS:
			raise InvalidWindowError(
				f"Row {idx}: hours must be between 0 and 23",
				window=window.as_dict(),
			)

		# A window never wraps past midnight
		if window.start_hour > window.end_hour:
			raise InvalidWindowError(
				f"Row {idx}: start hour ({window.start_hour}) must not be after end hour ({window.end_hour})",
				window=window.as_dict(),
			)
