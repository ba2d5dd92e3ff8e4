"""
Scheduling Models

Value objects shared by the availability calendar, the eligibility
evaluator, the appointment ledger and the booking service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from .errors import InvalidRequestError


MAX_PROVIDER_NAME_LENGTH = 50


class Role(str, Enum):
	CLIENT = "client"
	ADMINISTRATOR = "administrator"


class Decision(str, Enum):
	"""Outcome of an eligibility evaluation."""

	ACCEPTED = "accepted"
	REJECTED_NOT_AVAILABLE = "rejected_not_available"
	REJECTED_QUOTA_EXCEEDED = "rejected_quota_exceeded"


@dataclass(frozen=True)
class Actor:
	"""Authenticated caller. Identity and role come from the auth layer."""

	id: str
	role: Role = Role.CLIENT


@dataclass(frozen=True)
class AvailabilityWindow:
	"""
	Recurring weekly open interval.

	weekday: 0 = Sunday ... 6 = Saturday
	start_hour / end_hour: 0..23, both inclusive
	"""

	weekday: int
	start_hour: int
	end_hour: int

	def as_dict(self) -> dict:
		return {
			"weekday": self.weekday,
			"start_hour": self.start_hour,
			"end_hour": self.end_hour,
		}


@dataclass(frozen=True)
class Provider:
	id: str
	name: str
	years_of_experience: int
	specialty: str
	availability: FrozenSet[AvailabilityWindow] = field(default_factory=frozenset)

	def as_dict(self) -> dict:
		return {
			"id": self.id,
			"name": self.name,
			"years_of_experience": self.years_of_experience,
			"specialty": self.specialty,
			"availability": [
				w.as_dict()
				for w in sorted(self.availability, key=lambda w: (w.weekday, w.start_hour, w.end_hour))
			],
		}


@dataclass(frozen=True)
class Appointment:
	"""
	A Confirmed appointment. A Proposed appointment is never stored;
	it only exists as a BookingRequest until the ledger accepts it.
	"""

	id: Optional[str]
	client_id: str
	provider_id: str
	scheduled_at: datetime
	created_at: datetime

	def as_dict(self) -> dict:
		return {
			"id": self.id,
			"client_id": self.client_id,
			"provider_id": self.provider_id,
			"scheduled_at": self.scheduled_at.isoformat(),
			"created_at": self.created_at.isoformat(),
		}


@dataclass(frozen=True)
class BookingRequest:
	"""Explicit booking payload, validated before it reaches the evaluator."""

	provider_id: str
	requested_at: datetime

	def validate(self) -> "BookingRequest":
		if not self.provider_id or not str(self.provider_id).strip():
			raise InvalidRequestError("A dentist is required to book an appointment")
		if not isinstance(self.requested_at, datetime):
			raise InvalidRequestError(
				"The appointment date must be a datetime",
				requested_at=repr(self.requested_at),
			)
		return self


@dataclass(frozen=True)
class ProviderDraft:
	"""Fields submitted when creating or updating a dentist."""

	name: str
	years_of_experience: int
	specialty: str
	availability: FrozenSet[AvailabilityWindow]

	@classmethod
	def build(
		cls,
		name: str,
		years_of_experience: int,
		specialty: str,
		windows: Iterable[AvailabilityWindow],
	) -> "ProviderDraft":
		return cls(
			name=(name or "").strip(),
			years_of_experience=years_of_experience,
			specialty=(specialty or "").strip(),
			availability=frozenset(windows or ()),
		)

	def validate(self) -> "ProviderDraft":
		if not self.name:
			raise InvalidRequestError("Please add a name")
		if len(self.name) > MAX_PROVIDER_NAME_LENGTH:
			raise InvalidRequestError(
				f"Name can not be more than {MAX_PROVIDER_NAME_LENGTH} characters"
			)
		if (
			isinstance(self.years_of_experience, bool)
			or not isinstance(self.years_of_experience, int)
			or self.years_of_experience < 0
		):
			raise InvalidRequestError("Please add years of experience")
		if not self.specialty:
			raise InvalidRequestError("Please add area of expertise")
		return self
