"""
Frappe Repository

Implements the scheduling Repository on top of the Dentist and
Dental Appointment DocTypes.
"""

import functools
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import frappe
from frappe.utils import get_datetime

from dentist_booking.dentist_booking.scheduling.errors import NotFoundError, StorageUnavailableError
from dentist_booking.dentist_booking.scheduling.models import Appointment, AvailabilityWindow, Provider
from dentist_booking.dentist_booking.scheduling.repository import Repository


DENTIST = "Dentist"
APPOINTMENT = "Dental Appointment"
APPOINTMENT_FIELDS = ["name", "client", "dentist", "scheduled_at", "creation"]


def _storage_call(method: Callable) -> Callable:
	"""Convierte timeouts y deadlocks de la base de datos en StorageUnavailableError."""

	@functools.wraps(method)
	def wrapper(*args, **kwargs):
		try:
			return method(*args, **kwargs)
		except (frappe.QueryTimeoutError, frappe.QueryDeadlockError) as e:
			frappe.logger("dentist_booking").warning(
				f"Storage unavailable in {method.__name__}: {str(e)}"
			)
			raise StorageUnavailableError(operation=method.__name__) from e

	return wrapper


def provider_from_doc(doc: Any) -> Provider:
	"""Construye un Provider desde un documento Dentist."""
	return Provider(
		id=doc.name,
		name=doc.dentist_name,
		years_of_experience=doc.years_of_experience or 0,
		specialty=doc.area_of_expertise,
		availability=frozenset(windows_from_rows(doc.available_datetime)),
	)


def windows_from_rows(rows: List[Any]) -> List[AvailabilityWindow]:
	return [
		AvailabilityWindow(
			weekday=row.weekday,
			start_hour=row.start_hour,
			end_hour=row.end_hour,
		)
		for row in rows or []
	]


def appointment_from_row(row: Dict[str, Any]) -> Appointment:
	return Appointment(
		id=row["name"],
		client_id=row["client"],
		provider_id=row["dentist"],
		scheduled_at=get_datetime(row["scheduled_at"]),
		created_at=get_datetime(row["creation"]),
	)


class FrappeRepository(Repository):
	"""
	Repository backed by the site database.

	The quota guard takes a row lock on the client's User record; it is held
	until the request transaction commits, so concurrent bookings for the
	same client serialize while other clients proceed. The count is a locking
	read, so it sees appointments committed by the previous lock holder.
	"""

	# ===== PROVIDERS =====

	@_storage_call
	def find_provider(self, provider_id: str) -> Optional[Provider]:
		if not provider_id or not frappe.db.exists(DENTIST, provider_id):
			return None
		return provider_from_doc(frappe.get_doc(DENTIST, provider_id))

	@_storage_call
	def find_provider_by_name(self, name: str) -> Optional[Provider]:
		provider_id = frappe.db.get_value(DENTIST, {"dentist_name": name}, "name")
		if not provider_id:
			return None
		return provider_from_doc(frappe.get_doc(DENTIST, provider_id))

	@_storage_call
	def list_providers(self) -> List[Provider]:
		names = frappe.get_all(DENTIST, pluck="name", order_by="creation asc")
		return [provider_from_doc(frappe.get_doc(DENTIST, name)) for name in names]

	@_storage_call
	def save_provider(self, provider: Provider) -> Provider:
		if provider.id:
			doc = frappe.get_doc(DENTIST, provider.id)
		else:
			doc = frappe.new_doc(DENTIST)

		doc.dentist_name = provider.name
		doc.years_of_experience = provider.years_of_experience
		doc.area_of_expertise = provider.specialty
		doc.set("available_datetime", [])
		for window in sorted(provider.availability, key=lambda w: (w.weekday, w.start_hour, w.end_hour)):
			doc.append("available_datetime", window.as_dict())

		doc.save(ignore_permissions=True)
		return provider_from_doc(doc)

	@_storage_call
	def delete_provider(self, provider_id: str) -> None:
		if not frappe.db.exists(DENTIST, provider_id):
			raise NotFoundError(f"No dentist with the id of {provider_id}")
		frappe.delete_doc(DENTIST, provider_id, ignore_permissions=True)

	# ===== APPOINTMENTS =====

	@_storage_call
	def count_confirmed(self, client_id: str) -> int:
		# Locking read: sees rows committed after this transaction's snapshot
		appointment = frappe.qb.DocType(APPOINTMENT)
		rows = (
			frappe.qb.from_(appointment)
			.select(appointment.name)
			.where(appointment.client == client_id)
			.for_update()
			.run()
		)
		return len(rows)

	@contextmanager
	def quota_guard(self, client_id: str) -> Iterator[None]:
		self._lock_client(client_id)
		yield

	@_storage_call
	def _lock_client(self, client_id: str) -> None:
		# SELECT ... FOR UPDATE on the client's User row
		frappe.db.get_value("User", client_id, "name", for_update=True)

	@_storage_call
	def insert_appointment(self, appointment: Appointment) -> str:
		doc = frappe.get_doc({
			"doctype": APPOINTMENT,
			"client": appointment.client_id,
			"dentist": appointment.provider_id,
			"scheduled_at": appointment.scheduled_at,
		})
		doc.flags.via_booking_service = True
		doc.insert(ignore_permissions=True)
		return doc.name

	@_storage_call
	def find_appointment(self, appointment_id: str) -> Optional[Appointment]:
		if not appointment_id:
			return None
		row = frappe.db.get_value(APPOINTMENT, appointment_id, APPOINTMENT_FIELDS, as_dict=True)
		if not row:
			return None
		return appointment_from_row(row)

	@_storage_call
	def list_appointments(
		self,
		client_id: Optional[str] = None,
		provider_id: Optional[str] = None,
	) -> List[Appointment]:
		filters = {}
		if client_id is not None:
			filters["client"] = client_id
		if provider_id is not None:
			filters["dentist"] = provider_id

		rows = frappe.get_all(
			APPOINTMENT,
			filters=filters,
			fields=APPOINTMENT_FIELDS,
			order_by="creation asc",
		)
		return [appointment_from_row(row) for row in rows]

	@_storage_call
	def replace_appointment(self, appointment_id: str, **fields) -> Appointment:
		if not frappe.db.exists(APPOINTMENT, appointment_id):
			raise NotFoundError(f"No appointment with the id of {appointment_id}")

		doc = frappe.get_doc(APPOINTMENT, appointment_id)
		if "scheduled_at" in fields:
			doc.scheduled_at = fields["scheduled_at"]
		if "provider_id" in fields:
			doc.dentist = fields["provider_id"]

		doc.flags.via_booking_service = True
		doc.save(ignore_permissions=True)
		return appointment_from_row(doc.as_dict())

	@_storage_call
	def delete_appointment(self, appointment_id: str) -> None:
		if not frappe.db.exists(APPOINTMENT, appointment_id):
			raise NotFoundError(f"No appointment with the id of {appointment_id}")
		frappe.delete_doc(APPOINTMENT, appointment_id, ignore_permissions=True)
