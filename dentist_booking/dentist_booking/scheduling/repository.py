"""
Booking Repository

Defines the storage interface the scheduling engine runs against, plus an
in-process implementation used by tests and standalone deployments.
"""

import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, List, Optional

from .errors import NotFoundError
from .models import Appointment, Provider


class Repository(ABC):
	"""
	Interfaz de persistencia para dentistas y citas.

	Todas las operaciones pueden lanzar StorageUnavailableError.
	"""

	# ===== PROVIDERS =====

	@abstractmethod
	def find_provider(self, provider_id: str) -> Optional[Provider]:
		"""Retorna el dentista o None si no existe."""
		pass

	@abstractmethod
	def find_provider_by_name(self, name: str) -> Optional[Provider]:
		pass

	@abstractmethod
	def list_providers(self) -> List[Provider]:
		pass

	@abstractmethod
	def save_provider(self, provider: Provider) -> Provider:
		"""
		Crea o reemplaza un dentista.

		Si provider.id es None se asigna uno nuevo.
		"""
		pass

	@abstractmethod
	def delete_provider(self, provider_id: str) -> None:
		pass

	# ===== APPOINTMENTS =====

	@abstractmethod
	def count_confirmed(self, client_id: str) -> int:
		"""Cantidad de citas confirmadas del cliente."""
		pass

	@abstractmethod
	def quota_guard(self, client_id: str) -> ContextManager[None]:
		"""
		Sección crítica por cliente.

		count_confirmed + insert_appointment ejecutados dentro del guard son
		atómicos respecto a otras solicitudes del mismo cliente. No serializa
		clientes distintos.
		"""
		pass

	@abstractmethod
	def insert_appointment(self, appointment: Appointment) -> str:
		"""Persiste la cita y retorna su id."""
		pass

	@abstractmethod
	def find_appointment(self, appointment_id: str) -> Optional[Appointment]:
		pass

	@abstractmethod
	def list_appointments(
		self,
		client_id: Optional[str] = None,
		provider_id: Optional[str] = None,
	) -> List[Appointment]:
		"""Citas filtradas, en orden de inserción."""
		pass

	@abstractmethod
	def replace_appointment(self, appointment_id: str, **fields) -> Appointment:
		pass

	@abstractmethod
	def delete_appointment(self, appointment_id: str) -> None:
		pass


class InMemoryRepository(Repository):
	"""Thread-safe dict-backed repository. Dicts keep insertion order."""

	def __init__(self) -> None:
		self._providers: Dict[str, Provider] = {}
		self._appointments: Dict[str, Appointment] = {}
		self._store_lock = threading.RLock()
		self._client_locks: Dict[str, threading.Lock] = {}
		self._client_locks_guard = threading.Lock()

	@staticmethod
	def _new_id() -> str:
		return uuid.uuid4().hex

	def find_provider(self, provider_id: str) -> Optional[Provider]:
		with self._store_lock:
			return self._providers.get(provider_id)

	def find_provider_by_name(self, name: str) -> Optional[Provider]:
		with self._store_lock:
			for provider in self._providers.values():
				if provider.name == name:
					return provider
		return None

	def list_providers(self) -> List[Provider]:
		with self._store_lock:
			return list(self._providers.values())

	def save_provider(self, provider: Provider) -> Provider:
		with self._store_lock:
			if provider.id is None:
				provider = Provider(
					id=self._new_id(),
					name=provider.name,
					years_of_experience=provider.years_of_experience,
					specialty=provider.specialty,
					availability=provider.availability,
				)
			self._providers[provider.id] = provider
			return provider

	def delete_provider(self, provider_id: str) -> None:
		with self._store_lock:
			if self._providers.pop(provider_id, None) is None:
				raise NotFoundError(f"No dentist with the id of {provider_id}")

	def count_confirmed(self, client_id: str) -> int:
		with self._store_lock:
			return sum(1 for a in self._appointments.values() if a.client_id == client_id)

	@contextmanager
	def quota_guard(self, client_id: str) -> Iterator[None]:
		with self._client_locks_guard:
			lock = self._client_locks.setdefault(client_id, threading.Lock())
		with lock:
			yield

	def insert_appointment(self, appointment: Appointment) -> str:
		with self._store_lock:
			appointment_id = appointment.id or self._new_id()
			self._appointments[appointment_id] = Appointment(
				id=appointment_id,
				client_id=appointment.client_id,
				provider_id=appointment.provider_id,
				scheduled_at=appointment.scheduled_at,
				created_at=appointment.created_at,
			)
			return appointment_id

	def find_appointment(self, appointment_id: str) -> Optional[Appointment]:
		with self._store_lock:
			return self._appointments.get(appointment_id)

	def list_appointments(
		self,
		client_id: Optional[str] = None,
		provider_id: Optional[str] = None,
	) -> List[Appointment]:
		with self._store_lock:
			return [
				a for a in self._appointments.values()
				if (client_id is None or a.client_id == client_id)
				and (provider_id is None or a.provider_id == provider_id)
			]

	def replace_appointment(self, appointment_id: str, **fields) -> Appointment:
		with self._store_lock:
			current = self._appointments.get(appointment_id)
			if current is None:
				raise NotFoundError(f"No appointment with the id of {appointment_id}")

			updated = Appointment(
				id=current.id,
				client_id=current.client_id,
				provider_id=fields.get("provider_id", current.provider_id),
				scheduled_at=fields.get("scheduled_at", current.scheduled_at),
				created_at=current.created_at,
			)
			self._appointments[appointment_id] = updated
			return updated

	def delete_appointment(self, appointment_id: str) -> None:
		with self._store_lock:
			if self._appointments.pop(appointment_id, None) is None:
				raise NotFoundError(f"No appointment with the id of {appointment_id}")
