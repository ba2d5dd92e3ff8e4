"""
Appointment Ledger

Authoritative collection of appointments and dentists on top of an
injected Repository. Every write that depends on a client's current load
runs inside that client's quota guard so concurrent requests from the
same client cannot both pass the quota check.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .availability import validate_availability_set
from .config import BookingConfig
from .eligibility import evaluate, is_privileged, raise_for_decision
from .errors import ConflictError, ForbiddenError, NotFoundError
from .models import Actor, Appointment, Decision, Provider, ProviderDraft
from .repository import Repository


logger = logging.getLogger("dentist_booking")


class AppointmentLedger:
	"""
	Attributes:
		repository: storage backend
		config: quota settings
		clock: returns the current time, used for created_at
	"""

	def __init__(
		self,
		repository: Repository,
		config: Optional[BookingConfig] = None,
		clock: Callable[[], datetime] = datetime.now,
	) -> None:
		self.repository = repository
		self.config = config or BookingConfig()
		self.clock = clock

	@property
	def quota(self) -> int:
		return self.config.max_active_appointments

	# ===== APPOINTMENTS =====

	def create(self, actor: Actor, provider: Provider, scheduled_at: datetime) -> Appointment:
		"""
		Evalúa y persiste una cita nueva para el actor.

		Raises:
			NotAvailableError: el horario no está en la disponibilidad del dentista
			QuotaExceededError: el actor ya tiene Q citas confirmadas
		"""
		with self.repository.quota_guard(actor.id):
			current_load = self.repository.count_confirmed(actor.id)
			decision = evaluate(actor, provider, scheduled_at, current_load, self.quota)
			self._log_decision("create", actor, provider, scheduled_at, decision, current_load)
			raise_for_decision(decision, actor, provider, scheduled_at, self.quota)

			appointment = Appointment(
				id=None,
				client_id=actor.id,
				provider_id=provider.id,
				scheduled_at=scheduled_at,
				created_at=self.clock(),
			)
			appointment_id = self.repository.insert_appointment(appointment)

		return self.get(appointment_id)

	def get(self, appointment_id: str) -> Appointment:
		appointment = self.repository.find_appointment(appointment_id)
		if appointment is None:
			raise NotFoundError(
				f"No appointment with the id of {appointment_id}",
				appointment_id=appointment_id,
			)
		return appointment

	def list_for(self, actor: Actor, provider_id: Optional[str] = None) -> List[Appointment]:
		"""Administrators see every appointment; clients only their own."""
		client_id = None if is_privileged(actor) else actor.id
		return self.repository.list_appointments(client_id=client_id, provider_id=provider_id)

	def update(
		self,
		appointment_id: str,
		actor: Actor,
		new_scheduled_at: Optional[datetime] = None,
		provider_id: Optional[str] = None,
	) -> Appointment:
		"""
		Reprograma una cita existente.

		Orden de validación:
			1. La cita existe (NotFoundError)
			2. El actor es dueño o administrador (ForbiddenError)
			3. Si cambia horario o dentista, se re-evalúa contra el dentista destino

		id y created_at se conservan.
		"""
		appointment = self.get(appointment_id)
		self.ensure_can_modify(actor, appointment)

		if new_scheduled_at is None and (provider_id is None or provider_id == appointment.provider_id):
			return appointment

		target_provider_id = provider_id or appointment.provider_id
		target = self.get_provider(target_provider_id)
		target_time = new_scheduled_at or appointment.scheduled_at

		with self.repository.quota_guard(appointment.client_id):
			current_load = self.repository.count_confirmed(appointment.client_id)
			if self.config.exclude_rescheduled_from_quota:
				current_load = max(0, current_load - 1)

			decision = evaluate(actor, target, target_time, current_load, self.quota)
			self._log_decision("update", actor, target, target_time, decision, current_load)
			raise_for_decision(decision, actor, target, target_time, self.quota)

			return self.repository.replace_appointment(
				appointment_id,
				scheduled_at=target_time,
				provider_id=target.id,
			)

	def cancel(self, appointment_id: str, actor: Actor) -> None:
		"""Removes the appointment. Cancelling twice raises NotFoundError."""
		appointment = self.get(appointment_id)
		self.ensure_can_modify(actor, appointment)

		with self.repository.quota_guard(appointment.client_id):
			self.repository.delete_appointment(appointment_id)

		logger.info("Appointment %s cancelled by %s", appointment_id, actor.id)

	@staticmethod
	def ensure_can_modify(actor: Actor, appointment: Appointment) -> None:
		if appointment.client_id != actor.id and not is_privileged(actor):
			raise ForbiddenError(
				f"User {actor.id} is not authorized to access appointment {appointment.id}",
				actor_id=actor.id,
				appointment_id=appointment.id,
			)

	# ===== PROVIDERS =====

	def get_provider(self, provider_id: str) -> Provider:
		provider = self.repository.find_provider(provider_id)
		if provider is None:
			raise NotFoundError(
				f"No dentist with the id of {provider_id}",
				provider_id=provider_id,
			)
		return provider

	def list_providers(self) -> List[Provider]:
		return self.repository.list_providers()

	def save_provider(self, draft: ProviderDraft, provider_id: Optional[str] = None) -> Provider:
		"""
		Crea o actualiza un dentista.

		Las ventanas se validan antes de guardar; los nombres son únicos.
		"""
		draft.validate()
		validate_availability_set(draft.availability)

		if provider_id is not None:
			self.get_provider(provider_id)

		same_name = self.repository.find_provider_by_name(draft.name)
		if same_name is not None and same_name.id != provider_id:
			raise ConflictError(
				f"A dentist named {draft.name} already exists",
				provider_id=same_name.id,
			)

		provider = self.repository.save_provider(
			Provider(
				id=provider_id,
				name=draft.name,
				years_of_experience=draft.years_of_experience,
				specialty=draft.specialty,
				availability=draft.availability,
			)
		)
		logger.info("Dentist %s saved with %d window(s)", provider.id, len(provider.availability))
		return provider

	def delete_provider(self, provider_id: str) -> None:
		self.get_provider(provider_id)

		if self.repository.list_appointments(provider_id=provider_id):
			raise ConflictError(
				f"Dentist {provider_id} still has appointments",
				provider_id=provider_id,
			)

		self.repository.delete_provider(provider_id)

	def _log_decision(
		self,
		operation: str,
		actor: Actor,
		provider: Provider,
		requested_at: datetime,
		decision: Decision,
		current_load: int,
	) -> None:
		logger.info(
			"%s: actor=%s role=%s dentist=%s at=%s load=%d/%d -> %s",
			operation,
			actor.id,
			getattr(actor.role, "value", actor.role),
			provider.id,
			requested_at.isoformat(),
			current_load,
			self.quota,
			decision.value,
		)
