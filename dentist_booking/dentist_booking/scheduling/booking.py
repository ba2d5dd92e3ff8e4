"""
Booking Service

Entry point used by the API layer. Resolves the dentist reference, stamps
the client from the authenticated actor and composes the availability
calendar, the eligibility evaluator and the ledger.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from .config import BookingConfig
from .eligibility import is_privileged
from .errors import ForbiddenError
from .ledger import AppointmentLedger
from .models import (
	Actor,
	Appointment,
	AvailabilityWindow,
	BookingRequest,
	Provider,
	ProviderDraft,
)
from .repository import Repository


class BookingService:
	"""
	Operaciones expuestas a la capa de transporte.

	Todos los rechazos se lanzan como subclases de BookingError.
	"""

	def __init__(
		self,
		repository: Repository,
		config: Optional[BookingConfig] = None,
		ledger: Optional[AppointmentLedger] = None,
	) -> None:
		self.config = config or BookingConfig()
		self.ledger = ledger or AppointmentLedger(repository, self.config)

	# ===== APPOINTMENTS =====

	def propose_appointment(self, actor: Actor, provider_id: str, requested_at: datetime) -> Appointment:
		request = BookingRequest(provider_id=provider_id, requested_at=requested_at).validate()
		provider = self.ledger.get_provider(request.provider_id)
		return self.ledger.create(actor, provider, request.requested_at)

	def get_appointment(self, actor: Actor, appointment_id: str) -> Appointment:
		appointment = self.ledger.get(appointment_id)
		self.ledger.ensure_can_modify(actor, appointment)
		return appointment

	def list_appointments(self, actor: Actor, provider_id: Optional[str] = None) -> List[Appointment]:
		return self.ledger.list_for(actor, provider_id=provider_id)

	def reschedule_appointment(
		self,
		actor: Actor,
		appointment_id: str,
		new_requested_at: Optional[datetime],
		provider_id: Optional[str] = None,
	) -> Appointment:
		# Ownership is decided before the payload is looked at
		appointment = self.ledger.get(appointment_id)
		self.ledger.ensure_can_modify(actor, appointment)

		if new_requested_at is not None or provider_id is not None:
			BookingRequest(
				provider_id=provider_id or appointment.provider_id,
				requested_at=new_requested_at or appointment.scheduled_at,
			).validate()

		return self.ledger.update(
			appointment_id,
			actor,
			new_scheduled_at=new_requested_at,
			provider_id=provider_id,
		)

	def cancel_appointment(self, actor: Actor, appointment_id: str) -> None:
		self.ledger.cancel(appointment_id, actor)

	# ===== PROVIDERS =====

	def get_provider(self, provider_id: str) -> Provider:
		return self.ledger.get_provider(provider_id)

	def list_providers(self) -> List[Provider]:
		return self.ledger.list_providers()

	def upsert_provider(
		self,
		actor: Actor,
		name: str,
		years_of_experience: int,
		specialty: str,
		windows: Iterable[AvailabilityWindow],
		provider_id: Optional[str] = None,
	) -> Provider:
		"""
		Crea o actualiza un dentista. Solo administradores.

		Raises:
			ForbiddenError: el actor no es administrador
			InvalidRequestError: campos faltantes o inválidos
			InvalidWindowError: ventanas vacías o con start_hour > end_hour
			ConflictError: ya existe otro dentista con ese nombre
		"""
		self._require_administrator(actor, "manage dentists")
		draft = ProviderDraft.build(name, years_of_experience, specialty, windows)
		return self.ledger.save_provider(draft, provider_id=provider_id)

	def delete_provider(self, actor: Actor, provider_id: str) -> None:
		self._require_administrator(actor, "delete dentists")
		self.ledger.delete_provider(provider_id)

	@staticmethod
	def _require_administrator(actor: Actor, action: str) -> None:
		if not is_privileged(actor):
			raise ForbiddenError(
				f"User {actor.id} is not authorized to {action}",
				actor_id=actor.id,
			)
