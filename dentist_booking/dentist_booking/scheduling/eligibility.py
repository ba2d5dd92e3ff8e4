"""
Eligibility Evaluator

Combines the availability calendar with the per-client quota to accept
or reject a booking. Pure functions: the current load is read by the
ledger inside the client's quota guard and passed in.
"""

from datetime import datetime

from .availability import is_open
from .errors import NotAvailableError, QuotaExceededError
from .models import Actor, Decision, Provider, Role


def is_privileged(actor: Actor) -> bool:
	"""Administrators skip the quota and the ownership checks."""
	return actor.role == Role.ADMINISTRATOR


def evaluate(
	actor: Actor,
	provider: Provider,
	requested_at: datetime,
	current_load: int,
	quota: int,
) -> Decision:
	"""
	Evalúa una solicitud de cita.

	Reglas, en orden (se detiene en la primera que falla):
		1. El horario debe caer en algún window del dentista
		2. Si el actor no es administrador, current_load debe ser < quota
		3. Accepted

	La disponibilidad se revisa primero para que el error sea útil aunque
	la cuota ya esté agotada.
	"""
	if not is_open(provider.availability, requested_at):
		return Decision.REJECTED_NOT_AVAILABLE

	if not is_privileged(actor) and current_load >= quota:
		return Decision.REJECTED_QUOTA_EXCEEDED

	return Decision.ACCEPTED


def raise_for_decision(
	decision: Decision,
	actor: Actor,
	provider: Provider,
	requested_at: datetime,
	quota: int,
) -> None:
	"""Raise the rejection matching ``decision``; do nothing when accepted."""
	if decision == Decision.REJECTED_NOT_AVAILABLE:
		raise NotAvailableError(
			f"Dentist {provider.name} is not available on {requested_at.strftime('%A %H:%M')}",
			provider_id=provider.id,
			requested_at=requested_at.isoformat(),
		)

	if decision == Decision.REJECTED_QUOTA_EXCEEDED:
		raise QuotaExceededError(
			f"User {actor.id} has already made {quota} appointment(s)",
			actor_id=actor.id,
			quota=quota,
		)
