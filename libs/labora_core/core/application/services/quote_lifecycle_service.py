from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus
from labora_core.core.domain.events.events import DomainEvent, QuoteApprovedEvent, QuoteRejectedEvent
from labora_core.core.domain.exceptions import InvalidArgument, InvalidStateTransition, NotFoundError
from labora_core.core.domain.repositories.quote_repository import QuoteRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    quote: QuoteEntity
    changed: bool
    events: tuple[DomainEvent, ...] = field(default=())


class QuoteLifecycleService:
    """
    Máquina de estados do orçamento: pending → approved | rejected.

    A transição é gravada com update condicional (status = pending), de modo
    que dois cliques simultâneos não transicionam duas vezes. Update que não
    altera linha é reavaliado: já no estado alvo = sucesso sem mudança;
    outro estado = InvalidStateTransition.
    """

    def __init__(self, repo: QuoteRepository):
        self.repo = repo

    def approve(self, quote_id: str) -> TransitionResult:
        return self._transition(quote_id, QuoteStatus.APPROVED, None)

    def reject(self, quote_id: str, justification: str | None) -> TransitionResult:
        if not justification or not justification.strip():
            raise InvalidArgument("A justificativa é obrigatória para rejeitar o orçamento.")
        return self._transition(quote_id, QuoteStatus.REJECTED, justification)

    def _transition(self, quote_id: str, target: QuoteStatus, justification: str | None) -> TransitionResult:
        log = logger.bind(quote_id=quote_id, target=target.value)

        updated = self.repo.update_status_if_pending(quote_id, target, justification)
        if updated is not None:
            log.info("quote.transition", number=updated.number)
            return TransitionResult(updated, changed=True, events=(self._event_for(updated),))

        current = self.repo.find_by_id(quote_id)
        if current is None:
            raise NotFoundError(f"Orçamento {quote_id} não encontrado.")
        if current.status is target:
            log.info("quote.transition_noop", number=current.number)
            return TransitionResult(current, changed=False)

        log.warning("quote.transition_refused", current=current.status.value)
        raise InvalidStateTransition(current.status.value, target.value)

    @staticmethod
    def _event_for(quote: QuoteEntity) -> DomainEvent:
        if quote.status is QuoteStatus.REJECTED:
            return QuoteRejectedEvent(
                quote_id=quote.id,
                number=quote.number,
                justification=quote.rejection_justification or "",
            )
        return QuoteApprovedEvent(quote_id=quote.id, number=quote.number)
