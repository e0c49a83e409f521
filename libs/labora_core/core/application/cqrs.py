from __future__ import annotations

import math
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

import structlog

from labora_core.core.domain.events.events import DomainEvent
from labora_core.core.domain.exceptions import LaboraError
from labora_core.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# Mensagens de escrita/leitura e buses que as roteiam
# ───────────────────────────────────────────────
C = TypeVar('C')  # Command type
Q = TypeVar('Q')  # Query filtros type
R = TypeVar('R')  # Query result type
T = TypeVar('T')  # PagedResult item type

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CommandDTO:
    """Base para comandos de escrita (cadastro, edição, transição de status)."""


@dataclass(frozen=True)
class QueryDTO(Generic[Q]):
    """Base para consultas; `filtros` carrega os critérios aceitos pela consulta."""
    filtros: Q


@dataclass(frozen=True)
class PaginatedQueryDTO(Generic[Q]):
    filtros: Q
    page: int = 1
    page_size: int = 50


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """Uma página de resultados; `total` conta todas as linhas que casam com os filtros."""
    items: Sequence[T]
    total: int
    page: int
    page_size: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        pages = math.ceil(self.total / self.page_size) if self.page_size > 0 else 0
        object.__setattr__(self, 'total_pages', pages)


class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any: ...


class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: QueryDTO[Q]) -> R: ...


class HandlerNotRegistered(LookupError):
    """Mensagem despachada sem handler registrado: erro de montagem do container."""


class _MessageBus:
    """Roteia cada mensagem para o handler do seu tipo e registra duração e falhas."""

    kind = "message"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        if message_type in self._handlers:
            logger.warning("bus.handler_replaced", kind=self.kind, message_type=message_type.__name__)
        self._handlers[message_type] = handler

    def dispatch(self, message: Any) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if handler is None:
            raise HandlerNotRegistered(f"Nenhum handler de {self.kind} para {name}")

        log = logger.bind(kind=self.kind, message_type=name)
        start = time.perf_counter()
        try:
            result = handler.handle(message)
        except LaboraError as exc:
            # erros de domínio viram resposta HTTP; não são falhas do bus
            log.info("bus.rejected", error=type(exc).__name__, duration_ms=_ms_since(start))
            raise
        except Exception:
            log.error("bus.failed", duration_ms=_ms_since(start), exc_info=True)
            raise
        log.info("bus.handled", duration_ms=_ms_since(start))
        return result


class CommandBusImpl(_MessageBus):
    """
    Bus de escrita. Depois do handler, publica os eventos de domínio que ele
    produziu: o próprio resultado, quando é um DomainEvent, ou `result.events`
    (ex.: TransitionResult de aprovação/rejeição).
    """

    kind = "command"

    def __init__(self, dispatcher: EventDispatcher):
        super().__init__()
        self.dispatcher = dispatcher

    def dispatch(self, command: Any) -> Any:
        result = super().dispatch(command)
        for evt in _events_of(result):
            self.dispatcher.dispatch(evt)
        return result


class QueryBusImpl(_MessageBus):
    """Bus de leitura: nunca publica eventos."""

    kind = "query"


def _events_of(result: Any) -> Iterable[DomainEvent]:
    if isinstance(result, DomainEvent):
        return (result,)
    return getattr(result, "events", ())


def _ms_since(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
