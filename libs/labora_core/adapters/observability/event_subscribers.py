from labora_core.adapters.observability.metrics import QUOTE_TRANSITIONS
from labora_core.core.domain.events.events import QuoteApprovedEvent, QuoteRejectedEvent
from labora_core.core.domain.services.event_dispatcher import EventDispatcher


def count_quote_approved(event: QuoteApprovedEvent) -> None:
    QUOTE_TRANSITIONS.labels("approved").inc()


def count_quote_rejected(event: QuoteRejectedEvent) -> None:
    QUOTE_TRANSITIONS.labels("rejected").inc()


def register_metric_subscribers(dispatcher: EventDispatcher) -> None:
    dispatcher.subscribe(QuoteApprovedEvent, count_quote_approved)
    dispatcher.subscribe(QuoteRejectedEvent, count_quote_rejected)
