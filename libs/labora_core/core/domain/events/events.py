from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

# ╭──────────────────────────────────────────────╮
# │ Orçamentos                                  │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class QuoteApprovedEvent(DomainEvent):
    quote_id: str
    number: int | None

@dataclass(frozen=True)
class QuoteRejectedEvent(DomainEvent):
    quote_id: str
    number: int | None
    justification: str
