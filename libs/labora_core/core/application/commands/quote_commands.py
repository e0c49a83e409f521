from dataclasses import dataclass

from labora_core.core.application.cqrs import CommandDTO
from labora_core.core.application.dtos.quote_dto import QuoteInput


@dataclass(frozen=True)
class CreateQuoteCommand(CommandDTO):
    payload: QuoteInput
    user_id: str | None = None


@dataclass(frozen=True)
class UpdateQuoteCommand(CommandDTO):
    """Edição de um orçamento ainda pendente."""
    id: str
    payload: QuoteInput


@dataclass(frozen=True)
class ApproveQuoteCommand(CommandDTO):
    id: str


@dataclass(frozen=True)
class RejectQuoteCommand(CommandDTO):
    id: str
    justification: str
