from dataclasses import dataclass

from labora_core.core.application.cqrs import CommandDTO
from labora_core.core.application.dtos.client_dto import ClientInput


@dataclass(frozen=True)
class CreateClientCommand(CommandDTO):
    payload: ClientInput


@dataclass(frozen=True)
class UpdateClientCommand(CommandDTO):
    """Substituição completa dos dados de um cliente existente."""
    id: str
    payload: ClientInput
