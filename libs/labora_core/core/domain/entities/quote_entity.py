from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from labora_core.core.domain.entities._base import EntityMixin


class QuoteStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return self is not QuoteStatus.PENDING


STATUS_LABELS = {
    QuoteStatus.PENDING: "Pendente",
    QuoteStatus.APPROVED: "Aprovado",
    QuoteStatus.REJECTED: "Rejeitado",
}

PAYMENT_METHODS = (
    "À vista",
    "Cartão de crédito",
    "Cartão de débito",
    "PIX",
    "Boleto",
    "Transferência",
)


def to_decimal(value: Any) -> Decimal:
    """Converte valores vindos do JSON (float/str/int) em Decimal com 2 casas."""
    if value is None or value == "":
        return Decimal("0.00")
    try:
        return Decimal(str(value)).quantize(Decimal("0.01"))
    except InvalidOperation as exc:
        raise ValueError(f"Valor monetário inválido: {value!r}") from exc


@dataclass(slots=True)
class QuoteEntity(EntityMixin):
    id: str | None
    number: int | None
    client_name: str
    client_document: str
    service_description: str
    value: Decimal
    payment_method: str
    status: QuoteStatus = QuoteStatus.PENDING
    observations: str | None = None
    rejection_justification: str | None = None
    client_id: str | None = None
    service_id: str | None = None
    category_id: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    @property
    def status_label(self) -> str:
        return self.status.label

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuoteEntity:
        created = data.get("created_at")
        if isinstance(created, str):
            created = datetime.fromisoformat(created.replace("Z", "+00:00"))
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            number=int(data["number"]) if data.get("number") is not None else None,
            client_name=data.get("client_name") or "",
            client_document=data.get("client_document") or "",
            service_description=data.get("service_description") or "",
            value=to_decimal(data.get("value")),
            payment_method=data.get("payment_method") or "",
            status=QuoteStatus(data.get("status") or QuoteStatus.PENDING.value),
            observations=data.get("observations") or None,
            rejection_justification=data.get("rejection_justification") or None,
            client_id=_opt_str(data.get("client_id")),
            service_id=_opt_str(data.get("service_id")),
            category_id=_opt_str(data.get("category_id")),
            user_id=_opt_str(data.get("user_id")),
            created_at=created,
        )

    def to_row(self) -> dict[str, Any]:
        """Linha no formato da tabela `quotes` (sem id / number / created_at)."""
        return {
            "client_name": self.client_name,
            "client_document": self.client_document,
            "client_id": self.client_id,
            "service_id": self.service_id,
            "category_id": self.category_id,
            "service_description": self.service_description,
            "observations": self.observations,
            "value": str(self.value),
            "payment_method": self.payment_method,
            "status": self.status.value,
            "rejection_justification": self.rejection_justification,
            "user_id": self.user_id,
        }


def _opt_str(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None
