from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from labora_core.core.domain.entities._base import EntityMixin
from labora_core.core.domain.entities.quote_entity import to_decimal


@dataclass(slots=True)
class ServiceCategoryEntity(EntityMixin):
    id: str
    name: str


@dataclass(slots=True)
class ServiceEntity(EntityMixin):
    id: str
    category_id: str
    name: str
    default_description: str | None = None
    base_price: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceEntity:
        price = data.get("base_price")
        return cls(
            id=str(data["id"]),
            category_id=str(data["category_id"]),
            name=data["name"],
            default_description=data.get("default_description") or None,
            base_price=to_decimal(price) if price not in (None, "") else None,
        )
