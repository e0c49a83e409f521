from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from labora_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class AddressEntity(EntityMixin):
    street: str
    number: str
    neighborhood: str
    city: str
    state: str
    zip_code: str
    complement: str | None = None


@dataclass(slots=True)
class ClientEntity(EntityMixin):
    id: str | None
    full_name: str
    email: str
    phone: str
    address: AddressEntity
    cpf: str | None = None
    cnpj: str | None = None
    is_whatsapp: bool = False
    created_at: datetime | None = None

    @property
    def document(self) -> str:
        """CPF ou CNPJ, o que estiver preenchido."""
        return self.cpf or self.cnpj or ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientEntity:
        addr = data.get("address") or {}
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            full_name=data["full_name"],
            email=data["email"],
            phone=data.get("phone") or "",
            address=addr if isinstance(addr, AddressEntity) else AddressEntity.from_dict({
                "street": addr.get("street", ""),
                "number": addr.get("number", ""),
                "neighborhood": addr.get("neighborhood", ""),
                "city": addr.get("city", ""),
                "state": addr.get("state", ""),
                "zip_code": addr.get("zip_code", ""),
                "complement": addr.get("complement") or None,
            }),
            cpf=data.get("cpf") or None,
            cnpj=data.get("cnpj") or None,
            is_whatsapp=bool(data.get("is_whatsapp", False)),
            created_at=data.get("created_at"),
        )

    def to_row(self) -> dict[str, Any]:
        """Linha no formato da tabela `clients` (sem id / created_at)."""
        return {
            "full_name": self.full_name,
            "email": self.email,
            "cpf": self.cpf,
            "cnpj": self.cnpj,
            "phone": self.phone,
            "is_whatsapp": self.is_whatsapp,
            "address": self.address.to_dict(),
        }
