"""Identidade fixa da empresa contratada, usada em orçamentos e contratos."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Partner:
    name: str
    signature_name: str
    cpf: str


@dataclass(frozen=True)
class CompanyIdentity:
    trade_name: str
    legal_name: str
    cnpj: str
    street: str
    city: str
    phone: str
    email: str
    partners: tuple[Partner, ...]

    @property
    def contact_lines(self) -> list[str]:
        return [
            self.legal_name,
            f"CNPJ: {self.cnpj}",
            self.street,
            f"Tel: {self.phone}",
            f"E-mail: {self.email}",
        ]

    @property
    def address_line(self) -> str:
        return f"{self.street}, {self.city}"


LABORA_TECH = CompanyIdentity(
    trade_name="LABORA TECH",
    legal_name="Labora Tech - Soluções em Tecnologia",
    cnpj="55.707.870/0001-97",
    street="C1 LOTE 11, entrada C",
    city="Brasília-DF",
    phone="(61) 99815-9297",
    email="laborad.sign@gmail.com",
    partners=(
        Partner("HÉRICLES FRANCISCO SOUSA E SILVA", "Héricles Francisco Sousa e Silva", "109.775.426-02"),
        Partner("EZEQUIEL ALVES DE SOUZA", "Ezequiel Alves de Souza", "076.572.981-46"),
        Partner("BRUNA STÉFANE NOGUEIRA NUNES", "Bruna Stéfane Nogueira Nunes", "062.926.511-93"),
    ),
)
