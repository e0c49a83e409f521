from decimal import Decimal

from pydantic import BaseModel


class QuoteInput(BaseModel):
    """Formulário de criação/edição de orçamento."""
    client_name: str = ""
    client_document: str = ""
    client_id: str | None = None
    service_id: str | None = None
    category_id: str | None = None
    service_description: str = ""
    observations: str | None = None
    value: Decimal | str | None = None
    payment_method: str = ""


class RejectQuoteInput(BaseModel):
    justification: str = ""
