from pydantic import BaseModel, Field


class AddressInput(BaseModel):
    street: str = ""
    number: str = ""
    complement: str | None = None
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class ClientInput(BaseModel):
    """Formulário de cadastro/edição de cliente (substituição completa)."""
    full_name: str = ""
    email: str = ""
    cpf: str | None = None
    cnpj: str | None = None
    phone: str = ""
    is_whatsapp: bool = False
    address: AddressInput = Field(default_factory=AddressInput)
