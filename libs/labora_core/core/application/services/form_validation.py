"""
Validação pura dos formulários (cliente, orçamento, login/cadastro).

Cada função recebe o DTO tipado e devolve a lista de `FieldError`
(caminho + mensagem localizada); lista vazia significa válido.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from email_validator import EmailNotValidError, validate_email

from labora_core.core.application.dtos.auth_dto import CredentialsInput, SignUpInput
from labora_core.core.application.dtos.client_dto import AddressInput, ClientInput
from labora_core.core.application.dtos.quote_dto import QuoteInput
from labora_core.core.domain.exceptions import FieldError
from labora_core.core.domain.services.document_validator import (
    format_cnpj,
    format_cpf,
    format_phone,
    format_postal_code,
    format_tax_id,
    validate_cnpj,
    validate_cpf,
    validate_tax_id,
)

NAME_MAX = 100
DESCRIPTION_MAX = 1000
PAYMENT_METHOD_MAX = 100
OBSERVATIONS_MAX = 500
PASSWORD_MIN = 6

NAME_RE = re.compile(r"^[a-zA-ZÀ-ÿ\s]*$")
CPF_RE = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")
CNPJ_RE = re.compile(r"^\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}$")
PHONE_RE = re.compile(r"^\(\d{2}\)\s\d{5}-\d{4}$")
CEP_RE = re.compile(r"^\d{5}-\d{3}$")

UFS = frozenset({
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
})


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def parse_amount(value) -> Decimal | None:
    """Aceita 1234.5, "1234.50" ou "1.234,50"; None quando não numérico."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    text = str(value).strip().replace("R$", "").strip()
    if not text:
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def _name_errors(path: str, value: str, required_msg: str) -> list[FieldError]:
    value = (value or "").strip()
    if not value:
        return [FieldError(path, required_msg)]
    if len(value) > NAME_MAX:
        return [FieldError(path, "Nome muito longo")]
    if not NAME_RE.match(value):
        return [FieldError(path, "Nome deve conter apenas letras")]
    return []


def _address_errors(addr: AddressInput) -> list[FieldError]:
    errors = []
    required = (
        ("street", "Rua é obrigatória"),
        ("number", "Número é obrigatório"),
        ("neighborhood", "Bairro é obrigatório"),
        ("city", "Cidade é obrigatória"),
        ("state", "Estado é obrigatório"),
    )
    for field_name, msg in required:
        if not (getattr(addr, field_name) or "").strip():
            errors.append(FieldError(f"address.{field_name}", msg))

    state = (addr.state or "").strip()
    if state and state.upper() not in UFS:
        errors.append(FieldError("address.state", "Estado inválido"))

    cep = (addr.zip_code or "").strip()
    if not cep:
        errors.append(FieldError("address.zip_code", "CEP é obrigatório"))
    elif not CEP_RE.match(cep):
        errors.append(FieldError("address.zip_code", "CEP inválido"))
    return errors


# ───────────────────────────────────────────────
# Cliente
# ───────────────────────────────────────────────
def normalize_client(data: ClientInput) -> ClientInput:
    """Aplica as máscaras de exibição antes de validar/persistir."""
    cpf = (data.cpf or "").strip()
    cnpj = (data.cnpj or "").strip()
    address = data.address.model_copy(update={
        "zip_code": format_postal_code(data.address.zip_code) if data.address.zip_code else "",
        "state": (data.address.state or "").strip().upper(),
        "complement": (data.address.complement or "").strip() or None,
    })
    return data.model_copy(update={
        "full_name": data.full_name.strip(),
        "email": data.email.strip(),
        "cpf": format_cpf(cpf) if cpf else None,
        "cnpj": format_cnpj(cnpj) if cnpj else None,
        "phone": format_phone(data.phone) if data.phone else "",
        "address": address,
    })


def validate_client(data: ClientInput) -> list[FieldError]:
    errors = _name_errors("full_name", data.full_name, "Nome completo é obrigatório")

    email = (data.email or "").strip()
    if not email:
        errors.append(FieldError("email", "E-mail é obrigatório"))
    elif not is_valid_email(email):
        errors.append(FieldError("email", "E-mail inválido"))

    cpf = (data.cpf or "").strip()
    cnpj = (data.cnpj or "").strip()
    if cpf and not (CPF_RE.match(cpf) and validate_cpf(cpf)):
        errors.append(FieldError("cpf", "CPF inválido"))
    if cnpj and not (CNPJ_RE.match(cnpj) and validate_cnpj(cnpj)):
        errors.append(FieldError("cnpj", "CNPJ inválido"))
    if bool(cpf) == bool(cnpj):
        errors.append(FieldError("cpf", "Preencha CPF ou CNPJ (não ambos)"))

    phone = (data.phone or "").strip()
    if not phone:
        errors.append(FieldError("phone", "Telefone é obrigatório"))
    elif not PHONE_RE.match(phone):
        errors.append(FieldError("phone", "Telefone inválido"))

    errors.extend(_address_errors(data.address))
    return errors


# ───────────────────────────────────────────────
# Orçamento
# ───────────────────────────────────────────────
def normalize_quote(data: QuoteInput) -> QuoteInput:
    document = (data.client_document or "").strip()
    return data.model_copy(update={
        "client_name": (data.client_name or "").strip(),
        "client_document": format_tax_id(document) if document else "",
        "service_description": (data.service_description or "").strip(),
        "observations": (data.observations or "").strip() or None,
        "payment_method": (data.payment_method or "").strip(),
    })


def validate_quote(data: QuoteInput) -> list[FieldError]:
    errors = _name_errors("client_name", data.client_name, "Nome do cliente é obrigatório")

    document = (data.client_document or "").strip()
    if not document:
        errors.append(FieldError("client_document", "Documento do cliente é obrigatório"))
    elif not validate_tax_id(document):
        errors.append(FieldError("client_document", "CPF ou CNPJ inválido"))

    description = (data.service_description or "").strip()
    if not description:
        errors.append(FieldError("service_description", "Descrição do serviço é obrigatória"))
    elif len(description) > DESCRIPTION_MAX:
        errors.append(FieldError("service_description", "Descrição muito longa"))

    if data.observations and len(data.observations.strip()) > OBSERVATIONS_MAX:
        errors.append(FieldError("observations", "Observações muito longas"))

    if data.value is None or str(data.value).strip() == "":
        errors.append(FieldError("value", "Valor é obrigatório"))
    else:
        amount = parse_amount(data.value)
        if amount is None or amount <= 0:
            errors.append(FieldError("value", "Valor deve ser maior que zero"))

    payment = (data.payment_method or "").strip()
    if not payment:
        errors.append(FieldError("payment_method", "Método de pagamento é obrigatório"))
    elif len(payment) > PAYMENT_METHOD_MAX:
        errors.append(FieldError("payment_method", "Método de pagamento muito longo"))
    return errors


# ───────────────────────────────────────────────
# Login / cadastro
# ───────────────────────────────────────────────
def validate_credentials(data: CredentialsInput) -> list[FieldError]:
    errors = []
    if not is_valid_email((data.email or "").strip()):
        errors.append(FieldError("email", "Email inválido"))
    if len(data.password or "") < PASSWORD_MIN:
        errors.append(FieldError("password", "A senha deve ter no mínimo 6 caracteres"))
    return errors


def validate_sign_up(data: SignUpInput) -> list[FieldError]:
    errors = validate_credentials(data)
    if data.password != data.confirm_password:
        errors.append(FieldError("confirm_password", "As senhas não coincidem"))
    return errors
