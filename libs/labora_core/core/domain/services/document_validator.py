from __future__ import annotations

import re

CPF_LENGTH = 11
CNPJ_LENGTH = 14
PHONE_LENGTH = 11
CEP_LENGTH = 8


def only_digits(raw: str | None) -> str:
    return re.sub(r"\D+", "", raw or "")


# ───────────────────────────────────────────────
# Dígitos verificadores
# ───────────────────────────────────────────────
def _is_repeated(d: str) -> bool:
    # 000.000.000-00, 111.111.111-11 ... passam no cálculo, mas são inválidos
    return d == d[0] * len(d)


def _cpf_digit(d: str, first_weight: int) -> int:
    total = sum(int(n) * w for n, w in zip(d, range(first_weight, 1, -1)))
    rest = (total * 10) % 11
    return 0 if rest in (10, 11) else rest


def _cnpj_digit(d: str) -> int:
    # pesos 2..9 repetidos, da direita para a esquerda
    total = 0
    weight = 2
    for n in reversed(d):
        total += int(n) * weight
        weight = 2 if weight == 9 else weight + 1  # noqa: PLR2004
    rest = total % 11
    return 0 if rest < 2 else 11 - rest  # noqa: PLR2004


def validate_cpf(raw: str | None) -> bool:
    d = only_digits(raw)
    if len(d) != CPF_LENGTH or _is_repeated(d):
        return False
    return _cpf_digit(d[:9], 10) == int(d[9]) and _cpf_digit(d[:10], 11) == int(d[10])


def validate_cnpj(raw: str | None) -> bool:
    d = only_digits(raw)
    if len(d) != CNPJ_LENGTH or _is_repeated(d):
        return False
    return _cnpj_digit(d[:12]) == int(d[12]) and _cnpj_digit(d[:13]) == int(d[13])


def validate_tax_id(raw: str | None) -> bool:
    """
    CPF (11 dígitos) ou CNPJ (14 dígitos) com dígitos verificadores válidos.
    Qualquer outro tamanho é inválido. Nunca levanta exceção.
    """
    d = only_digits(raw)
    if len(d) == CPF_LENGTH:
        return validate_cpf(d)
    if len(d) == CNPJ_LENGTH:
        return validate_cnpj(d)
    return False


# ───────────────────────────────────────────────
# Máscaras de exibição
# ───────────────────────────────────────────────
def _mask(d: str, groups: list[tuple[int, str]]) -> str:
    """
    Insere separadores progressivamente: cada (posição, separador) só entra
    se houver dígitos depois da posição.
    """
    out = []
    start = 0
    for pos, sep in groups:
        if len(d) <= pos:
            break
        out.append(d[start:pos] + sep)
        start = pos
    out.append(d[start:])
    return "".join(out)


def format_cpf(raw: str | None) -> str:
    """000.000.000-00"""
    d = only_digits(raw)[:CPF_LENGTH]
    return _mask(d, [(3, "."), (6, "."), (9, "-")])


def format_cnpj(raw: str | None) -> str:
    """00.000.000/0000-00"""
    d = only_digits(raw)[:CNPJ_LENGTH]
    return _mask(d, [(2, "."), (5, "."), (8, "/"), (12, "-")])


def format_tax_id(raw: str | None) -> str:
    d = only_digits(raw)
    return format_cpf(d) if len(d) <= CPF_LENGTH else format_cnpj(d)


def format_phone(raw: str | None) -> str:
    """(00) 00000-0000 para celulares, (00) 0000-0000 para fixos."""
    d = only_digits(raw)[:PHONE_LENGTH]
    if len(d) <= 2:  # noqa: PLR2004
        return d
    ddd, number = d[:2], d[2:]
    split = 5 if len(number) == 9 else 4  # noqa: PLR2004
    if len(number) > split:
        number = f"{number[:split]}-{number[split:]}"
    return f"({ddd}) {number}"


def format_postal_code(raw: str | None) -> str:
    """00000-000"""
    d = only_digits(raw)[:CEP_LENGTH]
    return _mask(d, [(5, "-")])
