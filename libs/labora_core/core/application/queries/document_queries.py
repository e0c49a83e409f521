from dataclasses import dataclass

from labora_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class RenderQuotePdfQuery(QueryDTO):
    quote_id: str


@dataclass(frozen=True)
class RenderContractTextQuery(QueryDTO):
    """Texto editável do contrato de um orçamento aprovado."""
    quote_id: str


@dataclass(frozen=True)
class RenderContractPdfQuery(QueryDTO):
    """
    PDF do contrato. Com `content`, o PDF reflete o texto editado à mão;
    sem ele, o contrato padrão é montado a partir do orçamento.
    """
    quote_id: str
    content: str | None = None
