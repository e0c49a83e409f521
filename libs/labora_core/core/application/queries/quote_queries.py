from dataclasses import dataclass

from labora_core.core.application.cqrs import PaginatedQueryDTO, QueryDTO


@dataclass(frozen=True)
class GetQuoteQuery(QueryDTO):
    quote_id: str


@dataclass(frozen=True)
class ListQuotesQuery(PaginatedQueryDTO):
    """
    Query para listar orçamentos; `filtros` aceita `status`.
    """
    pass


@dataclass(frozen=True)
class SearchApprovedQuotesQuery(QueryDTO):
    """
    Localiza orçamentos aprovados por número, nome do cliente ou documento.
    """
    term: str
