from dataclasses import dataclass

from labora_core.core.application.cqrs import PaginatedQueryDTO, QueryDTO


@dataclass(frozen=True)
class GetClientQuery(QueryDTO):
    """
    Query para recuperar um cliente por ID.
    """
    client_id: str


@dataclass(frozen=True)
class ListClientsQuery(PaginatedQueryDTO):
    """
    Query para listar clientes, mais recentes primeiro.
    """
    pass


@dataclass(frozen=True)
class SearchClientsQuery(QueryDTO):
    """
    Busca rápida por nome, CPF ou CNPJ (até 5 resultados) para preencher orçamentos.
    """
    term: str
