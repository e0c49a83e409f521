from abc import ABC, abstractmethod

from labora_core.core.application.cqrs import PagedResult
from labora_core.core.domain.entities.client_entity import ClientEntity


class ClientRepository(ABC):
    @abstractmethod
    def find_by_id(self, client_id: str) -> ClientEntity | None:
        """Recupera um cliente por ID."""
        ...

    @abstractmethod
    def save(self, client: ClientEntity) -> ClientEntity:
        """Insere um novo cliente e devolve a linha criada."""
        ...

    @abstractmethod
    def update(self, client: ClientEntity) -> ClientEntity:
        """Substitui todos os campos de um cliente existente."""
        ...

    @abstractmethod
    def search(self, term: str, limit: int = 5) -> list[ClientEntity]:
        """
        Busca case-insensitive por substring em nome, CPF ou CNPJ.
        `term` já deve chegar sanitizado.
        """
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ClientEntity]:
        """
        Retorna PagedResult de clientes, mais recentes primeiro.

        - filtros: dicionário de filtros de igualdade
        - page: número da página (1-based)
        - page_size: quantidade de itens por página
        """
        ...
