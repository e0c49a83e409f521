from abc import ABC, abstractmethod

from labora_core.core.application.cqrs import PagedResult
from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus


class QuoteRepository(ABC):
    @abstractmethod
    def find_by_id(self, quote_id: str) -> QuoteEntity | None:
        """Recupera um orçamento por ID."""
        ...

    @abstractmethod
    def save(self, quote: QuoteEntity) -> QuoteEntity:
        """Insere um orçamento; o número sequencial é atribuído pelo armazenamento."""
        ...

    @abstractmethod
    def update_if_pending(self, quote: QuoteEntity) -> QuoteEntity | None:
        """
        Atualiza os campos editáveis somente se o orçamento ainda estiver pendente.
        Devolve None quando nenhuma linha foi alterada.
        """
        ...

    @abstractmethod
    def update_status_if_pending(
        self,
        quote_id: str,
        status: QuoteStatus,
        justification: str | None = None,
    ) -> QuoteEntity | None:
        """
        Update condicional (id = X AND status = pending) com status e
        justificativa na mesma escrita. Devolve None quando nenhuma linha
        foi alterada.
        """
        ...

    @abstractmethod
    def list_all(self, status: QuoteStatus | None = None) -> list[QuoteEntity]:
        """Todos os orçamentos (opcionalmente por status), mais recentes primeiro."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[QuoteEntity]:
        """Retorna PagedResult de orçamentos, mais recentes primeiro."""
        ...
