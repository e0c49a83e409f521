import re

import structlog

from labora_core.core.application.commands.client_commands import CreateClientCommand, UpdateClientCommand
from labora_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from labora_core.core.application.dtos.client_dto import ClientInput
from labora_core.core.application.queries.client_queries import (
    GetClientQuery,
    ListClientsQuery,
    SearchClientsQuery,
)
from labora_core.core.application.services.form_validation import normalize_client, validate_client
from labora_core.core.domain.entities.client_entity import ClientEntity
from labora_core.core.domain.exceptions import NotFoundError, ValidationError
from labora_core.core.domain.repositories.client_repository import ClientRepository

logger = structlog.get_logger(__name__)

SEARCH_LIMIT = 5
_SEARCH_STRIP_RE = re.compile(r"[^\w\s]")


def sanitize_search_term(term: str | None) -> str:
    """Remove tudo que não for letra, dígito ou espaço e passa para minúsculas."""
    return _SEARCH_STRIP_RE.sub("", term or "").strip().lower()


def _entity_from_input(data: ClientInput, client_id: str | None = None) -> ClientEntity:
    normalized = normalize_client(data)
    errors = validate_client(normalized)
    if errors:
        raise ValidationError(errors)
    payload = normalized.model_dump()
    payload["id"] = client_id
    return ClientEntity.from_dict(payload)


# ——— COMANDOS ————————————————————————————————————————————

class CreateClientHandler(CommandHandler[CreateClientCommand]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, command: CreateClientCommand) -> ClientEntity:
        entity = _entity_from_input(command.payload)
        saved = self.repo.save(entity)
        logger.info("client.created", client_id=saved.id)
        return saved


class UpdateClientHandler(CommandHandler[UpdateClientCommand]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, command: UpdateClientCommand) -> ClientEntity:
        entity = _entity_from_input(command.payload, client_id=command.id)
        updated = self.repo.update(entity)
        logger.info("client.updated", client_id=updated.id)
        return updated


# ——— QUERIES —————————————————————————————————————————————

class GetClientHandler(QueryHandler[GetClientQuery, ClientEntity]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, query: GetClientQuery) -> ClientEntity:
        client = self.repo.find_by_id(query.client_id)
        if client is None:
            raise NotFoundError(f"Cliente {query.client_id} não encontrado.")
        return client


class ListClientsHandler(QueryHandler[ListClientsQuery, PagedResult[ClientEntity]]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, query: ListClientsQuery) -> PagedResult[ClientEntity]:
        return self.repo.list(query.filtros or {}, page=query.page, page_size=query.page_size)


class SearchClientsHandler(QueryHandler[SearchClientsQuery, list[ClientEntity]]):
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def handle(self, query: SearchClientsQuery) -> list[ClientEntity]:
        term = sanitize_search_term(query.term)
        if not term:
            return []
        return self.repo.search(term, limit=SEARCH_LIMIT)
