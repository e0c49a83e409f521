from __future__ import annotations

from labora_core.adapters.api_clients.store_api_client import StoreAPIClient, eq, ilike_any
from labora_core.core.application.cqrs import PagedResult
from labora_core.core.domain.entities.client_entity import ClientEntity
from labora_core.core.domain.exceptions import NotFoundError
from labora_core.core.domain.repositories.client_repository import ClientRepository

TABLE = "clients"
SEARCH_COLUMNS = ["full_name", "cpf", "cnpj"]


class ClientRepoImpl(ClientRepository):
    """Clientes na tabela `clients` do armazenamento externo."""

    def __init__(self, store: StoreAPIClient) -> None:
        self.store = store

    # ────────────────────────── consultas ──────────────────────────
    def find_by_id(self, client_id: str) -> ClientEntity | None:
        rows, _ = self.store.select(TABLE, filters={"id": eq(client_id)}, limit=1)
        return ClientEntity.from_dict(rows[0]) if rows else None

    def search(self, term: str, limit: int = 5) -> list[ClientEntity]:
        rows, _ = self.store.select(
            TABLE,
            or_=ilike_any(SEARCH_COLUMNS, term),
            order="full_name.asc",
            limit=limit,
        )
        return [ClientEntity.from_dict(r) for r in rows]

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ClientEntity]:
        page = max(page, 1)
        rows, total = self.store.select(
            TABLE,
            filters={k: eq(v) for k, v in filtros.items() if v not in (None, "")},
            order="created_at.desc",
            limit=page_size,
            offset=(page - 1) * page_size,
            count=True,
        )
        return PagedResult(
            items=[ClientEntity.from_dict(r) for r in rows],
            total=total or 0,
            page=page,
            page_size=page_size,
        )

    # ─────────────────────── persistência ───────────────────────
    def save(self, client: ClientEntity) -> ClientEntity:
        return ClientEntity.from_dict(self.store.insert(TABLE, client.to_row()))

    def update(self, client: ClientEntity) -> ClientEntity:
        rows = self.store.update(TABLE, client.to_row(), {"id": eq(client.id)})
        if not rows:
            raise NotFoundError(f"Cliente {client.id} não encontrado.")
        return ClientEntity.from_dict(rows[0])
