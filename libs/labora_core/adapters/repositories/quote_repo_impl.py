from __future__ import annotations

from labora_core.adapters.api_clients.store_api_client import StoreAPIClient, eq
from labora_core.core.application.cqrs import PagedResult
from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus
from labora_core.core.domain.repositories.quote_repository import QuoteRepository

TABLE = "quotes"
NEWEST_FIRST = "created_at.desc"

# campos que a edição de um orçamento pendente pode alterar
EDITABLE_FIELDS = (
    "client_name",
    "client_document",
    "client_id",
    "service_id",
    "category_id",
    "service_description",
    "observations",
    "value",
    "payment_method",
)


class QuoteRepoImpl(QuoteRepository):
    """
    Orçamentos na tabela `quotes`. O número sequencial e `created_at`
    são atribuídos pelo armazenamento.
    """

    def __init__(self, store: StoreAPIClient) -> None:
        self.store = store

    # ────────────────────────── consultas ──────────────────────────
    def find_by_id(self, quote_id: str) -> QuoteEntity | None:
        rows, _ = self.store.select(TABLE, filters={"id": eq(quote_id)}, limit=1)
        return QuoteEntity.from_dict(rows[0]) if rows else None

    def list_all(self, status: QuoteStatus | None = None) -> list[QuoteEntity]:
        filters = {"status": eq(status.value)} if status else None
        rows, _ = self.store.select(TABLE, filters=filters, order=NEWEST_FIRST)
        return [QuoteEntity.from_dict(r) for r in rows]

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[QuoteEntity]:
        page = max(page, 1)
        rows, total = self.store.select(
            TABLE,
            filters={k: eq(v) for k, v in filtros.items() if v not in (None, "")},
            order=NEWEST_FIRST,
            limit=page_size,
            offset=(page - 1) * page_size,
            count=True,
        )
        return PagedResult(
            items=[QuoteEntity.from_dict(r) for r in rows],
            total=total or 0,
            page=page,
            page_size=page_size,
        )

    # ─────────────────────── persistência ───────────────────────
    def save(self, quote: QuoteEntity) -> QuoteEntity:
        return QuoteEntity.from_dict(self.store.insert(TABLE, quote.to_row()))

    def update_if_pending(self, quote: QuoteEntity) -> QuoteEntity | None:
        row = quote.to_row()
        values = {k: row[k] for k in EDITABLE_FIELDS}
        rows = self.store.update(
            TABLE,
            values,
            {"id": eq(quote.id), "status": eq(QuoteStatus.PENDING.value)},
        )
        return QuoteEntity.from_dict(rows[0]) if rows else None

    def update_status_if_pending(
        self,
        quote_id: str,
        status: QuoteStatus,
        justification: str | None = None,
    ) -> QuoteEntity | None:
        values = {"status": status.value}
        if status is QuoteStatus.REJECTED:
            values["rejection_justification"] = justification
        rows = self.store.update(
            TABLE,
            values,
            {"id": eq(quote_id), "status": eq(QuoteStatus.PENDING.value)},
        )
        return QuoteEntity.from_dict(rows[0]) if rows else None
