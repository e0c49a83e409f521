from __future__ import annotations

from labora_core.adapters.api_clients.store_api_client import StoreAPIClient, eq
from labora_core.core.domain.entities.service_catalog_entity import ServiceCategoryEntity, ServiceEntity
from labora_core.core.domain.repositories.service_catalog_repository import ServiceCatalogRepository


class ServiceCatalogRepoImpl(ServiceCatalogRepository):
    """Tabelas `service_categories` e `services` (somente leitura)."""

    def __init__(self, store: StoreAPIClient) -> None:
        self.store = store

    def list_categories(self) -> list[ServiceCategoryEntity]:
        rows, _ = self.store.select("service_categories", order="name.asc")
        return [ServiceCategoryEntity(id=str(r["id"]), name=r["name"]) for r in rows]

    def list_services(self, category_id: str | None = None) -> list[ServiceEntity]:
        filters = {"category_id": eq(category_id)} if category_id else None
        rows, _ = self.store.select("services", filters=filters, order="name.asc")
        return [ServiceEntity.from_dict(r) for r in rows]

    def find_service(self, service_id: str) -> ServiceEntity | None:
        rows, _ = self.store.select("services", filters={"id": eq(service_id)}, limit=1)
        return ServiceEntity.from_dict(rows[0]) if rows else None
