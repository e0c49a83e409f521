from labora_core.core.application.cqrs import QueryHandler
from labora_core.core.application.queries.catalog_queries import (
    GetServiceQuery,
    ListServiceCategoriesQuery,
    ListServicesQuery,
)
from labora_core.core.domain.entities.service_catalog_entity import ServiceCategoryEntity, ServiceEntity
from labora_core.core.domain.exceptions import NotFoundError
from labora_core.core.domain.repositories.service_catalog_repository import ServiceCatalogRepository


class ListServiceCategoriesHandler(QueryHandler[ListServiceCategoriesQuery, list[ServiceCategoryEntity]]):
    def __init__(self, repo: ServiceCatalogRepository):
        self.repo = repo

    def handle(self, query: ListServiceCategoriesQuery) -> list[ServiceCategoryEntity]:
        return self.repo.list_categories()


class ListServicesHandler(QueryHandler[ListServicesQuery, list[ServiceEntity]]):
    def __init__(self, repo: ServiceCatalogRepository):
        self.repo = repo

    def handle(self, query: ListServicesQuery) -> list[ServiceEntity]:
        filtros = query.filtros or {}
        return self.repo.list_services(filtros.get("category_id") or None)


class GetServiceHandler(QueryHandler[GetServiceQuery, ServiceEntity]):
    def __init__(self, repo: ServiceCatalogRepository):
        self.repo = repo

    def handle(self, query: GetServiceQuery) -> ServiceEntity:
        service = self.repo.find_service(query.service_id)
        if service is None:
            raise NotFoundError(f"Serviço {query.service_id} não encontrado.")
        return service
