from abc import ABC, abstractmethod

from labora_core.core.domain.entities.service_catalog_entity import ServiceCategoryEntity, ServiceEntity


class ServiceCatalogRepository(ABC):
    """Catálogo de serviços (somente leitura)."""

    @abstractmethod
    def list_categories(self) -> list[ServiceCategoryEntity]:
        ...

    @abstractmethod
    def list_services(self, category_id: str | None = None) -> list[ServiceEntity]:
        ...

    @abstractmethod
    def find_service(self, service_id: str) -> ServiceEntity | None:
        ...
