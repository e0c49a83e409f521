from dataclasses import dataclass

from labora_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class ListServiceCategoriesQuery(QueryDTO):
    pass


@dataclass(frozen=True)
class ListServicesQuery(QueryDTO):
    """`filtros` aceita `category_id`."""
    pass


@dataclass(frozen=True)
class GetServiceQuery(QueryDTO):
    service_id: str
