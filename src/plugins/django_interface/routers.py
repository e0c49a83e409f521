from rest_framework.routers import DefaultRouter

from .views.core_views import (
    ClientViewSet,
    QuoteViewSet,
    ServiceCategoryViewSet,
    ServiceViewSet,
)

# lista de (rota, ViewSet)
RESOURCES = [
    ("clients",            ClientViewSet),
    ("quotes",             QuoteViewSet),
    ("service-categories", ServiceCategoryViewSet),
    ("services",           ServiceViewSet),
]

def build_router() -> DefaultRouter:
    router = DefaultRouter(trailing_slash=False)
    for prefix, viewset in RESOURCES:
        router.register(prefix, viewset, basename=prefix.replace('-', '_'))
    return router
