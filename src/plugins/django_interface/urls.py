from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

from config import settings
from labora_core.core.domain.company import LABORA_TECH

from .routers import build_router
from .views.auth_views import HealthCheckView, LoginView, LogoutView, MeView, RegisterView
from .views.extra_views import ContractSearchView, DashboardSummaryView

swagger_permissions = [permissions.IsAuthenticated] if not settings.DEBUG else [permissions.AllowAny]

schema_view = get_schema_view(
    openapi.Info(
        title="Labora Tech API",
        default_version="v1",
        description="Clientes, orçamentos e contratos da Labora Tech",
        contact=openapi.Contact(email=LABORA_TECH.email),
    ),
    public=settings.DEBUG,
    permission_classes=swagger_permissions,
)

router = build_router()

urlpatterns = [
    path("login/",    LoginView.as_view(),    name="login"),
    path("register/", RegisterView.as_view(), name="register"),
    path("logout/",   LogoutView.as_view(),   name="logout"),
    path("healthz/",  HealthCheckView.as_view(), name="healthz"),
    path("me/",       MeView.as_view(),       name="me"),
    path("dashboard-summary/", DashboardSummaryView.as_view(), name="dashboard-summary"),
    path("contracts/search",   ContractSearchView.as_view(),   name="contract-search"),

    path("swagger/",     schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("swagger.json", schema_view.without_ui(cache_timeout=0),         name="swagger-json"),
    path("redoc/",       schema_view.with_ui("redoc",   cache_timeout=0), name="redoc-ui"),

    path("", include(router.urls)),
]
