# ╭────────────────────────────────────────────────────────────────────────────╮
# │  ViewSets REST – Clientes, Orçamentos e Catálogo de serviços               │
# │                                                                            │
# │  • Filtro seguro   → só filtros conhecidos chegam ao repo                  │
# │  • Paginação DRY   → mix-in centralizado                                   │
# │  • Erros de domínio → labora_exception_handler                             │
# │  • Métrica trace   → decorator `track_http`                                │
# ╰────────────────────────────────────────────────────────────────────────────╯
from __future__ import annotations

import io
from typing import Any

from django.http import FileResponse
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from labora_core.adapters.config import composition_root
from labora_core.adapters.observability.decorators import track_http
from labora_core.core.application.commands.client_commands import CreateClientCommand, UpdateClientCommand
from labora_core.core.application.commands.quote_commands import (
    ApproveQuoteCommand,
    CreateQuoteCommand,
    RejectQuoteCommand,
    UpdateQuoteCommand,
)
from labora_core.core.application.cqrs import CommandBusImpl, QueryBusImpl
from labora_core.core.application.dtos.client_dto import ClientInput
from labora_core.core.application.dtos.document_dto import DocumentFileDTO
from labora_core.core.application.dtos.quote_dto import QuoteInput, RejectQuoteInput
from labora_core.core.application.queries.catalog_queries import (
    GetServiceQuery,
    ListServiceCategoriesQuery,
    ListServicesQuery,
)
from labora_core.core.application.queries.client_queries import (
    GetClientQuery,
    ListClientsQuery,
    SearchClientsQuery,
)
from labora_core.core.application.queries.document_queries import (
    RenderContractPdfQuery,
    RenderContractTextQuery,
    RenderQuotePdfQuery,
)
from labora_core.core.application.queries.quote_queries import GetQuoteQuery, ListQuotesQuery
from labora_core.core.domain.exceptions import FieldError, ValidationError
from plugins.django_interface.permissions import HasStoreSession

# ────────────────────────────────  Serializers  ───────────────────────────────
from ..serializers.core_serializers import (
    ClientSearchResultSerializer,
    ClientSerializer,
    QuoteSerializer,
    ServiceCategorySerializer,
    ServiceSerializer,
    TransitionResultSerializer,
)

# ───────────────────────────────  Constantes  ────────────────────────────────
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


# ───────────────────────────────  CQRS Buses  ────────────────────────────────
def command_bus() -> CommandBusImpl:
    return composition_root.container.command_bus()


def query_bus() -> QueryBusImpl:
    return composition_root.container.query_bus()


# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Helper mix-in – paginação + filtros                                      │
# ╰──────────────────────────────────────────────────────────────────────────╯
class PaginationFilterMixin:
    """Remove page/page_size do QueryDict e devolve filtros limpos."""

    @staticmethod
    def _pagination(request) -> tuple[int, int]:
        try:
            page = max(int(request.query_params.get("page", 1)), 1)
            size = int(request.query_params.get("page_size", DEFAULT_PAGE_SIZE))
        except ValueError:
            return 1, DEFAULT_PAGE_SIZE
        return page, min(max(size, 1), MAX_PAGE_SIZE)

    @staticmethod
    def _filters(request, allowed: tuple[str, ...] = ()) -> dict[str, Any]:
        """Aceita só os filtros de `allowed`, um valor cada; o resto vira 400."""
        params = request.query_params.copy()          # QueryDict mutável
        params.pop("page", None)
        params.pop("page_size", None)

        clean: dict[str, Any] = {}
        errors: list[FieldError] = []
        for key in params:
            values = params.getlist(key)
            if key not in allowed:
                errors.append(FieldError(key, "Filtro não suportado"))
            elif len(values) > 1:
                errors.append(FieldError(key, "Informe um único valor"))
            else:
                clean[key] = values[0]
        if errors:
            raise ValidationError(errors)
        return clean

    @staticmethod
    def _paged_payload(res, serializer_cls) -> dict[str, Any]:
        return {
            "results": serializer_cls(res.items, many=True).data,
            "total_items": res.total,
            "page": res.page,
            "page_size": res.page_size,
            "total_pages": res.total_pages,
            "items_on_page": len(res.items),
        }


def pdf_response(doc: DocumentFileDTO) -> FileResponse:
    response = FileResponse(io.BytesIO(doc.content), content_type=doc.content_type)
    response["Content-Disposition"] = f'attachment; filename="{doc.file_name}"'
    return response


# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Clientes                                                                 │
# ╰──────────────────────────────────────────────────────────────────────────╯
class ClientViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [HasStoreSession]

    @track_http("ClientViewSet_list")
    def list(self, request):
        filtros = self._filters(request)
        page, page_size = self._pagination(request)
        res = query_bus().dispatch(ListClientsQuery(filtros=filtros, page=page, page_size=page_size))
        return Response(self._paged_payload(res, ClientSerializer), status=status.HTTP_200_OK)

    @track_http("ClientViewSet_retrieve")
    def retrieve(self, request, pk=None):
        client = query_bus().dispatch(GetClientQuery(filtros={}, client_id=str(pk)))
        return Response(ClientSerializer(client).data)

    @track_http("ClientViewSet_create")
    def create(self, request):
        payload = ClientInput.model_validate(request.data)
        client = command_bus().dispatch(CreateClientCommand(payload=payload))
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    @track_http("ClientViewSet_update")
    def update(self, request, pk=None):
        payload = ClientInput.model_validate(request.data)
        client = command_bus().dispatch(UpdateClientCommand(id=str(pk), payload=payload))
        return Response(ClientSerializer(client).data)

    @track_http("ClientViewSet_search")
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request):
        term = request.query_params.get("q", "")
        clients = query_bus().dispatch(SearchClientsQuery(filtros={}, term=term))
        return Response({"results": ClientSearchResultSerializer(clients, many=True).data})


# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Orçamentos (+ documentos PDF e contrato)                                 │
# ╰──────────────────────────────────────────────────────────────────────────╯
class QuoteViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [HasStoreSession]

    @track_http("QuoteViewSet_list")
    def list(self, request):
        filtros = self._filters(request, allowed=("status",))
        page, page_size = self._pagination(request)
        res = query_bus().dispatch(ListQuotesQuery(filtros=filtros, page=page, page_size=page_size))
        return Response(self._paged_payload(res, QuoteSerializer), status=status.HTTP_200_OK)

    @track_http("QuoteViewSet_retrieve")
    def retrieve(self, request, pk=None):
        quote = query_bus().dispatch(GetQuoteQuery(filtros={}, quote_id=str(pk)))
        return Response(QuoteSerializer(quote).data)

    @track_http("QuoteViewSet_create")
    def create(self, request):
        payload = QuoteInput.model_validate(request.data)
        user_id = str(request.user.id) if getattr(request.user, "id", None) else None
        quote = command_bus().dispatch(CreateQuoteCommand(payload=payload, user_id=user_id))
        return Response(QuoteSerializer(quote).data, status=status.HTTP_201_CREATED)

    @track_http("QuoteViewSet_update")
    def update(self, request, pk=None):
        payload = QuoteInput.model_validate(request.data)
        quote = command_bus().dispatch(UpdateQuoteCommand(id=str(pk), payload=payload))
        return Response(QuoteSerializer(quote).data)

    @track_http("QuoteViewSet_approve")
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        result = command_bus().dispatch(ApproveQuoteCommand(id=str(pk)))
        return Response(TransitionResultSerializer(result).data)

    @track_http("QuoteViewSet_reject")
    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        payload = RejectQuoteInput.model_validate(request.data)
        result = command_bus().dispatch(RejectQuoteCommand(id=str(pk), justification=payload.justification))
        return Response(TransitionResultSerializer(result).data)

    @track_http("QuoteViewSet_pdf")
    @action(detail=True, methods=["get"])
    def pdf(self, request, pk=None):
        doc = query_bus().dispatch(RenderQuotePdfQuery(filtros={}, quote_id=str(pk)))
        return pdf_response(doc)

    @track_http("QuoteViewSet_contract")
    @action(detail=True, methods=["get"])
    def contract(self, request, pk=None):
        content = query_bus().dispatch(RenderContractTextQuery(filtros={}, quote_id=str(pk)))
        return Response({"content": content})

    @track_http("QuoteViewSet_contract_pdf")
    @action(detail=True, methods=["post"], url_path="contract-pdf")
    def contract_pdf(self, request, pk=None):
        content = request.data.get("content") if hasattr(request.data, "get") else None
        doc = query_bus().dispatch(RenderContractPdfQuery(filtros={}, quote_id=str(pk), content=content))
        return pdf_response(doc)


# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Catálogo de serviços (somente leitura)                                   │
# ╰──────────────────────────────────────────────────────────────────────────╯
class ServiceCategoryViewSet(viewsets.ViewSet):
    permission_classes = [HasStoreSession]

    @track_http("ServiceCategoryViewSet_list")
    def list(self, request):
        categories = query_bus().dispatch(ListServiceCategoriesQuery(filtros={}))
        return Response(ServiceCategorySerializer(categories, many=True).data)


class ServiceViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [HasStoreSession]

    @track_http("ServiceViewSet_list")
    def list(self, request):
        filtros = self._filters(request, allowed=("category_id",))
        services = query_bus().dispatch(ListServicesQuery(filtros=filtros))
        return Response(ServiceSerializer(services, many=True).data)

    @track_http("ServiceViewSet_retrieve")
    def retrieve(self, request, pk=None):
        service = query_bus().dispatch(GetServiceQuery(filtros={}, service_id=str(pk)))
        return Response(ServiceSerializer(service).data)
