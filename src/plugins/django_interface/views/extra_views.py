from dataclasses import asdict

from rest_framework.response import Response
from rest_framework.views import APIView

from labora_core.adapters.observability.decorators import track_http
from labora_core.core.application.queries.dashboard_queries import GetDashboardSummaryQuery
from labora_core.core.application.queries.quote_queries import GetQuoteQuery, SearchApprovedQuotesQuery
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from plugins.django_interface.permissions import HasStoreSession
from plugins.django_interface.serializers.core_serializers import QuoteSerializer
from plugins.django_interface.views.core_views import query_bus


# ╭──────────────────────────────────────────────╮
# │      DASHBOARD SUMMARY                       │
# ╰──────────────────────────────────────────────╯
class DashboardSummaryView(APIView):
    permission_classes = [HasStoreSession]

    @track_http("DashboardSummaryView_get")
    def get(self, request):
        res = query_bus().dispatch(GetDashboardSummaryQuery(filtros={}))
        return Response(asdict(res))


# ╭──────────────────────────────────────────────╮
# │      CONTRATOS: BUSCA DE APROVADOS           │
# ╰──────────────────────────────────────────────╯
class ContractSearchView(APIView):
    """
    GET /api/contracts/search?q=<termo>[&quote_id=<id>]

    Lista orçamentos aprovados que casam com o termo. O orçamento
    pré-selecionado vem de `quote_id` (só se aprovado) ou, sem ele, do
    único resultado.
    """
    permission_classes = [HasStoreSession]

    @track_http("ContractSearchView_get")
    def get(self, request):
        term = request.query_params.get("q", "")
        results = QuoteSerializer(
            query_bus().dispatch(SearchApprovedQuotesQuery(filtros={}, term=term)), many=True
        ).data

        selected = results[0] if len(results) == 1 else None
        quote_id = request.query_params.get("quote_id")
        if quote_id:
            quote = query_bus().dispatch(GetQuoteQuery(filtros={}, quote_id=quote_id))
            selected = QuoteSerializer(quote).data if quote.status is QuoteStatus.APPROVED else None

        return Response({"results": results, "selected": selected})
