from datetime import tzinfo

from labora_core.core.application.dtos.dashboard_dto import DashboardDTO
from labora_core.core.application.queries.dashboard_queries import GetDashboardSummaryQuery
from labora_core.core.application.services.dashboard_service import DashboardService
from labora_core.core.application.services.utils.formatters import BrazilianFormatter
from labora_core.core.domain.repositories.quote_repository import QuoteRepository


class GetDashboardSummaryHandler:
    def __init__(
        self,
        quote_repo: QuoteRepository,
        formatter: BrazilianFormatter | None = None,
        tz: tzinfo | None = None,
    ):
        self.service = DashboardService(quote_repo, formatter, tz)

    def handle(self, query: GetDashboardSummaryQuery) -> DashboardDTO:
        return self.service.get_summary()
