from collections import defaultdict
from datetime import date, datetime, timedelta, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo

from labora_core.core.application.dtos.dashboard_dto import (
    DashboardDTO,
    MonthlyRevenueDTO,
    QuoteSummaryDTO,
    StatsDTO,
)
from labora_core.core.application.services.utils.formatters import BrazilianFormatter
from labora_core.core.application.services.utils.formatters import formatter as default_formatter
from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus
from labora_core.core.domain.repositories.quote_repository import QuoteRepository

RECENT_QUOTES = 5
REVENUE_MONTHS = 6
DEFAULT_TZ = ZoneInfo("America/Sao_Paulo")


class DashboardService:
    def __init__(
        self,
        quote_repo: QuoteRepository,
        formatter: BrazilianFormatter | None = None,
        tz: tzinfo | None = None,
    ):
        self.quote_repo = quote_repo
        self.formatter = formatter or default_formatter
        self.tz = tz or DEFAULT_TZ

    def _local_date(self, moment: datetime) -> date:
        """Data no fuso da empresa; timestamps sem fuso são tratados como já locais."""
        if moment.tzinfo is not None:
            moment = moment.astimezone(self.tz)
        return moment.date()

    # ▶ resumo de um orçamento
    def _build_quote_summary(self, quote: QuoteEntity) -> QuoteSummaryDTO:
        return QuoteSummaryDTO(
            id=quote.id or "",
            number=quote.number,
            client=quote.client_name,
            amount=self.formatter.format_currency(quote.value),
            date=self.formatter.format_date(self._local_date(quote.created_at) if quote.created_at else None),
            status=quote.status.value,
            status_label=quote.status.label,
        )

    # ▶ faturamento aprovado por mês (últimos N meses, incluindo o atual)
    def _build_monthly_revenue(
        self, quotes: list[QuoteEntity], today: date, months: int = REVENUE_MONTHS
    ) -> list[MonthlyRevenueDTO]:
        month_keys: list[date] = []
        cursor = today.replace(day=1)
        for _ in range(months):
            month_keys.append(cursor)
            cursor = (cursor - timedelta(days=1)).replace(day=1)
        month_keys.reverse()

        buckets: dict[date, Decimal] = defaultdict(Decimal)
        for q in quotes:
            if q.status is not QuoteStatus.APPROVED or q.created_at is None:
                continue
            buckets[self._local_date(q.created_at).replace(day=1)] += q.value

        return [
            MonthlyRevenueDTO(
                month=m.strftime("%Y-%m"),
                label=self.formatter.format_date(m, "abrev"),
                total=self.formatter.format_currency(buckets[m]),
                total_raw=float(buckets[m]),
            )
            for m in month_keys
        ]

    def get_summary(self, today: date | None = None) -> DashboardDTO:
        today = today or datetime.now(self.tz).date()
        quotes = self.quote_repo.list_all()  # mais recentes primeiro

        counts = {status: 0 for status in QuoteStatus}
        total = Decimal("0")
        approved_total = Decimal("0")
        for q in quotes:
            counts[q.status] += 1
            total += q.value
            if q.status is QuoteStatus.APPROVED:
                approved_total += q.value

        stats = StatsDTO(
            pendingCount=counts[QuoteStatus.PENDING],
            approvedCount=counts[QuoteStatus.APPROVED],
            rejectedCount=counts[QuoteStatus.REJECTED],
            totalValue=self.formatter.format_currency(total),
            approvedValue=self.formatter.format_currency(approved_total),
            totalQuotes=len(quotes),
        )

        return DashboardDTO(
            stats=stats,
            monthlyRevenue=self._build_monthly_revenue(quotes, today),
            recentQuotes=[self._build_quote_summary(q) for q in quotes[:RECENT_QUOTES]],
        )
