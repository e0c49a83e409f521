"""Dashboard summary: counts, totals and monthly approved revenue."""

from datetime import UTC, date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from labora_core.core.application.services.dashboard_service import DashboardService
from labora_core.core.application.services.utils.formatters import BrazilianFormatter
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from tests.helpers.fakes import InMemoryQuoteRepository, make_quote


def _at(year: int, month: int, day: int = 10) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=UTC)


class DashboardServiceTests(SimpleTestCase):
    def setUp(self) -> None:
        quotes = [
            make_quote(number=1, value=Decimal("1000.00"), status=QuoteStatus.APPROVED, created_at=_at(2026, 10)),
            make_quote(number=2, value=Decimal("500.00"), status=QuoteStatus.APPROVED, created_at=_at(2026, 8)),
            make_quote(number=3, value=Decimal("300.00"), status=QuoteStatus.REJECTED, created_at=_at(2026, 9)),
            make_quote(number=4, value=Decimal("250.50"), status=QuoteStatus.PENDING, created_at=_at(2026, 10, 15)),
            make_quote(number=5, value=Decimal("999.00"), status=QuoteStatus.APPROVED, created_at=_at(2025, 12)),
            make_quote(number=6, value=Decimal("100.00"), status=QuoteStatus.PENDING, created_at=_at(2026, 7)),
            make_quote(number=7, value=Decimal("100.00"), status=QuoteStatus.PENDING, created_at=_at(2026, 6)),
        ]
        self.service = DashboardService(InMemoryQuoteRepository(quotes))
        self.summary = self.service.get_summary(today=date(2026, 10, 18))

    def test_counts_and_totals(self) -> None:
        stats = self.summary.stats
        self.assertEqual(stats.totalQuotes, 7)
        self.assertEqual((stats.pendingCount, stats.approvedCount, stats.rejectedCount), (3, 3, 1))
        self.assertEqual(stats.totalValue, "R$ 3.249,50")
        self.assertEqual(stats.approvedValue, "R$ 2.499,00")

    def test_monthly_revenue_covers_six_months_with_zeros(self) -> None:
        months = self.summary.monthlyRevenue
        self.assertEqual([m.label for m in months], ["mai/2026", "jun/2026", "jul/2026", "ago/2026", "set/2026", "out/2026"])
        self.assertEqual([m.total_raw for m in months], [0.0, 0.0, 0.0, 500.0, 0.0, 1000.0])
        self.assertEqual(months[-1].total, "R$ 1.000,00")

    def test_recent_quotes_newest_first(self) -> None:
        recent = self.summary.recentQuotes
        self.assertEqual([q.number for q in recent], [4, 1, 3, 2, 6])
        self.assertEqual(recent[0].status_label, "Pendente")
        self.assertEqual(recent[0].amount, "R$ 250,50")
        self.assertEqual(recent[0].date, "15/10/2026")

    def test_year_boundary(self) -> None:
        summary = self.service.get_summary(today=date(2026, 2, 1))
        self.assertEqual(summary.monthlyRevenue[0].month, "2025-09")
        self.assertEqual([m.total_raw for m in summary.monthlyRevenue if m.month == "2025-12"], [999.0])

    def test_months_follow_local_time_not_utc(self) -> None:
        # 01/11 01:30 UTC ainda é 31/10 22:30 em Brasília
        late_evening = datetime(2026, 11, 1, 1, 30, tzinfo=UTC)
        repo = InMemoryQuoteRepository([
            make_quote(number=8, value=Decimal("700.00"), status=QuoteStatus.APPROVED, created_at=late_evening),
        ])
        summary = DashboardService(repo, tz=ZoneInfo("America/Sao_Paulo")).get_summary(today=date(2026, 10, 31))

        self.assertEqual(summary.monthlyRevenue[-1].month, "2026-10")
        self.assertEqual(summary.monthlyRevenue[-1].total_raw, 700.0)
        self.assertEqual(summary.recentQuotes[0].date, "31/10/2026")


class BrazilianFormatterTests(SimpleTestCase):
    def test_currency(self) -> None:
        fmt = BrazilianFormatter()
        self.assertEqual(fmt.format_currency(Decimal("1234.5")), "R$ 1.234,50")
        self.assertEqual(fmt.format_currency(None), "R$ 0,00")

    def test_dates(self) -> None:
        self.assertEqual(BrazilianFormatter.format_date(date(2026, 10, 18)), "18/10/2026")
        self.assertEqual(BrazilianFormatter.format_date("2026-10-05T14:30:00Z", "abrev"), "out/2026")
        self.assertEqual(BrazilianFormatter.format_date(None), "")
