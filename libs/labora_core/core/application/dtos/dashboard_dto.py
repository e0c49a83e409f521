from dataclasses import dataclass, field


@dataclass(frozen=True)
class QuoteSummaryDTO:
    id: str
    number: int | None
    client: str
    amount: str
    date: str
    status: str
    status_label: str

@dataclass(frozen=True)
class MonthlyRevenueDTO:
    month: str
    label: str
    total: str
    total_raw: float

@dataclass(frozen=True)
class StatsDTO:
    pendingCount: int
    approvedCount: int
    rejectedCount: int
    totalValue: str
    approvedValue: str
    totalQuotes: int

@dataclass(frozen=True)
class DashboardDTO:
    stats: StatsDTO
    monthlyRevenue: list[MonthlyRevenueDTO] = field(default_factory=list)
    recentQuotes: list[QuoteSummaryDTO] = field(default_factory=list)
