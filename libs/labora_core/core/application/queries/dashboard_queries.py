from dataclasses import dataclass

from labora_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class GetDashboardSummaryQuery(QueryDTO):
    """
    Query para obter o resumo do dashboard (contagens, valores, faturamento mensal).
    """
    pass
