"""
Portfolio Dashboard (``cost_services.dashboard``).

Responsibility
--------------
Aggregates a store snapshot into the figures the dashboard shows: portfolio
totals, per-project chart rows, expense breakdowns and critical stock.
Pure over the snapshot it is given; the only state it reads is the store.

Empty portfolios produce zero totals, an average completion of 0 and an
average CPI of 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from cost_engines.metrics import CENT, RATIO, MetricsResult
from cost_modules.inventory.models import InventoryItem
from cost_services.store import CostStore

THOUSAND = Decimal("1000")


@dataclass(frozen=True)
class ProjectChartRow:
    """Budget / spend / forecast for one project, in thousands."""
    project_id: str
    name: str
    budget_k: Decimal
    spend_k: Decimal
    eac_k: Decimal
    at_risk: bool


@dataclass(frozen=True)
class PortfolioSummary:
    """Headline figures over every project."""
    total_budget: Decimal
    total_actual_cost: Decimal
    total_eac: Decimal
    average_percent_complete: Decimal
    average_cpi: Decimal
    project_count: int
    at_risk_count: int


@dataclass(frozen=True)
class DashboardSnapshot:
    as_of: date
    summary: PortfolioSummary
    chart_rows: tuple[ProjectChartRow, ...]
    spend_by_type: dict[str, Decimal]
    spend_by_category: dict[str, Decimal]
    critical_inventory: tuple[InventoryItem, ...]


class DashboardService:
    """Builds ``DashboardSnapshot`` objects from a ``CostStore``."""

    def __init__(self, store: CostStore):
        self._store = store

    def snapshot(self, as_of: date | None = None) -> DashboardSnapshot:
        as_of = as_of or self._store.today()
        projects = self._store.projects()
        results: list[MetricsResult] = [
            self._store.metrics_for(p.id, as_of=as_of) for p in projects
        ]

        rows = tuple(
            ProjectChartRow(
                project_id=p.id,
                name=p.name,
                budget_k=(p.total_budget / THOUSAND).quantize(CENT),
                spend_k=(m.financial.actual_cost / THOUSAND).quantize(CENT),
                eac_k=(m.financial.eac / THOUSAND).quantize(CENT),
                at_risk=m.financial.is_over_budget,
            )
            for p, m in zip(projects, results)
        )

        count = len(projects)
        if count:
            avg_pct = (sum((p.percent_complete for p in projects), Decimal("0")) / count).quantize(CENT)
            avg_cpi = (sum((m.financial.cpi for m in results), Decimal("0")) / count).quantize(RATIO)
        else:
            avg_pct = Decimal("0")
            avg_cpi = Decimal("1")

        summary = PortfolioSummary(
            total_budget=sum((p.total_budget for p in projects), Decimal("0")),
            # Portfolio spend counts every expense, orphans included.
            total_actual_cost=sum((e.amount for e in self._store.expenses()), Decimal("0")),
            total_eac=sum((m.financial.eac for m in results), Decimal("0")),
            average_percent_complete=avg_pct,
            average_cpi=avg_cpi,
            project_count=count,
            at_risk_count=sum(1 for row in rows if row.at_risk),
        )

        return DashboardSnapshot(
            as_of=as_of,
            summary=summary,
            chart_rows=rows,
            spend_by_type=self.spend_by_type(),
            spend_by_category=self.spend_by_category(),
            critical_inventory=tuple(i for i in self._store.inventory() if i.is_critical),
        )

    def spend_by_type(self, project_id: str | None = None) -> dict[str, Decimal]:
        totals: dict[str, Decimal] = {}
        for expense in self._store.expenses(project_id):
            key = expense.type.value
            totals[key] = totals.get(key, Decimal("0")) + expense.amount
        return totals

    def spend_by_category(self, project_id: str | None = None) -> dict[str, Decimal]:
        totals: dict[str, Decimal] = {}
        for expense in self._store.expenses(project_id):
            totals[expense.category] = totals.get(expense.category, Decimal("0")) + expense.amount
        return totals
