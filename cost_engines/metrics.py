"""
Cost Metrics Engine -- Pure Functions.

Derives progress-and-risk indicators for one project from its expense and
labor records.  All functions are pure: no I/O, no clock, no database.
The evaluation date is always passed in as ``as_of``.

Two metric families are produced:

* ``FinancialMetrics`` -- classic EVM: earned value, CPI, EAC = BAC / CPI,
  variance, unit cost per delivered capacity unit.
* ``RiskMetrics`` -- time-based burn model: labor-inclusive actual cost,
  burn rate per elapsed day, linear extrapolation of spend to the target
  end date, budget deviation and estimated carbon saved.

Degenerate inputs never raise.  They resolve to fixed sentinels:

* no spend               -> ``cpi == 1``
* ``cpi == 0``           -> ``eac == total_budget``
* zero progress          -> unit cost over full capacity
* zero capacity          -> capacity treated as 1
* project started today  -> ``days_passed == 1``
* past the deadline      -> ``remaining_days == 0``
* no target end date     -> ``remaining_days == 0``

Monetary outputs are quantized to cents, ratios to four places.  The
relations ``variance == total_budget - eac`` and
``budget_deviation == total_budget - eac`` hold exactly on the quantized
values.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from cost_engines.tracer import traced_engine
from cost_modules.expense.models import Expense
from cost_modules.labor.models import LaborRecord
from cost_modules.project.models import Project, ProjectCategory

CENT = Decimal("0.01")
RATIO = Decimal("0.0001")
HUNDRED = Decimal("100")

STANDARD_SHIFT_HOURS = Decimal("8")
OVERTIME_MULTIPLIER = Decimal("1.5")
CARBON_TONS_PER_MW = Decimal("450")


@dataclass(frozen=True)
class FinancialMetrics:
    """Earned-value indicators for a project."""
    actual_cost: Decimal
    planned_value: Decimal
    earned_value: Decimal
    cpi: Decimal
    eac: Decimal
    variance: Decimal
    unit_cost: Decimal

    @property
    def is_over_budget(self) -> bool:
        """True when the EAC forecast exceeds the budget."""
        return self.variance < 0


@dataclass(frozen=True)
class RiskMetrics:
    """Burn-rate indicators for a project."""
    actual_cost: Decimal
    labor_cost: Decimal
    earned_value: Decimal
    cpi: Decimal
    days_passed: int
    remaining_days: int
    burn_rate: Decimal
    eac: Decimal
    budget_deviation: Decimal
    carbon_saved: Decimal

    @property
    def is_over_budget(self) -> bool:
        return self.budget_deviation < 0


@dataclass(frozen=True)
class MetricsResult:
    """Both metric families for one project at one date."""
    project_id: str
    as_of: date
    financial: FinancialMetrics
    risk: RiskMetrics


# =============================================================================
# Building blocks
# =============================================================================


def labor_cost(record: LaborRecord) -> Decimal:
    """
    Cost of one timesheet entry.

    ``daily_rate * hours / 8 + overtime * (daily_rate / 8) * 1.5``
    """
    hourly_rate = record.daily_rate / STANDARD_SHIFT_HOURS
    regular = record.daily_rate * (record.hours / STANDARD_SHIFT_HOURS)
    return regular + record.overtime * hourly_rate * OVERTIME_MULTIPLIER


def earned_value(project: Project) -> Decimal:
    """Budgeted cost of work performed: BAC x completion."""
    return project.total_budget * project.percent_complete / HUNDRED


def cost_performance_index(earned: Decimal, actual: Decimal) -> Decimal:
    """EV / AC, or exactly 1 when nothing has been spent yet."""
    if actual > 0:
        return earned / actual
    return Decimal("1")


def carbon_saved(project: Project) -> Decimal:
    """Tons of CO2 avoided so far; only solar projects save carbon."""
    if project.category is not ProjectCategory.SOLAR:
        return Decimal("0")
    return (project.capacity * project.completion_ratio * CARBON_TONS_PER_MW).quantize(CENT)


def _project_expenses(project: Project, expenses: Iterable[Expense]) -> list[Expense]:
    return [e for e in expenses if e.project_id == project.id]


def _project_labor(project: Project, records: Iterable[LaborRecord]) -> list[LaborRecord]:
    return [r for r in records if r.project_id == project.id]


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal("0"))


# =============================================================================
# Metric families
# =============================================================================


def compute_financial_metrics(
    project: Project,
    expenses: Iterable[Expense],
) -> FinancialMetrics:
    """EVM indicators from expenses only (labor records are not included)."""
    actual = _sum(e.amount for e in _project_expenses(project, expenses))
    earned = earned_value(project)
    cpi = cost_performance_index(earned, actual)
    eac = (project.total_budget / cpi if cpi > 0 else project.total_budget).quantize(CENT)

    capacity = project.capacity if project.capacity > 0 else Decimal("1")
    delivered = capacity * (project.completion_ratio or Decimal("1"))

    return FinancialMetrics(
        actual_cost=actual.quantize(CENT),
        planned_value=project.total_budget.quantize(CENT),
        earned_value=earned.quantize(CENT),
        cpi=cpi.quantize(RATIO),
        eac=eac,
        variance=project.total_budget - eac,
        unit_cost=(actual / delivered).quantize(CENT),
    )


def compute_risk_metrics(
    project: Project,
    expenses: Iterable[Expense],
    labor_records: Iterable[LaborRecord] = (),
    *,
    as_of: date,
) -> RiskMetrics:
    """Burn-rate indicators from expenses plus labor cost."""
    labor = _sum(labor_cost(r) for r in _project_labor(project, labor_records))
    actual = _sum(e.amount for e in _project_expenses(project, expenses)) + labor

    days_passed = max(1, (as_of - project.start_date).days)
    if project.target_end_date is not None:
        remaining_days = max(0, (project.target_end_date - as_of).days)
    else:
        remaining_days = 0

    burn_rate = actual / days_passed
    eac = (actual + burn_rate * remaining_days).quantize(CENT)
    earned = earned_value(project)

    return RiskMetrics(
        actual_cost=actual.quantize(CENT),
        labor_cost=labor.quantize(CENT),
        earned_value=earned.quantize(CENT),
        cpi=cost_performance_index(earned, actual).quantize(RATIO),
        days_passed=days_passed,
        remaining_days=remaining_days,
        burn_rate=burn_rate.quantize(CENT),
        eac=eac,
        budget_deviation=project.total_budget - eac,
        carbon_saved=carbon_saved(project),
    )


@traced_engine("metrics", "1.0", fingerprint_fields=("project", "as_of"))
def compute_metrics(
    project: Project,
    expenses: Iterable[Expense],
    labor_records: Iterable[LaborRecord] = (),
    *,
    as_of: date,
) -> MetricsResult:
    """
    Compute every indicator for ``project`` at ``as_of``.

    ``expenses`` and ``labor_records`` may contain records of other
    projects; only those whose ``project_id`` equals ``project.id`` count.
    """
    expenses = tuple(expenses)
    labor_records = tuple(labor_records)
    return MetricsResult(
        project_id=project.id,
        as_of=as_of,
        financial=compute_financial_metrics(project, expenses),
        risk=compute_risk_metrics(project, expenses, labor_records, as_of=as_of),
    )
