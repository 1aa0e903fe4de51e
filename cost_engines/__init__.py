"""
Module: cost_engines
Responsibility:
    Re-exports the pure calculation engines.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``;
      the evaluation date is an explicit ``as_of`` parameter.
    - Decimal-only arithmetic.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from cost_engines import compute_metrics
    result = compute_metrics(project, expenses, labor, as_of=date(2024, 6, 30))
"""

from cost_engines.metrics import (
    CARBON_TONS_PER_MW,
    OVERTIME_MULTIPLIER,
    STANDARD_SHIFT_HOURS,
    FinancialMetrics,
    MetricsResult,
    RiskMetrics,
    carbon_saved,
    compute_financial_metrics,
    compute_metrics,
    compute_risk_metrics,
    labor_cost,
)

__all__ = [
    "CARBON_TONS_PER_MW",
    "OVERTIME_MULTIPLIER",
    "STANDARD_SHIFT_HOURS",
    "FinancialMetrics",
    "MetricsResult",
    "RiskMetrics",
    "carbon_saved",
    "compute_financial_metrics",
    "compute_metrics",
    "compute_risk_metrics",
    "labor_cost",
]
