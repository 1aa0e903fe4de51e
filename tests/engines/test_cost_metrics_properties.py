"""
Property-based tests for the cost metrics engine.

Random budgets, progress, spend and dates; the engine must never raise and
its identities must hold on the quantized outputs.
"""

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from cost_engines.metrics import CENT, compute_metrics
from cost_modules.expense.models import Expense
from cost_modules.labor.models import LaborRecord
from cost_modules.project.models import Project, ProjectCategory

PROJECT_ID = "p"

money = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("1000000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
percent = st.integers(min_value=0, max_value=100).map(Decimal)
capacity = st.integers(min_value=0, max_value=500).map(Decimal)
start_dates = st.dates(min_value=date(2020, 1, 1), max_value=date(2025, 12, 31))
offsets = st.integers(min_value=-400, max_value=2000)


@st.composite
def projects(draw):
    start = draw(start_dates)
    end_offset = draw(st.one_of(st.none(), st.integers(min_value=0, max_value=1500)))
    return Project(
        id=PROJECT_ID,
        name="prop",
        category=draw(st.sampled_from(list(ProjectCategory))),
        location="",
        total_budget=draw(money),
        capacity=draw(capacity),
        start_date=start,
        target_end_date=None if end_offset is None else start + timedelta(days=end_offset),
        percent_complete=draw(percent),
    )


@st.composite
def expense_lists(draw):
    amounts = draw(st.lists(money, max_size=8))
    return [
        Expense(
            id=f"e{i}",
            project_id=PROJECT_ID,
            amount=amount,
            category="Malzeme",
            description="",
            date=date(2024, 1, 1),
        )
        for i, amount in enumerate(amounts)
    ]


@st.composite
def labor_lists(draw):
    count = draw(st.integers(min_value=0, max_value=4))
    return [
        LaborRecord(
            id=f"l{i}",
            project_id=PROJECT_ID,
            worker_name="w",
            role="",
            hours=draw(st.integers(min_value=0, max_value=12).map(Decimal)),
            overtime=draw(st.integers(min_value=0, max_value=6).map(Decimal)),
            date=date(2024, 1, 1),
            daily_rate=draw(st.integers(min_value=0, max_value=10000).map(Decimal)),
        )
        for i in range(count)
    ]


class TestMetricsProperties:
    @given(project=projects(), expenses=expense_lists(), labor=labor_lists(), offset=offsets)
    @settings(max_examples=200, deadline=None)
    def test_identities_hold(self, project, expenses, labor, offset):
        as_of = project.start_date + timedelta(days=offset)
        result = compute_metrics(project, expenses, labor, as_of=as_of)
        fin, risk = result.financial, result.risk

        assert fin.variance == project.total_budget - fin.eac
        assert risk.budget_deviation == project.total_budget - risk.eac
        assert fin.actual_cost == sum((e.amount for e in expenses), Decimal("0"))
        assert fin.earned_value == (
            project.total_budget * project.percent_complete / Decimal("100")
        ).quantize(CENT)

    @given(project=projects(), expenses=expense_lists(), offset=offsets)
    @settings(max_examples=200, deadline=None)
    def test_day_counts_bounded(self, project, expenses, offset):
        risk = compute_metrics(
            project, expenses, as_of=project.start_date + timedelta(days=offset)
        ).risk

        assert risk.days_passed >= 1
        assert risk.remaining_days >= 0
        if project.target_end_date is None:
            assert risk.remaining_days == 0

    @given(project=projects(), expenses=expense_lists())
    @settings(max_examples=100, deadline=None)
    def test_non_negative_outputs(self, project, expenses):
        result = compute_metrics(project, expenses, as_of=project.start_date)

        assert result.financial.cpi >= 0
        assert result.financial.unit_cost >= 0
        assert result.risk.burn_rate >= 0
        assert result.risk.carbon_saved >= 0
        assert result.financial.eac > 0

    @given(project=projects())
    @settings(max_examples=100, deadline=None)
    def test_no_spend_is_neutral(self, project):
        fin = compute_metrics(project, [], as_of=project.start_date).financial

        assert fin.cpi == Decimal("1")
        assert fin.eac == project.total_budget
        assert fin.variance == Decimal("0")

    @given(project=projects(), expenses=expense_lists())
    @settings(max_examples=100, deadline=None)
    def test_foreign_records_ignored(self, project, expenses):
        foreign = [
            Expense(
                id=f"x{i}",
                project_id="other",
                amount=e.amount,
                category=e.category,
                description="",
                date=e.date,
            )
            for i, e in enumerate(expenses)
        ]
        alone = compute_metrics(project, expenses, as_of=project.start_date)
        mixed = compute_metrics(project, expenses + foreign, as_of=project.start_date)
        assert alone == mixed
