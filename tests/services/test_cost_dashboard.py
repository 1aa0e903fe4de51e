"""Tests for the portfolio dashboard aggregates."""

from decimal import Decimal

from cost_services.dashboard import DashboardService
from tests.conftest import AS_OF, SOLAR_PROJECT_ID, make_expense


class TestPortfolioSummary:
    def test_totals(self, populated_store):
        summary = DashboardService(populated_store).snapshot().summary

        assert summary.project_count == 2
        assert summary.total_budget == Decimal("60000000")
        assert summary.total_actual_cost == Decimal("3500000")
        assert summary.average_percent_complete == Decimal("37.50")

    def test_average_cpi(self, populated_store):
        # solar 6.75M / 3M = 2.25, road 13.5M / 0.5M = 27
        summary = DashboardService(populated_store).snapshot().summary
        assert summary.average_cpi == Decimal("14.6250")

    def test_total_eac_sums_project_forecasts(self, populated_store):
        summary = DashboardService(populated_store).snapshot().summary
        # 6,666,666.67 + 45,000,000 / 27
        assert summary.total_eac == Decimal("6666666.67") + Decimal("1666666.67")

    def test_empty_portfolio(self, store):
        summary = DashboardService(store).snapshot().summary

        assert summary.project_count == 0
        assert summary.total_budget == Decimal("0")
        assert summary.total_actual_cost == Decimal("0")
        assert summary.average_percent_complete == Decimal("0")
        assert summary.average_cpi == Decimal("1")
        assert summary.at_risk_count == 0

    def test_orphaned_spend_counts_in_portfolio_total(self, populated_store):
        populated_store.remove_project(SOLAR_PROJECT_ID)
        summary = DashboardService(populated_store).snapshot().summary

        assert summary.project_count == 1
        assert summary.total_actual_cost == Decimal("3500000")


class TestChartRows:
    def test_rows_in_thousands(self, populated_store):
        rows = DashboardService(populated_store).snapshot().chart_rows
        solar = next(r for r in rows if r.project_id == SOLAR_PROJECT_ID)

        assert solar.budget_k == Decimal("15000.00")
        assert solar.spend_k == Decimal("3000.00")
        assert solar.eac_k == Decimal("6666.67")
        assert solar.at_risk is False

    def test_over_budget_flagged(self, populated_store):
        populated_store.add_expense(make_expense("big", amount="20000000"))
        snap = DashboardService(populated_store).snapshot()
        solar = next(r for r in snap.chart_rows if r.project_id == SOLAR_PROJECT_ID)

        assert solar.at_risk is True
        assert snap.summary.at_risk_count == 1


class TestBreakdowns:
    def test_spend_by_type(self, populated_store):
        service = DashboardService(populated_store)
        assert service.spend_by_type() == {
            "FUEL": Decimal("500000"),
            "MATERIAL": Decimal("3000000"),
        }
        assert service.spend_by_type(SOLAR_PROJECT_ID) == {"MATERIAL": Decimal("3000000")}

    def test_spend_by_category(self, populated_store):
        assert DashboardService(populated_store).spend_by_category() == {
            "Akaryakıt": Decimal("500000"),
            "Malzeme": Decimal("3000000"),
        }

    def test_critical_inventory(self, populated_store):
        snap = DashboardService(populated_store).snapshot()
        assert [i.id for i in snap.critical_inventory] == ["i1"]

    def test_snapshot_date_defaults_to_clock(self, populated_store):
        assert DashboardService(populated_store).snapshot().as_of == AS_OF
