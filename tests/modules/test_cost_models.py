"""
Tests for the domain models in cost_modules.

Covers construction invariants, immutability, record round trips through
to_dict/from_dict, enum normalization, stock status and budget templates.
"""

from dataclasses import FrozenInstanceError, replace
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from cost_modules._codec import parse_date, to_decimal
from cost_modules.expense.models import Expense, ExpenseType
from cost_modules.inventory.models import InventoryItem, StockStatus
from cost_modules.labor.models import LaborRecord
from cost_modules.project.demo import DEMO_PROJECTS
from cost_modules.project.models import Project, ProjectCategory, ProjectStatus
from cost_modules.project.templates import (
    ROAD_BUDGET_TEMPLATE,
    SOLAR_BUDGET_TEMPLATE,
    planned_by_category,
    template_for,
    template_total,
)
from tests.conftest import make_expense, make_item, make_labor


class TestProjectInvariants:
    def test_percent_above_hundred_rejected(self, solar_project):
        with pytest.raises(ValueError, match="percent_complete"):
            replace(solar_project, percent_complete=Decimal("100.5"))

    def test_negative_percent_rejected(self, solar_project):
        with pytest.raises(ValueError, match="percent_complete"):
            replace(solar_project, percent_complete=Decimal("-1"))

    def test_zero_budget_rejected(self, solar_project):
        with pytest.raises(ValueError, match="total_budget"):
            replace(solar_project, total_budget=Decimal("0"))

    def test_negative_capacity_rejected(self, solar_project):
        with pytest.raises(ValueError, match="capacity"):
            replace(solar_project, capacity=Decimal("-5"))

    @pytest.mark.parametrize("field", ["percent_complete", "total_budget", "capacity"])
    @pytest.mark.parametrize("raw", ["NaN", "sNaN", "Infinity"])
    def test_non_finite_numbers_rejected(self, solar_project, field, raw):
        with pytest.raises(ValueError, match=field):
            replace(solar_project, **{field: Decimal(raw)})

    def test_boundaries_accepted(self, solar_project):
        done = replace(solar_project, percent_complete=Decimal("100"))
        fresh = replace(solar_project, percent_complete=Decimal("0"), capacity=Decimal("0"))
        assert done.completion_ratio == Decimal("1")
        assert fresh.completion_ratio == Decimal("0")

    def test_frozen(self, solar_project):
        with pytest.raises(FrozenInstanceError):
            solar_project.percent_complete = Decimal("50")

    def test_unit_label(self, solar_project, road_project):
        assert solar_project.unit_label == "MW"
        assert road_project.unit_label == "KM"


class TestProjectRecords:
    def test_round_trip(self, solar_project):
        assert Project.from_dict(solar_project.to_dict()) == solar_project

    def test_round_trip_without_end_date(self, road_project):
        data = road_project.to_dict()
        assert data["target_end_date"] is None
        assert Project.from_dict(data) == road_project

    def test_numbers_persisted_as_strings(self, solar_project):
        data = solar_project.to_dict()
        assert data["total_budget"] == "15000000"
        assert data["category"] == "solar"
        assert data["status"] == "ACTIVE"

    def test_numeric_capacity_and_datetime_start(self):
        project = Project.from_dict(
            {
                "id": 7,
                "name": "Konya GES",
                "category": "solar",
                "total_budget": 8000000,
                "capacity": 10.5,
                "start_date": "2024-02-01T00:00:00.000Z",
                "percent_complete": 12,
            }
        )
        assert project.id == "7"
        assert project.capacity == Decimal("10.5")
        assert project.start_date == date(2024, 2, 1)
        assert project.location == ""
        assert project.status is ProjectStatus.ACTIVE

    @pytest.mark.parametrize("raw", ["Infinity", "NaN", "sNaN"])
    def test_non_finite_budget_record_rejected(self, solar_project, raw):
        data = {**solar_project.to_dict(), "total_budget": raw}
        with pytest.raises(ValueError):
            Project.from_dict(data)

    def test_missing_capacity_defaults_to_zero(self):
        project = Project.from_dict(
            {"id": "x", "name": "n", "category": "road", "total_budget": "1", "start_date": "2024-01-01"}
        )
        assert project.capacity == Decimal("0")


class TestProjectStatus:
    @pytest.mark.parametrize("raw", ["PLANNED", "planned", "Planning"])
    def test_planning_aliases(self, raw):
        assert ProjectStatus(raw) is ProjectStatus.PLANNING

    def test_case_insensitive(self):
        assert ProjectStatus("completed") is ProjectStatus.COMPLETED

    def test_unknown_rejected(self):
        with pytest.raises(ValueError):
            ProjectStatus("ARCHIVED")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            ProjectCategory("rail")


class TestExpense:
    def test_non_positive_amount_rejected(self):
        with pytest.raises(ValueError, match="amount"):
            make_expense("e1", amount="0")

    def test_nan_amount_rejected(self):
        with pytest.raises(ValueError, match="amount"):
            make_expense("e1", amount="NaN")

    def test_quantity_requires_unit(self):
        with pytest.raises(ValueError, match="together"):
            make_expense("e1", quantity=Decimal("10"))

    def test_unit_price(self):
        expense = make_expense("e1", amount="1000", quantity=Decimal("3"), unit="m3")
        assert expense.unit_price == Decimal("333.33")

    def test_unit_price_absent_without_quantity(self):
        assert make_expense("e1").unit_price is None

    def test_round_trip(self):
        expense = make_expense(
            "e1",
            amount="2500.50",
            expense_type=ExpenseType.FUEL,
            quantity=Decimal("100"),
            unit="lt",
        )
        assert Expense.from_dict(expense.to_dict()) == expense

    def test_legacy_record_defaults(self):
        expense = Expense.from_dict(
            {"id": "e9", "project_id": "1", "amount": 1200, "date": "2024-05-01T10:00:00Z"}
        )
        assert expense.type is ExpenseType.MATERIAL
        assert expense.quantity is None
        assert expense.unit is None
        assert expense.date == date(2024, 5, 1)


class TestInventoryItem:
    def test_critical_at_threshold(self):
        assert make_item("i1", quantity="50", min_stock="50").stock_status is StockStatus.CRITICAL

    def test_critical_below_threshold(self):
        assert make_item("i1", quantity="49.9", min_stock="50").is_critical

    def test_sufficient_above_threshold(self):
        assert make_item("i1", quantity="51", min_stock="50").stock_status is StockStatus.SUFFICIENT

    def test_zero_threshold_zero_stock_is_critical(self):
        assert make_item("i1", quantity="0", min_stock="0").is_critical

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity"):
            make_item("i1", quantity="-1", min_stock="0")

    def test_infinite_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity"):
            make_item("i1", quantity="Infinity", min_stock="0")

    def test_with_quantity(self):
        item = make_item("i1", quantity="500", min_stock="50")
        later = datetime(2024, 7, 1, tzinfo=timezone.utc)
        updated = item.with_quantity(Decimal("10"), later)

        assert updated.quantity == Decimal("10")
        assert updated.last_updated == later
        assert updated.is_critical
        assert item.quantity == Decimal("500")

    def test_round_trip(self):
        item = make_item("i1", quantity="12.5", min_stock="3")
        assert InventoryItem.from_dict(item.to_dict()) == item


class TestLaborRecord:
    @pytest.mark.parametrize("field", ["hours", "overtime", "daily_rate"])
    def test_negative_fields_rejected(self, field):
        kwargs = {"hours": "8", "overtime": "0", "daily_rate": "1000", field: "-1"}
        with pytest.raises(ValueError, match=field):
            make_labor("l1", **kwargs)

    def test_nan_daily_rate_rejected(self):
        with pytest.raises(ValueError, match="daily_rate"):
            make_labor("l1", daily_rate="sNaN")

    def test_round_trip(self):
        record = make_labor("l1", overtime="2")
        assert LaborRecord.from_dict(record.to_dict()) == record


class TestCodec:
    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            to_decimal(True)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            to_decimal("abc")

    @pytest.mark.parametrize("raw", ["Infinity", "-Infinity", "inf", "NaN", "sNaN", Decimal("NaN"), float("inf")])
    def test_non_finite_rejected(self, raw):
        with pytest.raises(ValueError, match="Non-finite"):
            to_decimal(raw)

    def test_parse_date_rejects_numbers(self):
        with pytest.raises(ValueError):
            parse_date(20240101)


class TestBudgetTemplates:
    def test_template_selection(self):
        assert template_for(ProjectCategory.SOLAR) is SOLAR_BUDGET_TEMPLATE
        assert template_for(ProjectCategory.ROAD) is ROAD_BUDGET_TEMPLATE

    def test_totals(self):
        assert template_total(SOLAR_BUDGET_TEMPLATE) == Decimal("6000000")
        assert template_total(ROAD_BUDGET_TEMPLATE) == Decimal("10400000")

    def test_planned_by_category(self):
        totals = planned_by_category(SOLAR_BUDGET_TEMPLATE)
        assert list(totals) == ["Sivil İşler", "Mekanik", "Elektrik"]
        assert totals["Mekanik"] == Decimal("3200000")
        assert totals["Elektrik"] == Decimal("2300000")


class TestDemoProjects:
    def test_two_demo_projects(self):
        assert [p.id for p in DEMO_PROJECTS] == ["1", "2"]
        assert DEMO_PROJECTS[0].category is ProjectCategory.SOLAR
        assert DEMO_PROJECTS[1].category is ProjectCategory.ROAD
