"""
Pytest fixtures for the cost tracker test suite.

Provides:
- Deterministic clock pinned to 2024-06-30 12:00 UTC
- Sample projects, expenses, labor records and inventory items
- In-memory persistence and a loaded store
- SQLite in-memory session factory with tables created
- Structured log capture
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest
from sqlalchemy.orm import sessionmaker

from cost_kernel.db.engine import build_engine
from cost_kernel.domain.clock import DeterministicClock
from cost_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from cost_modules.expense.models import Expense, ExpenseType
from cost_modules.inventory.models import InventoryItem
from cost_modules.labor.models import LaborRecord
from cost_modules.project.models import Project, ProjectCategory, ProjectStatus
from cost_services._orm_registry import create_all_tables
from cost_services.persistence import InMemoryPersistence
from cost_services.store import CostStore

AS_OF = date(2024, 6, 30)
FIXED_NOW = datetime(2024, 6, 30, 12, 0, 0, tzinfo=timezone.utc)

SOLAR_PROJECT_ID = "solar-1"
ROAD_PROJECT_ID = "road-1"


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)


# ---------------------------------------------------------------------------
# Domain records
# ---------------------------------------------------------------------------


@pytest.fixture
def solar_project() -> Project:
    """20 MW solar plant, 45% complete, 100 days in, 100 days to go."""
    return Project(
        id=SOLAR_PROJECT_ID,
        name="Manisa GES Projesi",
        category=ProjectCategory.SOLAR,
        location="Manisa, TR",
        status=ProjectStatus.ACTIVE,
        total_budget=Decimal("15000000"),
        capacity=Decimal("20"),
        start_date=date(2024, 3, 22),
        target_end_date=date(2024, 10, 8),
        percent_complete=Decimal("45"),
    )


@pytest.fixture
def road_project() -> Project:
    return Project(
        id=ROAD_PROJECT_ID,
        name="Ankara-Niğde Otoyolu",
        category=ProjectCategory.ROAD,
        location="Ankara, TR",
        status=ProjectStatus.ACTIVE,
        total_budget=Decimal("45000000"),
        capacity=Decimal("12"),
        start_date=date(2023, 3, 10),
        percent_complete=Decimal("30"),
    )


def make_expense(
    expense_id: str,
    project_id: str = SOLAR_PROJECT_ID,
    amount: str = "1000",
    category: str = "Malzeme",
    expense_type: ExpenseType = ExpenseType.MATERIAL,
    **kwargs,
) -> Expense:
    return Expense(
        id=expense_id,
        project_id=project_id,
        amount=Decimal(amount),
        category=category,
        description=kwargs.pop("description", f"expense {expense_id}"),
        date=kwargs.pop("date", AS_OF),
        type=expense_type,
        **kwargs,
    )


def make_labor(
    record_id: str,
    project_id: str = SOLAR_PROJECT_ID,
    hours: str = "8",
    overtime: str = "0",
    daily_rate: str = "1000",
) -> LaborRecord:
    return LaborRecord(
        id=record_id,
        project_id=project_id,
        worker_name=f"worker {record_id}",
        role="Teknisyen",
        hours=Decimal(hours),
        overtime=Decimal(overtime),
        date=AS_OF,
        daily_rate=Decimal(daily_rate),
    )


def make_item(item_id: str, quantity: str, min_stock: str) -> InventoryItem:
    return InventoryItem(
        id=item_id,
        name=f"item {item_id}",
        category="Malzeme",
        quantity=Decimal(quantity),
        unit="ton",
        min_stock=Decimal(min_stock),
        last_updated=FIXED_NOW,
    )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture
def store(memory_persistence, deterministic_clock) -> CostStore:
    """Loaded, empty store (no demo seeding)."""
    s = CostStore(memory_persistence, clock=deterministic_clock, seed_demo_data=False)
    s.load()
    return s


@pytest.fixture
def populated_store(store, solar_project, road_project) -> CostStore:
    store.add_project(solar_project)
    store.add_project(road_project)
    store.add_expense(make_expense("e1", amount="3000000", category="Malzeme"))
    store.add_expense(
        make_expense(
            "e2",
            project_id=ROAD_PROJECT_ID,
            amount="500000",
            category="Akaryakıt",
            expense_type=ExpenseType.FUEL,
        )
    )
    store.add_labor_record(make_labor("l1", overtime="2"))
    store.add_inventory_item(make_item("i1", quantity="40", min_stock="50"))
    store.add_inventory_item(make_item("i2", quantity="500", min_stock="50"))
    return store


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def sqlite_session_factory():
    engine = build_engine("sqlite:///:memory:")
    create_all_tables(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class LogCapture:
    """Collects structured JSON log lines emitted under ``megacost``."""

    def __init__(self, stream: StringIO):
        self._stream = stream

    @property
    def records(self) -> list[dict]:
        return [json.loads(line) for line in self._stream.getvalue().splitlines() if line]

    def messages(self) -> list[str]:
        return [r["message"] for r in self.records]


@pytest.fixture
def structured_logs():
    reset_logging()
    LogContext.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(level=logging.DEBUG, handler=handler)
    yield LogCapture(stream)
    LogContext.clear()
    reset_logging()
