"""
Cost Store (``cost_services.store``).

Responsibility
--------------
Owns the four record collections (projects, expenses, inventory, labor)
in memory and mirrors each one into a ``PersistencePort`` after every
mutation.  Exposes add / remove / list operations and hands filtered
snapshots to the metrics engine.

Architecture position
---------------------
**Services layer** -- the only stateful component.  The metrics engine
stays pure; persistence is an injected port.

Invariants enforced
-------------------
* Record ids are unique per collection (``DuplicateRecordError``).
* Expenses and labor records reference an existing project at creation
  time (``RecordNotFoundError``).
* Every mutation ends with a wholesale ``save`` of the touched collection.
* Newest records come first in every listing.

Failure modes
-------------
* Unknown id on remove / lookup -> ``RecordNotFoundError``.
* Persistence failures -> ``PersistenceError`` propagates; the in-memory
  change is kept so a later mutation re-saves it.

Deleting a project does NOT delete its expenses or labor records unless
``cascade=True`` is passed.  ``orphaned_expenses`` and
``orphaned_labor_records`` list what was left behind.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar

from cost_engines.metrics import MetricsResult, compute_metrics
from cost_kernel.domain.clock import Clock, SystemClock
from cost_kernel.exceptions import DuplicateRecordError, RecordNotFoundError
from cost_kernel.logging_config import LogContext, get_logger
from cost_modules.expense.models import Expense
from cost_modules.inventory.models import InventoryItem
from cost_modules.labor.models import LaborRecord
from cost_modules.project.demo import DEMO_PROJECTS
from cost_modules.project.models import Project
from cost_services.persistence import PersistencePort

logger = get_logger("services.store")

T = TypeVar("T", Project, Expense, InventoryItem, LaborRecord)

_DECODERS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "projects": Project.from_dict,
    "expenses": Expense.from_dict,
    "inventory": InventoryItem.from_dict,
    "labor": LaborRecord.from_dict,
}


class CostStore:
    """
    In-memory repository with write-through persistence.

    Contract
    --------
    * Call ``load()`` once before use; it pulls every collection from the
      port and seeds demo projects when nothing was ever persisted.
    * Listings return tuples (snapshots); callers cannot mutate the store
      through them.

    Non-goals
    ---------
    * No partial updates, indexing or migrations.
    * No concurrent-writer arbitration.
    """

    def __init__(
        self,
        persistence: PersistencePort,
        clock: Clock | None = None,
        seed_demo_data: bool = True,
    ):
        self._persistence = persistence
        self._clock = clock or SystemClock()
        self._seed_demo_data = seed_demo_data
        self._collections: dict[str, list[Any]] = {name: [] for name in _DECODERS}

    # =========================================================================
    # Loading
    # =========================================================================

    def load(self) -> None:
        """Read all collections from the persistence port."""
        for name, decode in _DECODERS.items():
            raw = self._persistence.load(name)
            self._collections[name] = [decode(r) for r in raw] if raw else []
            if name == "projects" and raw is None and self._seed_demo_data:
                self._collections[name] = list(DEMO_PROJECTS)
                self._save(name)
                logger.info("demo_projects_seeded", extra={"count": len(DEMO_PROJECTS)})

        logger.info(
            "store_loaded",
            extra={name: len(items) for name, items in self._collections.items()},
        )

    # =========================================================================
    # Projects
    # =========================================================================

    def projects(self) -> tuple[Project, ...]:
        return tuple(self._collections["projects"])

    def get_project(self, project_id: str) -> Project:
        return self._find("projects", project_id)

    def add_project(self, project: Project) -> Project:
        self._add("projects", project)
        logger.info(
            "project_added",
            extra={
                "project_id": project.id,
                "category": project.category.value,
                "total_budget": project.total_budget,
            },
        )
        return project

    def remove_project(self, project_id: str, cascade: bool = False) -> Project:
        """
        Delete a project.

        With ``cascade=False`` (the default) its expenses and labor records
        stay in place as orphans.  With ``cascade=True`` they are removed too.

        Failure modes:
            RecordNotFoundError: unknown ``project_id``; nothing is touched.
            A failed save part way through a cascade can leave the project
            stored without its children, never the children without their
            project.  Removing it again from a reloaded store finishes the job.
        """
        self._find("projects", project_id)
        removed_expenses = removed_labor = 0
        if cascade:
            removed_expenses = self._drop_children("expenses", project_id)
            removed_labor = self._drop_children("labor", project_id)
        project = self._remove("projects", project_id)
        logger.info(
            "project_removed",
            extra={
                "project_id": project_id,
                "cascade": cascade,
                "removed_expenses": removed_expenses,
                "removed_labor_records": removed_labor,
            },
        )
        return project

    # =========================================================================
    # Expenses
    # =========================================================================

    def expenses(self, project_id: str | None = None) -> tuple[Expense, ...]:
        items = self._collections["expenses"]
        if project_id is None:
            return tuple(items)
        return tuple(e for e in items if e.project_id == project_id)

    def add_expense(self, expense: Expense) -> Expense:
        self.get_project(expense.project_id)
        self._add("expenses", expense)
        with LogContext.bind(project_id=expense.project_id):
            logger.info(
                "expense_added",
                extra={
                    "expense_id": expense.id,
                    "amount": expense.amount,
                    "expense_type": expense.type.value,
                },
            )
        return expense

    def remove_expense(self, expense_id: str) -> Expense:
        expense = self._remove("expenses", expense_id)
        logger.info("expense_removed", extra={"expense_id": expense_id})
        return expense

    def orphaned_expenses(self) -> tuple[Expense, ...]:
        known = self._project_ids()
        return tuple(e for e in self._collections["expenses"] if e.project_id not in known)

    # =========================================================================
    # Inventory
    # =========================================================================

    def inventory(self) -> tuple[InventoryItem, ...]:
        return tuple(self._collections["inventory"])

    def add_inventory_item(self, item: InventoryItem) -> InventoryItem:
        self._add("inventory", item)
        logger.info(
            "inventory_item_added",
            extra={"item_id": item.id, "stock_status": item.stock_status.value},
        )
        return item

    def update_inventory_quantity(self, item_id: str, quantity: Decimal) -> InventoryItem:
        """Replace an item's on-hand quantity and stamp ``last_updated``."""
        items = self._collections["inventory"]
        for index, item in enumerate(items):
            if item.id == item_id:
                updated = item.with_quantity(quantity, self._clock.now())
                items[index] = updated
                self._save("inventory")
                logger.info(
                    "inventory_quantity_updated",
                    extra={
                        "item_id": item_id,
                        "quantity": quantity,
                        "stock_status": updated.stock_status.value,
                    },
                )
                return updated
        raise RecordNotFoundError("inventory", item_id)

    def remove_inventory_item(self, item_id: str) -> InventoryItem:
        item = self._remove("inventory", item_id)
        logger.info("inventory_item_removed", extra={"item_id": item_id})
        return item

    # =========================================================================
    # Labor
    # =========================================================================

    def labor_records(self, project_id: str | None = None) -> tuple[LaborRecord, ...]:
        items = self._collections["labor"]
        if project_id is None:
            return tuple(items)
        return tuple(r for r in items if r.project_id == project_id)

    def add_labor_record(self, record: LaborRecord) -> LaborRecord:
        self.get_project(record.project_id)
        self._add("labor", record)
        with LogContext.bind(project_id=record.project_id):
            logger.info(
                "labor_record_added",
                extra={"labor_record_id": record.id, "worker_name": record.worker_name},
            )
        return record

    def remove_labor_record(self, record_id: str) -> LaborRecord:
        record = self._remove("labor", record_id)
        logger.info("labor_record_removed", extra={"labor_record_id": record_id})
        return record

    def orphaned_labor_records(self) -> tuple[LaborRecord, ...]:
        known = self._project_ids()
        return tuple(r for r in self._collections["labor"] if r.project_id not in known)

    # =========================================================================
    # Metrics
    # =========================================================================

    def metrics_for(self, project_id: str, as_of: date | None = None) -> MetricsResult:
        """Run the metrics engine for one project against the current snapshot."""
        project = self.get_project(project_id)
        return compute_metrics(
            project,
            self.expenses(project_id),
            self.labor_records(project_id),
            as_of=as_of or self._clock.today(),
        )

    def today(self) -> date:
        return self._clock.today()

    def now(self) -> datetime:
        return self._clock.now()

    # =========================================================================
    # Internals
    # =========================================================================

    def _project_ids(self) -> set[str]:
        return {p.id for p in self._collections["projects"]}

    def _find(self, collection: str, record_id: str) -> Any:
        for item in self._collections[collection]:
            if item.id == record_id:
                return item
        raise RecordNotFoundError(collection, record_id)

    def _add(self, collection: str, record: T) -> None:
        items = self._collections[collection]
        if any(item.id == record.id for item in items):
            raise DuplicateRecordError(collection, record.id)
        items.insert(0, record)
        self._save(collection)

    def _remove(self, collection: str, record_id: str) -> Any:
        record = self._find(collection, record_id)
        self._collections[collection] = [
            item for item in self._collections[collection] if item.id != record_id
        ]
        self._save(collection)
        return record

    def _drop_children(self, collection: str, project_id: str) -> int:
        before = self._collections[collection]
        kept = [item for item in before if item.project_id != project_id]
        removed = len(before) - len(kept)
        if removed:
            self._collections[collection] = kept
            self._save(collection)
        return removed

    def _save(self, collection: str) -> None:
        self._persistence.save(
            collection, [item.to_dict() for item in self._collections[collection]]
        )
