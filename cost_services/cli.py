"""
MegaCost command-line interface.

Usage:
    megacost projects
    megacost add-project --name "Konya GES" --category solar --budget 8000000 \\
        --capacity 10 --start 2024-02-01 --location "Konya, TR"
    megacost add-expense <project_id> --amount 250000 --category Malzeme \\
        --description "Panel sevkiyatı" --type MATERIAL
    megacost add-labor <project_id> --worker "Ali Y." --role Kaynakçı \\
        --hours 8 --overtime 2 --daily-rate 1000
    megacost add-item --name Çimento --category Malzeme --quantity 40 --unit ton --min-stock 50
    megacost metrics <project_id>
    megacost dashboard
    megacost export --format xlsx [--output PATH]
    megacost insight <project_id>

Exit codes: 0 on success, 1 on domain or configuration errors.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from pathlib import Path
from uuid import uuid4

from cost_config import CostTrackerConfig, load_config
from cost_kernel.db.engine import get_session_factory, init_engine_from_url
from cost_kernel.domain.clock import SystemClock
from cost_kernel.exceptions import CostTrackerError
from cost_kernel.logging_config import LogContext, configure_logging, get_logger
from cost_modules._codec import to_decimal
from cost_modules.expense.models import Expense, ExpenseType
from cost_modules.inventory.models import InventoryItem
from cost_modules.labor.models import LaborRecord
from cost_modules.project.models import Project, ProjectCategory, ProjectStatus
from cost_services._orm_registry import create_all_tables
from cost_services.dashboard import DashboardService
from cost_services.export import LedgerExporter, default_filename
from cost_services.insight import InsightService
from cost_services.persistence import SqlKeyValuePersistence
from cost_services.store import CostStore

logger = get_logger("services.cli")

W = 72


def _money(v: Decimal) -> str:
    return f"{v:,.2f} TL"


def _new_id() -> str:
    return uuid4().hex[:9]


def open_store(config: CostTrackerConfig) -> CostStore:
    """Connect to the configured database and load the store."""
    engine = init_engine_from_url(config.database_url)
    create_all_tables(engine)
    persistence = SqlKeyValuePersistence(get_session_factory(), namespace=config.namespace)
    store = CostStore(persistence, clock=SystemClock(), seed_demo_data=config.seed_demo_data)
    store.load()
    return store


# =============================================================================
# Commands
# =============================================================================


def cmd_projects(store: CostStore, args: argparse.Namespace) -> int:
    projects = store.projects()
    if not projects:
        print("  No projects.")
        return 0
    print(f"  {'ID':<10} {'Name':<28} {'Cat':<6} {'Done':>6} {'Budget':>20}")
    print(f"  {'-'*10} {'-'*28} {'-'*6} {'-'*6} {'-'*20}")
    for p in projects:
        print(
            f"  {p.id:<10} {p.name[:28]:<28} {p.category.value:<6} "
            f"{p.percent_complete:>5}% {_money(p.total_budget):>20}"
        )
    return 0


def cmd_add_project(store: CostStore, args: argparse.Namespace) -> int:
    project = store.add_project(
        Project(
            id=_new_id(),
            name=args.name,
            category=ProjectCategory(args.category),
            location=args.location,
            status=ProjectStatus(args.status),
            total_budget=to_decimal(args.budget),
            capacity=to_decimal(args.capacity),
            start_date=args.start or store.today(),
            target_end_date=args.end,
            percent_complete=to_decimal(args.percent),
            target_co2_saved=to_decimal(args.target_co2) if args.target_co2 else None,
        )
    )
    print(project.id)
    return 0


def cmd_add_expense(store: CostStore, args: argparse.Namespace) -> int:
    expense = store.add_expense(
        Expense(
            id=_new_id(),
            project_id=args.project_id,
            amount=to_decimal(args.amount),
            category=args.category,
            description=args.description,
            date=args.date or store.today(),
            type=ExpenseType(args.type),
            quantity=to_decimal(args.quantity) if args.quantity else None,
            unit=args.unit,
        )
    )
    print(expense.id)
    return 0


def cmd_add_labor(store: CostStore, args: argparse.Namespace) -> int:
    record = store.add_labor_record(
        LaborRecord(
            id=_new_id(),
            project_id=args.project_id,
            worker_name=args.worker,
            role=args.role,
            hours=to_decimal(args.hours),
            overtime=to_decimal(args.overtime),
            date=args.date or store.today(),
            daily_rate=to_decimal(args.daily_rate),
        )
    )
    print(record.id)
    return 0


def cmd_add_item(store: CostStore, args: argparse.Namespace) -> int:
    item = store.add_inventory_item(
        InventoryItem(
            id=_new_id(),
            name=args.name,
            category=args.category,
            quantity=to_decimal(args.quantity),
            unit=args.unit,
            min_stock=to_decimal(args.min_stock),
            last_updated=store.now(),
        )
    )
    print(f"{item.id} {item.stock_status.value}")
    return 0


def cmd_metrics(store: CostStore, args: argparse.Namespace) -> int:
    project = store.get_project(args.project_id)
    result = store.metrics_for(project.id)
    fin, risk = result.financial, result.risk

    print()
    print("=" * W)
    print(f"{project.name} ({project.unit_label})".center(W))
    print("=" * W)
    for label, value in (
        ("Actual cost (AC)", _money(fin.actual_cost)),
        ("Earned value (EV)", _money(fin.earned_value)),
        ("CPI", f"{fin.cpi:.2f}"),
        ("EAC (BAC / CPI)", _money(fin.eac)),
        ("Variance", _money(fin.variance)),
        (f"Unit cost per {project.unit_label}", _money(fin.unit_cost)),
        ("Labor cost", _money(risk.labor_cost)),
        ("Burn rate / day", _money(risk.burn_rate)),
        ("Days passed", str(risk.days_passed)),
        ("Remaining days", str(risk.remaining_days)),
        ("EAC (burn)", _money(risk.eac)),
        ("Budget deviation", _money(risk.budget_deviation)),
        ("Carbon saved (t CO2)", f"{risk.carbon_saved:,.2f}"),
    ):
        print(f"  {label:<28} {value:>40}")
    print()
    return 0


def cmd_dashboard(store: CostStore, args: argparse.Namespace) -> int:
    snap = DashboardService(store).snapshot()
    s = snap.summary
    print()
    print("=" * W)
    print(f"PORTFOLIO  {snap.as_of.isoformat()}".center(W))
    print("=" * W)
    print(f"  {'Total budget':<28} {_money(s.total_budget):>40}")
    print(f"  {'Actual spend':<28} {_money(s.total_actual_cost):>40}")
    print(f"  {'Total EAC':<28} {_money(s.total_eac):>40}")
    print(f"  {'Average completion':<28} {'%' + str(s.average_percent_complete):>40}")
    print(f"  {'Average CPI':<28} {s.average_cpi:>40.2f}")
    print()
    for row in snap.chart_rows:
        flag = "RISK" if row.at_risk else "ok"
        print(f"  {row.name[:30]:<30} {row.budget_k:>12} {row.spend_k:>12} {row.eac_k:>12} {flag:>4}")
    if snap.critical_inventory:
        print()
        print("  Critical stock:")
        for item in snap.critical_inventory:
            print(f"    {item.name:<30} {item.quantity} {item.unit} (min {item.min_stock})")
    print()
    return 0


def cmd_export(store: CostStore, args: argparse.Namespace) -> int:
    exporter = LedgerExporter(store)
    path = Path(args.output) if args.output else Path(default_filename(store.today(), args.format))
    if args.format == "xlsx":
        exporter.write_xlsx(path)
    else:
        exporter.write_csv(path)
    print(path)
    return 0


def cmd_insight(store: CostStore, args: argparse.Namespace, config: CostTrackerConfig) -> int:
    project = store.get_project(args.project_id)
    service = InsightService.from_config(config)
    print(
        service.generate(
            project,
            store.expenses(project.id),
            store.labor_records(project.id),
            as_of=store.today(),
        )
    )
    return 0


# =============================================================================
# Entry point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="megacost", description="Construction cost tracker")
    parser.add_argument("--config", help="YAML configuration file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("projects", help="List projects")

    p = sub.add_parser("add-project", help="Create a project")
    p.add_argument("--name", required=True)
    p.add_argument("--category", choices=[c.value for c in ProjectCategory], required=True)
    p.add_argument("--location", default="")
    p.add_argument("--status", default="ACTIVE")
    p.add_argument("--budget", required=True)
    p.add_argument("--capacity", default="0")
    p.add_argument("--start", type=date.fromisoformat)
    p.add_argument("--end", type=date.fromisoformat)
    p.add_argument("--percent", default="0")
    p.add_argument("--target-co2")

    p = sub.add_parser("add-expense", help="Book an expense")
    p.add_argument("project_id")
    p.add_argument("--amount", required=True)
    p.add_argument("--category", default="Malzeme")
    p.add_argument("--description", required=True)
    p.add_argument("--type", choices=[t.value for t in ExpenseType], default="MATERIAL")
    p.add_argument("--quantity")
    p.add_argument("--unit")
    p.add_argument("--date", type=date.fromisoformat)

    p = sub.add_parser("add-labor", help="Record a timesheet entry")
    p.add_argument("project_id")
    p.add_argument("--worker", required=True)
    p.add_argument("--role", default="")
    p.add_argument("--hours", default="8")
    p.add_argument("--overtime", default="0")
    p.add_argument("--daily-rate", required=True)
    p.add_argument("--date", type=date.fromisoformat)

    p = sub.add_parser("add-item", help="Add an inventory item")
    p.add_argument("--name", required=True)
    p.add_argument("--category", default="")
    p.add_argument("--quantity", required=True)
    p.add_argument("--unit", default="")
    p.add_argument("--min-stock", default="0")

    p = sub.add_parser("metrics", help="Show metrics for a project")
    p.add_argument("project_id")

    sub.add_parser("dashboard", help="Show portfolio summary")

    p = sub.add_parser("export", help="Export the expense ledger")
    p.add_argument("--format", choices=["csv", "xlsx"], default="csv")
    p.add_argument("--output")

    p = sub.add_parser("insight", help="Request an AI cost report")
    p.add_argument("project_id")

    return parser


_COMMANDS = {
    "projects": cmd_projects,
    "add-project": cmd_add_project,
    "add-expense": cmd_add_expense,
    "add-labor": cmd_add_labor,
    "add-item": cmd_add_item,
    "metrics": cmd_metrics,
    "dashboard": cmd_dashboard,
    "export": cmd_export,
}


def main(argv: Sequence[str] | None = None, store: CostStore | None = None) -> int:
    args = build_parser().parse_args(argv)

    with LogContext.bind(correlation_id=uuid4().hex):
        try:
            config = load_config(args.config)
            configure_logging(level=config.log_level_value)
            store = store or open_store(config)
            if args.command == "insight":
                return cmd_insight(store, args, config)
            return _COMMANDS[args.command](store, args)
        except (CostTrackerError, ValueError) as exc:
            logger.warning("cli_command_failed", extra={"command": args.command}, exc_info=True)
            print(f"  ERROR: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
