"""
Expense Ledger Export (``cost_services.export``).

Writes every expense in the store as a flat ledger, one row per expense,
with the owning project's name resolved (``N/A`` for orphaned expenses).
CSV goes through the standard ``csv`` module; XLSX through openpyxl.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font

from cost_kernel.logging_config import get_logger
from cost_services.store import CostStore

logger = get_logger("services.export")

LEDGER_HEADERS: tuple[str, ...] = ("ID", "Proje", "Kategori", "Açıklama", "Tutar", "Tarih", "Tip")
MISSING_PROJECT = "N/A"


def default_filename(today: date, extension: str = "csv") -> str:
    """``MegaCost_Rapor_<YYYY-MM-DD>.<extension>``"""
    return f"MegaCost_Rapor_{today.isoformat()}.{extension}"


class LedgerExporter:
    """Exports the store's expenses as CSV text or an XLSX workbook."""

    def __init__(self, store: CostStore):
        self._store = store

    def rows(self) -> list[list[object]]:
        """Ledger rows in store order; the amount column stays a Decimal."""
        names = {p.id: p.name for p in self._store.projects()}
        return [
            [
                e.id,
                names.get(e.project_id, MISSING_PROJECT),
                e.category,
                e.description,
                e.amount,
                e.date.isoformat(),
                e.type.value,
            ]
            for e in self._store.expenses()
        ]

    def to_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(LEDGER_HEADERS)
        rows = self.rows()
        writer.writerows(rows)
        logger.info("ledger_exported", extra={"format": "csv", "row_count": len(rows)})
        return buffer.getvalue()

    def write_csv(self, path: Path) -> Path:
        path.write_text(self.to_csv(), encoding="utf-8")
        return path

    def write_xlsx(self, path: Path) -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = "Harcamalar"
        ws.append(list(LEDGER_HEADERS))
        for cell in ws[1]:
            cell.font = Font(bold=True)

        rows = self.rows()
        for row in rows:
            ws.append(row)

        wb.save(path)
        logger.info("ledger_exported", extra={"format": "xlsx", "row_count": len(rows)})
        return path
