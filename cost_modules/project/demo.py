"""Demo projects installed on first run when nothing has been persisted."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from cost_modules.project.models import Project, ProjectCategory, ProjectStatus

DEMO_PROJECTS: tuple[Project, ...] = (
    Project(
        id="1",
        name="Manisa GES Projesi",
        category=ProjectCategory.SOLAR,
        location="Manisa, TR",
        status=ProjectStatus.ACTIVE,
        total_budget=Decimal("15000000"),
        capacity=Decimal("20"),
        start_date=date(2023, 1, 15),
        percent_complete=Decimal("45"),
    ),
    Project(
        id="2",
        name="Ankara-Niğde Otoyolu",
        category=ProjectCategory.ROAD,
        location="Ankara, TR",
        status=ProjectStatus.ACTIVE,
        total_budget=Decimal("45000000"),
        capacity=Decimal("12"),
        start_date=date(2023, 3, 10),
        percent_complete=Decimal("30"),
    ),
)
