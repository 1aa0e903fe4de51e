"""
Project Module (``cost_modules.project``).

Responsibility
--------------
Capital project records for the two supported verticals (solar plants in
MW, roads in KM), their reference budget templates and the demo projects
seeded on first run.

Failure modes
-------------
* Out-of-range ``percent_complete``, non-positive ``total_budget`` or
  negative ``capacity`` raise ``ValueError`` at construction.
"""

from cost_modules.project.demo import DEMO_PROJECTS
from cost_modules.project.models import Project, ProjectCategory, ProjectStatus
from cost_modules.project.templates import (
    ROAD_BUDGET_TEMPLATE,
    SOLAR_BUDGET_TEMPLATE,
    BudgetTemplateItem,
    planned_by_category,
    template_for,
    template_total,
)

__all__ = [
    "BudgetTemplateItem",
    "DEMO_PROJECTS",
    "Project",
    "ProjectCategory",
    "ProjectStatus",
    "ROAD_BUDGET_TEMPLATE",
    "SOLAR_BUDGET_TEMPLATE",
    "planned_by_category",
    "template_for",
    "template_total",
]
