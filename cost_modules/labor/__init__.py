"""Labor Module (``cost_modules.labor``)."""

from cost_modules.labor.models import LaborRecord

__all__ = [
    "LaborRecord",
]
