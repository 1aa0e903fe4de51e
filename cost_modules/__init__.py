"""
Domain modules for the MegaCost cost tracker.

Each sub-package holds frozen dataclass records for one noun of the domain
(projects, expenses, inventory, labor).  No I/O, no database access.
"""
