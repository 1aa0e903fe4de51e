"""
ORM Registry (``cost_services._orm_registry``).

Responsibility
--------------
Import every SQLAlchemy ORM module so that ``Base.metadata`` holds their
table definitions, then create the schema.  The kernel's
``create_tables()`` only creates what is already registered and never
imports upward, so this is the one place that knows where models live.

Usage
-----
``cli.open_store`` and ``tests/conftest.py`` call ``create_all_tables()``.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine


def import_all_orm_models() -> None:
    """Register all ORM models on ``Base.metadata``.  Idempotent."""
    import cost_services.orm  # noqa: F401


def create_all_tables(engine: Engine | None = None) -> None:
    """Register the ORM models and create their tables on ``engine``."""
    from cost_kernel.db.engine import create_tables

    import_all_orm_models()
    create_tables(engine)
