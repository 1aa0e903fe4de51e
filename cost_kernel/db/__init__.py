"""Database layer - engine and base classes."""

from cost_kernel.db.base import Base, TrackedBase, UUIDString
from cost_kernel.db.engine import (
    build_engine,
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)

__all__ = [
    "build_engine",
    "create_tables",
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "session_scope",
    "Base",
    "TrackedBase",
    "UUIDString",
]
