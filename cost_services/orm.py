"""
SQLAlchemy ORM persistence model for collection snapshots.

Each row holds one whole collection (``projects``, ``expenses``,
``inventory`` or ``labor``) of one namespace as a JSON array.  Saves
overwrite the row; there is no per-record table and no schema versioning.

Invariants enforced
-------------------
* (namespace, key) is unique.
* ``value`` is a JSON array serialised as text.
"""

from sqlalchemy import Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cost_kernel.db.base import TrackedBase


class KeyValueEntryModel(TrackedBase):
    """A persisted collection snapshot."""

    __tablename__ = "kv_entries"

    __table_args__ = (
        UniqueConstraint("namespace", "key", name="uq_kv_namespace_key"),
        Index("idx_kv_namespace", "namespace"),
    )

    namespace: Mapped[str] = mapped_column(String(64), nullable=False)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueEntryModel {self.namespace}/{self.key}>"
