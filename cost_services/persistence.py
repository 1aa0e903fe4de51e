"""
Persistence Port (``cost_services.persistence``).

Responsibility
--------------
Durable storage for whole collections.  The store hands the port the full
list of record dicts after every mutation; the port overwrites what it had.
Nothing is incremental.

Implementations
---------------
* ``InMemoryPersistence`` -- dict-backed; tests and throwaway sessions.
* ``SqlKeyValuePersistence`` -- SQLAlchemy; one ``kv_entries`` row per
  (namespace, collection) holding a JSON array.

Failure modes
-------------
* Backend errors and undecodable payloads raise ``PersistenceError``.
"""

from __future__ import annotations

import copy
import json
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from cost_kernel.db.engine import session_scope
from cost_kernel.exceptions import PersistenceError
from cost_kernel.logging_config import get_logger
from cost_services.orm import KeyValueEntryModel

logger = get_logger("services.persistence")

COLLECTIONS: tuple[str, ...] = ("projects", "expenses", "inventory", "labor")

Records = list[dict[str, Any]]


class PersistencePort(ABC):
    """
    Storage interface the store writes through.

    Contract:
        - ``load`` returns ``None`` when the collection was never saved,
          otherwise the last list passed to ``save``.
        - ``save`` replaces the stored collection wholesale.
    """

    @abstractmethod
    def load(self, collection: str) -> Records | None:
        ...

    @abstractmethod
    def save(self, collection: str, records: Records) -> None:
        ...


class InMemoryPersistence(PersistencePort):
    """Dict-backed persistence.  Records are deep-copied in and out."""

    def __init__(self, initial: dict[str, Records] | None = None):
        self._data: dict[str, Records] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    def load(self, collection: str) -> Records | None:
        if collection not in self._data:
            return None
        return copy.deepcopy(self._data[collection])

    def save(self, collection: str, records: Records) -> None:
        self._data[collection] = copy.deepcopy(records)
        self.save_count += 1


class SqlKeyValuePersistence(PersistencePort):
    """
    Key-value persistence on a SQLAlchemy database.

    Each save runs in its own transaction (``session_scope``).
    """

    def __init__(self, session_factory: sessionmaker[Session], namespace: str = "mega"):
        self._session_factory = session_factory
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def load(self, collection: str) -> Records | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.execute(
                    select(KeyValueEntryModel.value).where(
                        KeyValueEntryModel.namespace == self._namespace,
                        KeyValueEntryModel.key == collection,
                    )
                ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(collection, str(exc)) from exc

        if row is None:
            return None
        try:
            records = json.loads(row)
        except json.JSONDecodeError as exc:
            raise PersistenceError(collection, f"corrupt JSON payload: {exc}") from exc
        if not isinstance(records, list):
            raise PersistenceError(collection, "payload is not a JSON array")
        return records

    def save(self, collection: str, records: Records) -> None:
        payload = json.dumps(records, ensure_ascii=False)
        try:
            with session_scope(self._session_factory) as session:
                entry = session.execute(
                    select(KeyValueEntryModel).where(
                        KeyValueEntryModel.namespace == self._namespace,
                        KeyValueEntryModel.key == collection,
                    )
                ).scalar_one_or_none()
                if entry is None:
                    session.add(
                        KeyValueEntryModel(
                            namespace=self._namespace, key=collection, value=payload
                        )
                    )
                else:
                    entry.value = payload
        except SQLAlchemyError as exc:
            raise PersistenceError(collection, str(exc)) from exc

        logger.debug(
            "collection_saved",
            extra={
                "namespace": self._namespace,
                "collection": collection,
                "record_count": len(records),
            },
        )
