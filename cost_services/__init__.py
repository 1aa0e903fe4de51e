"""
Stateful services for the cost tracker: the store and its persistence
port, portfolio dashboard aggregation, ledger export, AI insight requests
and the command-line interface.
"""

from cost_services.persistence import (
    COLLECTIONS,
    InMemoryPersistence,
    PersistencePort,
    SqlKeyValuePersistence,
)
from cost_services.store import CostStore

__all__ = [
    "COLLECTIONS",
    "CostStore",
    "InMemoryPersistence",
    "PersistencePort",
    "SqlKeyValuePersistence",
]
