"""
Typed exception hierarchy for the cost tracker.

Every error carries a ``code`` class attribute (machine-readable, stable
across message wording changes) and stores its context as attributes so the
structured log formatter can emit them as ``exc_<field>`` keys.

    CostTrackerError (base)
    |
    +-- RecordError
    |   +-- RecordNotFoundError
    |   +-- DuplicateRecordError
    |
    +-- PersistenceError
    |
    +-- InsightConfigurationError
    |
    +-- ConfigurationError

The metrics engine raises none of these: degenerate arithmetic is resolved
by sentinel values, never by exceptions.

Code                         | When raised
-----------------------------|---------------------------------------------
RECORD_NOT_FOUND             | Unknown id on remove/lookup, unknown project
                             | referenced by a new expense or labor record
DUPLICATE_RECORD             | Adding a record whose id already exists
PERSISTENCE_ERROR            | Storage backend failure or corrupt payload
INSIGHT_CONFIGURATION_ERROR  | Text-generation client cannot be built
CONFIGURATION_ERROR          | Invalid configuration value
"""


class CostTrackerError(Exception):
    """
    Base exception for all cost tracker errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "COST_TRACKER_ERROR"


class RecordError(CostTrackerError):
    """Base exception for record-level errors in the store."""

    code: str = "RECORD_ERROR"


class RecordNotFoundError(RecordError):
    """No record with the given id exists in the collection."""

    code: str = "RECORD_NOT_FOUND"

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record not found: {record_id}")


class DuplicateRecordError(RecordError):
    """A record with the given id already exists in the collection."""

    code: str = "DUPLICATE_RECORD"

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record already exists: {record_id}")


class PersistenceError(CostTrackerError):
    """The persistence backend failed to load or save a collection."""

    code: str = "PERSISTENCE_ERROR"

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        self.reason = reason
        super().__init__(f"Persistence failure for '{collection}': {reason}")


class InsightConfigurationError(CostTrackerError):
    """The text-generation client could not be configured."""

    code: str = "INSIGHT_CONFIGURATION_ERROR"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Insight service misconfigured: {reason}")


class ConfigurationError(CostTrackerError):
    """A configuration value is missing or invalid."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")
