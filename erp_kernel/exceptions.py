"""
Typed Exception Hierarchy for the ERP analytics layer.

Expected invalid input (a blank form field, an unknown enum value typed
by a user) is never an exception here: validators return a
``ValidationResult``.  Exceptions are reserved for boundary violations
that indicate a programming or deployment error -- a row that does not
have the shape of the table it claims to come from, a configuration
file with impossible thresholds, a malformed time string that slipped
past validation.

Every exception carries a ``code`` class attribute (machine-readable,
stable across message wording changes) and its structured data as
instance attributes, so callers catch by type and log by field:

    try:
        invoice = invoice_from_row(row)
    except RowShapeError as e:
        logger.warning("invoice_row_rejected", extra={"missing": e.missing})

Hierarchy::

    ErpKernelError (base)
    |
    +-- RowShapeError
    +-- ConfigurationError
    +-- ClassificationError
    |   +-- InvalidTimeFormatError
    |   +-- UnknownBucketError
    +-- DataAccessError
        +-- EngineNotInitializedError
"""

from collections.abc import Iterable


class ErpKernelError(Exception):
    """
    Base exception for all ERP kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "ERP_KERNEL_ERROR"


class RowShapeError(ErpKernelError):
    """A persistence row is missing fields required by its entity type."""

    code: str = "ROW_SHAPE_MISMATCH"

    def __init__(self, entity: str, missing: Iterable[str]):
        self.entity = entity
        self.missing = tuple(sorted(missing))
        super().__init__(
            f"Row for {entity} is missing required fields: {', '.join(self.missing)}"
        )


class ConfigurationError(ErpKernelError):
    """A configuration value is outside its allowed range."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for {field}: {reason}")


# Classification exceptions


class ClassificationError(ErpKernelError):
    """Base exception for classification primitives."""

    code: str = "CLASSIFICATION_ERROR"


class InvalidTimeFormatError(ClassificationError):
    """A time-of-day string is not in HH:MM form."""

    code: str = "INVALID_TIME_FORMAT"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid time of day (expected HH:MM): {value!r}")


class UnknownBucketError(ClassificationError):
    """A value fell outside every bucket of a malformed bucket sequence."""

    code: str = "UNKNOWN_BUCKET"

    def __init__(self, days: int, bucket_count: int):
        self.days = days
        self.bucket_count = bucket_count
        super().__init__(f"{days} days does not fit any of {bucket_count} buckets")


# Data access exceptions


class DataAccessError(ErpKernelError):
    """Base exception for the read path."""

    code: str = "DATA_ACCESS_ERROR"


class EngineNotInitializedError(DataAccessError):
    """The database engine was used before ``init_engine_from_url``."""

    code: str = "ENGINE_NOT_INITIALIZED"

    def __init__(self):
        super().__init__("Engine not initialized. Call init_engine_from_url() first.")
