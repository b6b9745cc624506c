"""
Integration Models (``erp_modules.integration.models``).

Responsibility
--------------
Value objects for links to external systems (accounting, GPS, messaging):
the ID mapping between a local record and its external counterpart, and
the sync mapping that says which table goes where with which field
transforms and filters.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* An ``ExternalIdMapping`` belongs to exactly one connection and one local
  table; ownership is checked by exact equality on both.
* ``PreparedWrite.data`` is present iff validation passed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from erp_kernel.domain.validation import ValidationResult


class IntegrationType(str, Enum):
    ACCOUNTING = "accounting"
    TRACKING = "tracking"
    EMAIL = "email"
    STORAGE = "storage"
    MESSAGING = "messaging"
    CUSTOM = "custom"


class SyncDirection(str, Enum):
    PUSH = "push"
    PULL = "pull"
    BIDIRECTIONAL = "bidirectional"


class SyncFrequency(str, Enum):
    REALTIME = "realtime"
    HOURLY = "hourly"
    DAILY = "daily"
    MANUAL = "manual"


class TransformFunction(str, Enum):
    DATE_FORMAT = "date_format"
    CURRENCY_FORMAT = "currency_format"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    CUSTOM = "custom"


class FilterOperator(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    IN = "in"
    CONTAINS = "contains"


class SyncOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class ExternalIdMapping:
    id: str
    connection_id: str
    local_table: str
    local_id: str
    external_id: str
    external_data: dict[str, Any] | None = None
    synced_at: datetime | None = None


@dataclass(frozen=True)
class FieldMapping:
    local_field: str
    remote_field: str
    transform: TransformFunction | None = None


@dataclass(frozen=True)
class FilterCondition:
    field: str
    operator: FilterOperator
    value: Any = None


@dataclass(frozen=True)
class SyncMapping:
    id: str
    connection_id: str
    local_table: str
    remote_entity: str
    field_mappings: tuple[FieldMapping, ...]
    sync_direction: SyncDirection = SyncDirection.PUSH
    sync_frequency: SyncFrequency = SyncFrequency.REALTIME
    filter_conditions: tuple[FilterCondition, ...] | None = None
    is_active: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True)
class OperationPlan:
    """Create-or-update decision for one local record."""
    local_id: str
    operation: SyncOperation
    existing_mapping: ExternalIdMapping | None = None


@dataclass(frozen=True)
class PreparedWrite:
    """A validated, normalized row ready for insert, or the reasons it is not."""
    validation: ValidationResult
    data: dict[str, Any] | None = field(default=None)

    @property
    def valid(self) -> bool:
        return self.validation.valid

    @property
    def errors(self) -> tuple[str, ...]:
        return self.validation.errors
