"""
Safety Expiry Models (``erp_modules.safety.models``).

Responsibility
--------------
Frozen dataclass value objects for the daily expiry check: the three
source records (asset documents, safety permits, employee
certifications), the normalized expiring item, the grouped result and
its summary.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``; collections are tuples.
* ``ExpiryCheckResult.total_count`` equals the number of items across
  the three urgency groups.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from erp_engines.expiry import ExpiryUrgency


class ExpiryItemType(str, Enum):
    DOCUMENT = "document"
    PERMIT = "permit"
    CERTIFICATION = "certification"


@dataclass(frozen=True)
class AssetDocumentRecord:
    id: str
    document_name: str
    document_type: str
    expiry_date: date | None = None
    asset_id: str | None = None
    asset_code: str | None = None
    asset_name: str | None = None
    uploaded_by: str | None = None


@dataclass(frozen=True)
class SafetyPermitRecord:
    id: str
    permit_type: str
    work_description: str
    work_location: str
    valid_to: date
    status: str
    permit_number: str | None = None
    requested_by: str | None = None
    requester_name: str | None = None


@dataclass(frozen=True)
class EmployeeCertificationRecord:
    id: str
    employee_id: str
    employee_name: str
    skill_id: str
    skill_name: str
    skill_code: str
    is_certified: bool
    expiry_date: date | None = None
    certification_number: str | None = None


@dataclass(frozen=True)
class ExpiringItem:
    """
    Any expiring item, normalized for listing and notification.

    The common fields are always set; the type-specific fields are only
    set for the matching ``item_type``.
    """
    id: str
    item_type: ExpiryItemType
    name: str
    description: str | None
    expiry_date: date
    days_until_expiry: int
    urgency: ExpiryUrgency
    responsible_user_id: str | None = None
    responsible_user_name: str | None = None
    parent_id: str | None = None
    parent_name: str | None = None
    # document
    document_type: str | None = None
    asset_id: str | None = None
    asset_code: str | None = None
    # permit
    permit_type: str | None = None
    permit_number: str | None = None
    work_location: str | None = None
    # certification
    skill_name: str | None = None
    skill_code: str | None = None
    employee_id: str | None = None
    employee_name: str | None = None
    certification_number: str | None = None


@dataclass(frozen=True)
class ExpiryCheckResult:
    expired: tuple[ExpiringItem, ...] = ()
    expiring_this_week: tuple[ExpiringItem, ...] = ()
    expiring_this_month: tuple[ExpiringItem, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.expired) + len(self.expiring_this_week) + len(self.expiring_this_month)

    def all_items(self) -> tuple[ExpiringItem, ...]:
        """Items in urgency order: expired, this week, this month."""
        return self.expired + self.expiring_this_week + self.expiring_this_month


@dataclass(frozen=True)
class ExpirySummary:
    total_count: int
    by_urgency: dict[ExpiryUrgency, int]
    by_type: dict[ExpiryItemType, int]
    check_date: date
    lookahead_days: int
