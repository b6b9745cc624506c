"""
Expiry Check (``erp_modules.safety.expiry_check``).

Responsibility
--------------
Turn asset documents, safety permits and employee certifications into
expiring items classified by urgency, and summarize them for the daily
HSE expiry notification.

Architecture position
---------------------
**Modules layer** -- composes ``erp_engines.expiry``.  No I/O and no
clock: the reference date is a parameter.

Invariants enforced
-------------------
* Only items with ``days_until_expiry <= within_days`` are returned;
  already-expired items always qualify.
* Documents without an expiry date are skipped.
* Only ``active`` or ``approved`` permits are checked.
* Only certified employees with an expiry date are checked.
* Item order within each urgency group follows input order; sorting
  never mutates an input.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from erp_engines.expiry import (
    DEFAULT_EXPIRY_LOOKAHEAD_DAYS,
    EXPIRING_THIS_WEEK_DAYS,
    ExpiryUrgency,
    classify_expiry_urgency,
    days_until_expiry,
)
from erp_kernel.logging_config import get_logger
from erp_modules.safety.models import (
    AssetDocumentRecord,
    EmployeeCertificationRecord,
    ExpiringItem,
    ExpiryCheckResult,
    ExpiryItemType,
    ExpirySummary,
    SafetyPermitRecord,
)

logger = get_logger("modules.safety.expiry_check")

ACTIVE_PERMIT_STATUSES: frozenset[str] = frozenset({"active", "approved"})


def filter_expiring_documents(
    documents: Iterable[AssetDocumentRecord],
    reference_date: date,
    within_days: int = DEFAULT_EXPIRY_LOOKAHEAD_DAYS,
    this_week_days: int = EXPIRING_THIS_WEEK_DAYS,
) -> list[ExpiringItem]:
    items: list[ExpiringItem] = []
    for doc in documents:
        if doc.expiry_date is None:
            continue
        days = days_until_expiry(doc.expiry_date, reference_date)
        if days > within_days:
            continue
        items.append(
            ExpiringItem(
                id=doc.id,
                item_type=ExpiryItemType.DOCUMENT,
                name=doc.document_name,
                description=None,
                expiry_date=doc.expiry_date,
                days_until_expiry=days,
                urgency=classify_expiry_urgency(days, this_week_days),
                responsible_user_id=doc.uploaded_by or None,
                parent_id=doc.asset_id,
                parent_name=doc.asset_name or None,
                document_type=doc.document_type,
                asset_id=doc.asset_id,
                asset_code=doc.asset_code or None,
            )
        )
    return items


def filter_expiring_permits(
    permits: Iterable[SafetyPermitRecord],
    reference_date: date,
    within_days: int = DEFAULT_EXPIRY_LOOKAHEAD_DAYS,
    this_week_days: int = EXPIRING_THIS_WEEK_DAYS,
) -> list[ExpiringItem]:
    items: list[ExpiringItem] = []
    for permit in permits:
        if permit.status not in ACTIVE_PERMIT_STATUSES:
            continue
        days = days_until_expiry(permit.valid_to, reference_date)
        if days > within_days:
            continue
        items.append(
            ExpiringItem(
                id=permit.id,
                item_type=ExpiryItemType.PERMIT,
                name=permit.work_description,
                description=f"{permit.permit_type} at {permit.work_location}",
                expiry_date=permit.valid_to,
                days_until_expiry=days,
                urgency=classify_expiry_urgency(days, this_week_days),
                responsible_user_id=permit.requested_by or None,
                responsible_user_name=permit.requester_name or None,
                permit_type=permit.permit_type,
                permit_number=permit.permit_number or None,
                work_location=permit.work_location,
            )
        )
    return items


def filter_expiring_certifications(
    certifications: Iterable[EmployeeCertificationRecord],
    reference_date: date,
    within_days: int = DEFAULT_EXPIRY_LOOKAHEAD_DAYS,
    this_week_days: int = EXPIRING_THIS_WEEK_DAYS,
) -> list[ExpiringItem]:
    items: list[ExpiringItem] = []
    for cert in certifications:
        if not cert.is_certified or cert.expiry_date is None:
            continue
        days = days_until_expiry(cert.expiry_date, reference_date)
        if days > within_days:
            continue
        items.append(
            ExpiringItem(
                id=cert.id,
                item_type=ExpiryItemType.CERTIFICATION,
                name=f"{cert.skill_name} - {cert.employee_name}",
                description=f"Certification for {cert.skill_name}",
                expiry_date=cert.expiry_date,
                days_until_expiry=days,
                urgency=classify_expiry_urgency(days, this_week_days),
                responsible_user_id=cert.employee_id,
                responsible_user_name=cert.employee_name,
                parent_id=cert.employee_id,
                parent_name=cert.employee_name,
                skill_name=cert.skill_name,
                skill_code=cert.skill_code,
                employee_id=cert.employee_id,
                employee_name=cert.employee_name,
                certification_number=cert.certification_number or None,
            )
        )
    return items


def group_expiring_items(items: Iterable[ExpiringItem]) -> ExpiryCheckResult:
    groups: dict[ExpiryUrgency, list[ExpiringItem]] = {u: [] for u in ExpiryUrgency}
    for item in items:
        groups[item.urgency].append(item)
    return ExpiryCheckResult(
        expired=tuple(groups[ExpiryUrgency.EXPIRED]),
        expiring_this_week=tuple(groups[ExpiryUrgency.EXPIRING_THIS_WEEK]),
        expiring_this_month=tuple(groups[ExpiryUrgency.EXPIRING_THIS_MONTH]),
    )


def generate_expiry_summary(
    result: ExpiryCheckResult,
    check_date: date,
    lookahead_days: int = DEFAULT_EXPIRY_LOOKAHEAD_DAYS,
) -> ExpirySummary:
    by_type = dict.fromkeys(ExpiryItemType, 0)
    for item in result.all_items():
        by_type[item.item_type] += 1

    summary = ExpirySummary(
        total_count=result.total_count,
        by_urgency={
            ExpiryUrgency.EXPIRED: len(result.expired),
            ExpiryUrgency.EXPIRING_THIS_WEEK: len(result.expiring_this_week),
            ExpiryUrgency.EXPIRING_THIS_MONTH: len(result.expiring_this_month),
        },
        by_type=by_type,
        check_date=check_date,
        lookahead_days=lookahead_days,
    )
    logger.info(
        "expiry_check_summarized",
        extra={
            "check_date": check_date.isoformat(),
            "total_count": summary.total_count,
            "expired_count": len(result.expired),
            "lookahead_days": lookahead_days,
        },
    )
    return summary


def has_expired_items(result: ExpiryCheckResult) -> bool:
    return len(result.expired) > 0


def has_items_expiring_this_week(result: ExpiryCheckResult) -> bool:
    return len(result.expiring_this_week) > 0


def get_most_urgent_items(result: ExpiryCheckResult, limit: int = 10) -> list[ExpiringItem]:
    """Fewest days until expiry first; ties keep urgency-group order."""
    return sorted(result.all_items(), key=lambda item: item.days_until_expiry)[:limit]


def filter_by_item_type(
    result: ExpiryCheckResult,
    item_type: ExpiryItemType,
) -> ExpiryCheckResult:
    def keep(items: tuple[ExpiringItem, ...]) -> tuple[ExpiringItem, ...]:
        return tuple(item for item in items if item.item_type == item_type)

    return ExpiryCheckResult(
        expired=keep(result.expired),
        expiring_this_week=keep(result.expiring_this_week),
        expiring_this_month=keep(result.expiring_this_month),
    )


def combine_expiry_results(results: Iterable[ExpiryCheckResult]) -> ExpiryCheckResult:
    expired: list[ExpiringItem] = []
    this_week: list[ExpiringItem] = []
    this_month: list[ExpiringItem] = []
    for result in results:
        expired.extend(result.expired)
        this_week.extend(result.expiring_this_week)
        this_month.extend(result.expiring_this_month)
    return ExpiryCheckResult(
        expired=tuple(expired),
        expiring_this_week=tuple(this_week),
        expiring_this_month=tuple(this_month),
    )
