"""
Safety (HSE) Expiry Module.

Expiring asset documents, safety permits and employee certifications,
grouped by urgency.  Day arithmetic and urgency classification come from
``erp_engines.expiry``.
"""

from erp_modules.safety.expiry_check import (
    ACTIVE_PERMIT_STATUSES,
    combine_expiry_results,
    filter_by_item_type,
    filter_expiring_certifications,
    filter_expiring_documents,
    filter_expiring_permits,
    generate_expiry_summary,
    get_most_urgent_items,
    group_expiring_items,
    has_expired_items,
    has_items_expiring_this_week,
)
from erp_modules.safety.mappers import (
    asset_document_from_row,
    asset_document_to_row,
    certification_from_row,
    certification_to_row,
    safety_permit_from_row,
    safety_permit_to_row,
)
from erp_modules.safety.models import (
    AssetDocumentRecord,
    EmployeeCertificationRecord,
    ExpiringItem,
    ExpiryCheckResult,
    ExpiryItemType,
    ExpirySummary,
    SafetyPermitRecord,
)

__all__ = [
    "ACTIVE_PERMIT_STATUSES",
    "AssetDocumentRecord",
    "EmployeeCertificationRecord",
    "ExpiringItem",
    "ExpiryCheckResult",
    "ExpiryItemType",
    "ExpirySummary",
    "SafetyPermitRecord",
    "asset_document_from_row",
    "asset_document_to_row",
    "certification_from_row",
    "certification_to_row",
    "combine_expiry_results",
    "filter_by_item_type",
    "filter_expiring_certifications",
    "filter_expiring_documents",
    "filter_expiring_permits",
    "generate_expiry_summary",
    "get_most_urgent_items",
    "group_expiring_items",
    "has_expired_items",
    "has_items_expiring_this_week",
    "safety_permit_from_row",
    "safety_permit_to_row",
]
