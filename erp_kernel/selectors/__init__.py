"""Read-only selectors over the operational tables."""

from erp_kernel.selectors.base import BaseSelector
from erp_kernel.selectors.operational import (
    ExpirySelector,
    InvoiceSelector,
    JobOrderSelector,
    KPISnapshotSelector,
)

__all__ = [
    "BaseSelector",
    "ExpirySelector",
    "InvoiceSelector",
    "JobOrderSelector",
    "KPISnapshotSelector",
]
