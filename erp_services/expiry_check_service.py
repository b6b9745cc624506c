"""
ExpiryCheckService -- Daily expiry sweep over documents, permits and
certifications.

Architecture: erp_services -- imperative shell.
    Reads rows through ``ExpirySelector``, maps them, and composes the
    pure filters in ``erp_modules.safety``.

Invariants enforced:
    - Items further out than the configured lookahead never appear.
    - The three sources are combined into one result grouped by urgency.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from erp_config import AnalyticsConfig
from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.logging_config import get_logger
from erp_kernel.selectors import ExpirySelector
from erp_modules.safety import (
    ExpiringItem,
    ExpiryCheckResult,
    ExpirySummary,
    asset_document_from_row,
    certification_from_row,
    filter_expiring_certifications,
    filter_expiring_documents,
    filter_expiring_permits,
    generate_expiry_summary,
    get_most_urgent_items,
    group_expiring_items,
    safety_permit_from_row,
)

logger = get_logger("services.expiry_check")


class ExpiryCheckService:
    """Find everything expiring within the lookahead window.

    Contract:
        - ``run()`` returns the grouped result for a reference date
          (default: the clock's today).
        - ``summary()`` returns counts by urgency and by item type.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: AnalyticsConfig | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._config = config or AnalyticsConfig.with_defaults()
        self._selector = ExpirySelector(session)

    def _items(self, reference: date) -> list[ExpiringItem]:
        window = self._config.expiry_lookahead_days
        week = self._config.expiring_this_week_days
        documents = [asset_document_from_row(r) for r in self._selector.documents()]
        permits = [safety_permit_from_row(r) for r in self._selector.permits()]
        certifications = [certification_from_row(r) for r in self._selector.certifications()]
        return [
            *filter_expiring_documents(documents, reference, window, week),
            *filter_expiring_permits(permits, reference, window, week),
            *filter_expiring_certifications(certifications, reference, window, week),
        ]

    def run(self, reference_date: date | None = None) -> ExpiryCheckResult:
        reference = reference_date or self._clock.today()
        result = group_expiring_items(self._items(reference))
        logger.info(
            "expiry_check_completed",
            extra={
                "reference_date": reference.isoformat(),
                "expired": len(result.expired),
                "expiring_this_week": len(result.expiring_this_week),
                "expiring_this_month": len(result.expiring_this_month),
            },
        )
        return result

    def summary(self, reference_date: date | None = None) -> ExpirySummary:
        reference = reference_date or self._clock.today()
        return generate_expiry_summary(
            self.run(reference), reference, self._config.expiry_lookahead_days
        )

    def most_urgent(self, limit: int = 10, reference_date: date | None = None) -> list[ExpiringItem]:
        return get_most_urgent_items(self.run(reference_date), limit)
