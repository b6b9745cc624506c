"""
ERP Modules.

Per-domain models, row mappers, validators and report builders on top of
the kernel and the pure engines.  Each module contains:
- Domain models (frozen dataclasses, the nouns)
- Row mappers (persistence row <-> model, one pair per entity)
- Validators (returning ValidationResult, never raising)
- Report builders (folds over mapped models)

Modules:
- reports: AR aging report
- kpi: Weekly KPI snapshots, metrics and week-over-week trends
- safety: Expiring documents, permits and certifications
- notifications: Channels, preferences, templates, phone validation
- help_center: Articles and FAQs, role/route filtering
- surveys: Route surveys, waypoints and passability
- integration: External ID mappings

Classification and aggregation arithmetic lives in ``erp_engines``.
"""

from erp_modules import (
    help_center,
    integration,
    kpi,
    notifications,
    reports,
    safety,
    surveys,
)

__all__ = [
    "help_center",
    "integration",
    "kpi",
    "notifications",
    "reports",
    "safety",
    "surveys",
]
