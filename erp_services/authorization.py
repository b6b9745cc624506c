"""
erp_services.authorization -- Single home for role semantics.

Responsibility:
    Decide what a role may see: which reports, which report categories,
    and whether a role is admin-equivalent.  Every role check in the
    project goes through this module.

Architecture position:
    Services layer.  Pure lookups over a static, in-process catalogue;
    no I/O and no mutable state.

Invariants:
    - A decision is membership of the role in the report's allowed set.
      There is no special-cased admin bypass; admin-equivalent roles are
      listed on every report by data-entry convention.
    - ``can_access_report`` and ``get_visible_reports`` agree for every
      (role, report) pair by construction.
    - Category access is the union of the per-report rules in that
      category.
    - Unknown roles, report ids and categories are denied, never raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from erp_kernel.logging_config import get_logger

logger = get_logger("services.authorization")


class Role(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    OPS = "ops"
    FINANCE = "finance"
    SALES = "sales"
    VIEWER = "viewer"


ADMIN_ROLES: frozenset[Role] = frozenset({Role.OWNER, Role.ADMIN, Role.MANAGER})


class ReportCategory(str, Enum):
    FINANCIAL = "financial"
    OPERATIONAL = "operational"
    AR = "ar"
    SALES = "sales"


@dataclass(frozen=True)
class ReportDefinition:
    id: str
    name: str
    category: ReportCategory
    href: str
    allowed_roles: frozenset[Role]
    description: str = ""


def _report(
    report_id: str,
    name: str,
    category: ReportCategory,
    roles: Iterable[Role],
    description: str = "",
) -> ReportDefinition:
    return ReportDefinition(
        id=report_id,
        name=name,
        category=category,
        href=f"/reports/{report_id}",
        allowed_roles=frozenset(roles),
        description=description,
    )


REPORT_CATALOGUE: tuple[ReportDefinition, ...] = (
    # Financial
    _report("profit-loss", "Profit & Loss Statement", ReportCategory.FINANCIAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE],
            "Revenue, cost and margin for a period"),
    _report("revenue-customer", "Revenue by Customer", ReportCategory.FINANCIAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE, Role.SALES]),
    _report("revenue-by-customer", "Customer Revenue Ranking", ReportCategory.FINANCIAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE, Role.SALES]),
    _report("revenue-project", "Revenue by Project", ReportCategory.FINANCIAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE]),
    _report("cost-analysis", "Cost Analysis", ReportCategory.FINANCIAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE]),
    # Operational
    _report("budget-variance", "Budget Variance", ReportCategory.OPERATIONAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.OPS]),
    _report("jo-summary", "Job Order Summary", ReportCategory.OPERATIONAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.OPS]),
    _report("on-time-delivery", "On-Time Delivery", ReportCategory.OPERATIONAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.OPS]),
    _report("vendor-performance", "Vendor Performance", ReportCategory.OPERATIONAL,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.OPS]),
    # Accounts receivable
    _report("ar-aging", "AR Aging", ReportCategory.AR,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE],
            "Unpaid invoices by days overdue"),
    _report("outstanding-invoices", "Outstanding Invoices", ReportCategory.AR,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE]),
    _report("customer-payment-history", "Customer Payment History", ReportCategory.AR,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.FINANCE]),
    # Sales
    _report("quotation-conversion", "Quotation Conversion", ReportCategory.SALES,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.SALES]),
    _report("sales-pipeline", "Sales Pipeline", ReportCategory.SALES,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.SALES]),
    _report("customer-acquisition", "Customer Acquisition", ReportCategory.SALES,
            [Role.OWNER, Role.ADMIN, Role.MANAGER, Role.SALES]),
)

_REPORTS_BY_ID: dict[str, ReportDefinition] = {r.id: r for r in REPORT_CATALOGUE}


def parse_role(role: str | Role) -> Role | None:
    """The ``Role`` for a role string, or None if it is not a known role."""
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def is_admin_role(role: str | Role) -> bool:
    return parse_role(role) in ADMIN_ROLES


def get_report(report_id: str) -> ReportDefinition | None:
    return _REPORTS_BY_ID.get(report_id)


def get_visible_reports(role: str | Role) -> list[ReportDefinition]:
    parsed = parse_role(role)
    return [r for r in REPORT_CATALOGUE if parsed in r.allowed_roles]


def can_access_report(role: str | Role, report_id: str) -> bool:
    report = get_report(report_id)
    return report is not None and parse_role(role) in report.allowed_roles


def get_reports_by_category(role: str | Role) -> dict[ReportCategory, list[ReportDefinition]]:
    """Visible reports per category; every category is present, possibly empty."""
    grouped: dict[ReportCategory, list[ReportDefinition]] = {c: [] for c in ReportCategory}
    for report in get_visible_reports(role):
        grouped[report.category].append(report)
    return grouped


def can_access_category(role: str | Role, category: str | ReportCategory) -> bool:
    try:
        wanted = ReportCategory(category)
    except ValueError:
        return False
    return any(r.category == wanted for r in get_visible_reports(role))


def can_access(role: str | Role, resource: str | ReportCategory | ReportDefinition) -> bool:
    """
    Generic access check.

    ``resource`` is a report definition, a report category, or a report id
    string.  A string naming a category (``"financial"``) is checked as a
    category.
    """
    if isinstance(resource, ReportDefinition):
        allowed = can_access_report(role, resource.id)
    elif isinstance(resource, ReportCategory):
        allowed = can_access_category(role, resource)
    elif resource in _REPORTS_BY_ID:
        allowed = can_access_report(role, resource)
    else:
        allowed = can_access_category(role, resource)

    if not allowed:
        logger.debug(
            "access_denied",
            extra={"role": str(getattr(role, "value", role)), "resource": str(getattr(resource, "id", resource))},
        )
    return allowed
