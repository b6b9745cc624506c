"""
Help Center Models (``erp_modules.help_center.models``).

Responsibility
--------------
Value objects for help articles, FAQs, search hits and per-category
counts, plus the closed set of article categories.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* An empty ``applicable_roles`` tuple means the entry is visible to every
  role.
* ``HelpCategory`` lists categories in display order.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class HelpCategory(str, Enum):
    GETTING_STARTED = "getting_started"
    QUOTATIONS = "quotations"
    JOBS = "jobs"
    FINANCE = "finance"
    HR = "hr"
    REPORTS = "reports"
    TROUBLESHOOTING = "troubleshooting"


CATEGORY_LABELS: dict[HelpCategory, str] = {
    HelpCategory.GETTING_STARTED: "Getting Started",
    HelpCategory.QUOTATIONS: "Quotations & BD",
    HelpCategory.JOBS: "Jobs & Operations",
    HelpCategory.FINANCE: "Finance",
    HelpCategory.HR: "HR & Attendance",
    HelpCategory.REPORTS: "Reports",
    HelpCategory.TROUBLESHOOTING: "Troubleshooting",
}


@dataclass(frozen=True)
class HelpArticle:
    id: str
    article_slug: str
    title: str
    content: str
    category: HelpCategory
    summary: str | None = None
    tags: tuple[str, ...] = ()
    applicable_roles: tuple[str, ...] = ()
    related_routes: tuple[str, ...] = ()
    related_articles: tuple[str, ...] = ()
    view_count: int = 0
    helpful_count: int = 0
    not_helpful_count: int = 0
    is_published: bool = True
    display_order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class HelpFAQ:
    id: str
    question: str
    answer: str
    category: HelpCategory
    applicable_roles: tuple[str, ...] = ()
    display_order: int = 0
    created_at: datetime | None = None


@dataclass(frozen=True)
class HelpSearchResult:
    """A search hit over articles or FAQs; higher ``relevance`` ranks first."""
    result_type: str
    id: str
    title: str
    relevance: float
    snippet: str = ""
    url_or_slug: str = ""
    category: HelpCategory | None = None


@dataclass(frozen=True)
class HelpCategoryInfo:
    category: HelpCategory
    label: str
    article_count: int
