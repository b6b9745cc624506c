"""
Help Center Content Selection (``erp_modules.help_center.content``).

Responsibility
--------------
Choose and order the help articles and FAQs a user sees: by role, by the
page they are on, by category, and by search relevance.

Architecture position
---------------------
**Modules layer** -- pure functions over already-mapped models.

Invariants enforced
-------------------
* An entry with no applicable roles is visible to every role.
* Route matching ignores one trailing ``/`` on either side.
* Every sort returns a new list, is stable, and leaves the input alone.
* Category grouping and counts always include every ``HelpCategory``,
  empty or not, in display order.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import TypeVar

from erp_modules.help_center.models import (
    CATEGORY_LABELS,
    HelpArticle,
    HelpCategory,
    HelpCategoryInfo,
    HelpFAQ,
    HelpSearchResult,
)

MIN_SEARCH_QUERY_LENGTH = 2

_Entry = TypeVar("_Entry", HelpArticle, HelpFAQ)
_TAG_PATTERN = re.compile(r"<[^>]*>")


def is_visible_to_role(applicable_roles: Iterable[str], role: str) -> bool:
    roles = tuple(applicable_roles)
    return not roles or role in roles


def filter_articles_by_role(articles: Iterable[HelpArticle], role: str) -> list[HelpArticle]:
    return [a for a in articles if is_visible_to_role(a.applicable_roles, role)]


def filter_faqs_by_role(faqs: Iterable[HelpFAQ], role: str) -> list[HelpFAQ]:
    return [f for f in faqs if is_visible_to_role(f.applicable_roles, role)]


def normalize_route(route: str) -> str:
    return route[:-1] if route.endswith("/") else route


def filter_articles_by_route(articles: Iterable[HelpArticle], current_route: str) -> list[HelpArticle]:
    """Articles whose related routes include the page being viewed."""
    target = normalize_route(current_route)
    return [
        a for a in articles
        if any(normalize_route(r) == target for r in a.related_routes)
    ]


def sort_by_display_order(entries: Iterable[_Entry]) -> list[_Entry]:
    return sorted(entries, key=lambda e: e.display_order)


def sort_results_by_relevance(results: Iterable[HelpSearchResult]) -> list[HelpSearchResult]:
    return sorted(results, key=lambda r: r.relevance, reverse=True)


def is_sorted_by_display_order(entries: Sequence[HelpArticle | HelpFAQ]) -> bool:
    return all(
        entries[i - 1].display_order <= entries[i].display_order
        for i in range(1, len(entries))
    )


def group_by_category(entries: Iterable[_Entry]) -> dict[HelpCategory, list[_Entry]]:
    """Entries per category, each list sorted by display order."""
    grouped: dict[HelpCategory, list[_Entry]] = {c: [] for c in HelpCategory}
    for entry in entries:
        grouped[entry.category].append(entry)
    return {c: sort_by_display_order(items) for c, items in grouped.items()}


def calculate_category_counts(articles: Iterable[HelpArticle]) -> list[HelpCategoryInfo]:
    counts = {c: 0 for c in HelpCategory}
    for article in articles:
        counts[article.category] += 1
    return [
        HelpCategoryInfo(category=c, label=CATEGORY_LABELS[c], article_count=counts[c])
        for c in HelpCategory
    ]


def filter_articles_by_category(
    articles: Iterable[HelpArticle],
    category: HelpCategory,
) -> list[HelpArticle]:
    return sort_by_display_order(a for a in articles if a.category == category)


def get_category_label(category: str) -> str:
    """Display label; unknown categories fall back to their raw value."""
    if is_valid_category(category):
        return CATEGORY_LABELS[HelpCategory(category)]
    return category


def get_article_url(slug: str) -> str:
    return f"/help/articles/{slug}"


def get_category_url(category: HelpCategory) -> str:
    return f"/help/category/{category.value}"


def is_valid_category(category: str) -> bool:
    return category in {c.value for c in HelpCategory}


def is_valid_search_query(query: str | None) -> bool:
    return query is not None and len(query.strip()) >= MIN_SEARCH_QUERY_LENGTH


def highlight_search_terms(text: str, query: str) -> str:
    """Wrap every case-insensitive match of any query word in ``<mark>``."""
    if not text or not is_valid_search_query(query):
        return text
    words = query.split()
    pattern = re.compile("(" + "|".join(re.escape(w) for w in words) + ")", re.IGNORECASE)
    return pattern.sub(r"<mark>\1</mark>", text)


def strip_html_tags(text: str) -> str:
    return _TAG_PATTERN.sub("", text)


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 3, 0)] + "..."
