"""
Help Center Module.

Role- and page-aware selection of help articles and FAQs, category
grouping and search helpers.
"""

from erp_modules.help_center.content import (
    calculate_category_counts,
    filter_articles_by_category,
    filter_articles_by_role,
    filter_articles_by_route,
    filter_faqs_by_role,
    get_article_url,
    get_category_label,
    get_category_url,
    group_by_category,
    highlight_search_terms,
    is_sorted_by_display_order,
    is_valid_category,
    is_valid_search_query,
    is_visible_to_role,
    sort_by_display_order,
    sort_results_by_relevance,
    strip_html_tags,
    truncate_text,
)
from erp_modules.help_center.mappers import (
    article_from_row,
    article_to_row,
    faq_from_row,
    faq_to_row,
)
from erp_modules.help_center.models import (
    CATEGORY_LABELS,
    HelpArticle,
    HelpCategory,
    HelpCategoryInfo,
    HelpFAQ,
    HelpSearchResult,
)

__all__ = [
    "CATEGORY_LABELS",
    "HelpArticle",
    "HelpCategory",
    "HelpCategoryInfo",
    "HelpFAQ",
    "HelpSearchResult",
    "article_from_row",
    "article_to_row",
    "calculate_category_counts",
    "faq_from_row",
    "faq_to_row",
    "filter_articles_by_category",
    "filter_articles_by_role",
    "filter_articles_by_route",
    "filter_faqs_by_role",
    "get_article_url",
    "get_category_label",
    "get_category_url",
    "group_by_category",
    "highlight_search_terms",
    "is_sorted_by_display_order",
    "is_valid_category",
    "is_valid_search_query",
    "is_visible_to_role",
    "sort_by_display_order",
    "sort_results_by_relevance",
    "strip_html_tags",
    "truncate_text",
]
