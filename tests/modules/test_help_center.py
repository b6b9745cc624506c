"""Tests for help article and FAQ selection."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from erp_modules.help_center import (
    HelpArticle,
    HelpCategory,
    HelpFAQ,
    HelpSearchResult,
    article_from_row,
    article_to_row,
    calculate_category_counts,
    faq_from_row,
    faq_to_row,
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
    sort_by_display_order,
    sort_results_by_relevance,
    strip_html_tags,
    truncate_text,
)


def _article(
    slug: str,
    *,
    category: HelpCategory = HelpCategory.FINANCE,
    roles: tuple[str, ...] = (),
    routes: tuple[str, ...] = (),
    order: int = 0,
) -> HelpArticle:
    return HelpArticle(
        id=f"id-{slug}",
        article_slug=slug,
        title=slug.replace("-", " ").title(),
        content=f"<p>{slug}</p>",
        category=category,
        applicable_roles=roles,
        related_routes=routes,
        display_order=order,
    )


class TestRoleFiltering:
    def test_empty_roles_visible_to_all(self):
        articles = [_article("intro"), _article("ledger", roles=("finance",))]
        assert [a.article_slug for a in filter_articles_by_role(articles, "viewer")] == ["intro"]
        assert len(filter_articles_by_role(articles, "finance")) == 2

    def test_faqs(self):
        faqs = [
            HelpFAQ("1", "Q?", "A.", HelpCategory.HR, applicable_roles=("hr",)),
            HelpFAQ("2", "Q2?", "A2.", HelpCategory.HR),
        ]
        assert [f.id for f in filter_faqs_by_role(faqs, "sales")] == ["2"]


class TestRouteFiltering:
    def test_trailing_slash_ignored_both_sides(self):
        articles = [
            _article("a", routes=("/finance/invoices/",)),
            _article("b", routes=("/finance/invoices",)),
            _article("c", routes=("/jobs",)),
        ]
        assert [a.article_slug for a in filter_articles_by_route(articles, "/finance/invoices/")] == ["a", "b"]
        assert [a.article_slug for a in filter_articles_by_route(articles, "/finance/invoices")] == ["a", "b"]


class TestOrdering:
    def test_sort_by_display_order_stable_and_pure(self):
        articles = [_article("b", order=2), _article("a1", order=1), _article("a2", order=1)]
        snapshot = list(articles)
        ordered = sort_by_display_order(articles)
        assert [a.article_slug for a in ordered] == ["a1", "a2", "b"]
        assert articles == snapshot
        assert is_sorted_by_display_order(ordered)
        assert not is_sorted_by_display_order(articles)

    def test_relevance_descending(self):
        results = [
            HelpSearchResult("article", "1", "A", 0.2),
            HelpSearchResult("faq", "2", "B", 0.9),
        ]
        assert [r.id for r in sort_results_by_relevance(results)] == ["2", "1"]

    @given(st.lists(st.integers(min_value=-5, max_value=5), max_size=20))
    def test_sort_never_mutates_input(self, orders):
        articles = [_article(f"s{i}", order=o) for i, o in enumerate(orders)]
        snapshot = list(articles)
        ordered = sort_by_display_order(articles)
        assert articles == snapshot
        assert is_sorted_by_display_order(ordered)
        assert sorted(a.id for a in ordered) == sorted(a.id for a in articles)


class TestCategories:
    def test_group_includes_every_category(self):
        grouped = group_by_category([_article("x", category=HelpCategory.JOBS)])
        assert list(grouped) == list(HelpCategory)
        assert len(grouped[HelpCategory.JOBS]) == 1
        assert grouped[HelpCategory.HR] == []

    def test_counts(self):
        articles = [_article("a"), _article("b"), _article("c", category=HelpCategory.REPORTS)]
        counts = {info.category: info.article_count for info in calculate_category_counts(articles)}
        assert counts[HelpCategory.FINANCE] == 2
        assert counts[HelpCategory.REPORTS] == 1
        assert counts[HelpCategory.GETTING_STARTED] == 0

    def test_filter_by_category_sorted(self):
        articles = [_article("b", order=5), _article("a", order=1), _article("x", category=HelpCategory.HR)]
        assert [a.article_slug for a in filter_articles_by_category(articles, HelpCategory.FINANCE)] == ["a", "b"]

    def test_labels_and_urls(self):
        assert get_category_label("finance") == "Finance"
        assert get_category_label("mystery") == "mystery"
        assert get_article_url("getting-started") == "/help/articles/getting-started"
        assert get_category_url(HelpCategory.JOBS) == "/help/category/jobs"
        assert is_valid_category("hr")
        assert not is_valid_category("HR")


class TestSearchHelpers:
    @pytest.mark.parametrize("query, ok", [("ab", True), ("  a ", False), ("", False), (None, False)])
    def test_query_validity(self, query, ok):
        assert is_valid_search_query(query) is ok

    def test_highlight(self):
        assert highlight_search_terms("Create Invoice now", "invoice create") == (
            "<mark>Create</mark> <mark>Invoice</mark> now"
        )

    def test_highlight_short_query_unchanged(self):
        assert highlight_search_terms("text", "x") == "text"

    def test_strip_and_truncate(self):
        assert strip_html_tags("<p>Hello <b>there</b></p>") == "Hello there"
        assert truncate_text("abcdefghij", 6) == "abc..."
        assert truncate_text("short", 10) == "short"


class TestHelpMappers:
    def test_article_round_trip(self):
        article = _article("intro", roles=("finance",), routes=("/finance",), order=3)
        assert article_from_row(article_to_row(article)) == article

    def test_faq_round_trip(self):
        faq = HelpFAQ("1", "Q?", "A.", HelpCategory.HR, applicable_roles=("hr",), display_order=2)
        assert faq_from_row(faq_to_row(faq)) == faq

    def test_unknown_category_rejected(self):
        row = article_to_row(_article("x"))
        row["category"] = "nope"
        with pytest.raises(ValueError):
            article_from_row(row)
