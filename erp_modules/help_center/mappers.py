"""Row mappers for help articles and FAQs."""

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.dates import to_datetime
from erp_kernel.domain.rows import optional, require_keys
from erp_modules.help_center.models import HelpArticle, HelpCategory, HelpFAQ

ARTICLE_REQUIRED = ("id", "article_slug", "title", "content", "category")
FAQ_REQUIRED = ("id", "question", "answer", "category")


def _when(value: Any):
    return None if value is None else to_datetime(value)


def article_from_row(row: Mapping[str, Any]) -> HelpArticle:
    require_keys(row, "help_article", ARTICLE_REQUIRED)
    return HelpArticle(
        id=str(row["id"]),
        article_slug=row["article_slug"],
        title=row["title"],
        summary=row.get("summary"),
        content=row["content"],
        category=HelpCategory(row["category"]),
        tags=tuple(optional(row, "tags", ())),
        applicable_roles=tuple(optional(row, "applicable_roles", ())),
        related_routes=tuple(optional(row, "related_routes", ())),
        related_articles=tuple(optional(row, "related_articles", ())),
        view_count=int(optional(row, "view_count", 0)),
        helpful_count=int(optional(row, "helpful_count", 0)),
        not_helpful_count=int(optional(row, "not_helpful_count", 0)),
        is_published=bool(optional(row, "is_published", True)),
        display_order=int(optional(row, "display_order", 0)),
        created_at=_when(row.get("created_at")),
        updated_at=_when(row.get("updated_at")),
    )


def article_to_row(article: HelpArticle) -> dict[str, Any]:
    return {
        "id": article.id,
        "article_slug": article.article_slug,
        "title": article.title,
        "summary": article.summary,
        "content": article.content,
        "category": article.category.value,
        "tags": list(article.tags),
        "applicable_roles": list(article.applicable_roles),
        "related_routes": list(article.related_routes),
        "related_articles": list(article.related_articles),
        "view_count": article.view_count,
        "helpful_count": article.helpful_count,
        "not_helpful_count": article.not_helpful_count,
        "is_published": article.is_published,
        "display_order": article.display_order,
        "created_at": article.created_at,
        "updated_at": article.updated_at,
    }


def faq_from_row(row: Mapping[str, Any]) -> HelpFAQ:
    require_keys(row, "help_faq", FAQ_REQUIRED)
    return HelpFAQ(
        id=str(row["id"]),
        question=row["question"],
        answer=row["answer"],
        category=HelpCategory(row["category"]),
        applicable_roles=tuple(optional(row, "applicable_roles", ())),
        display_order=int(optional(row, "display_order", 0)),
        created_at=_when(row.get("created_at")),
    )


def faq_to_row(faq: HelpFAQ) -> dict[str, Any]:
    return {
        "id": faq.id,
        "question": faq.question,
        "answer": faq.answer,
        "category": faq.category.value,
        "applicable_roles": list(faq.applicable_roles),
        "display_order": faq.display_order,
        "created_at": faq.created_at,
    }
