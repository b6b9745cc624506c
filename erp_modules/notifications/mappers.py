"""Row mappers for notification templates and preferences."""

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.dates import to_datetime
from erp_kernel.domain.rows import optional, require_keys
from erp_modules.notifications.models import (
    DigestFrequency,
    NotificationPreference,
    NotificationTemplate,
    PlaceholderDefinition,
)

TEMPLATE_REQUIRED = ("template_code", "template_name", "event_type")
PREFERENCE_REQUIRED = ("user_id", "event_type")

_TEMPLATE_CONTENT_FIELDS = (
    "email_subject",
    "email_body_html",
    "email_body_text",
    "whatsapp_template_id",
    "whatsapp_body",
    "in_app_title",
    "in_app_body",
    "in_app_action_url",
    "push_title",
    "push_body",
)


def placeholder_from_row(row: Mapping[str, Any]) -> PlaceholderDefinition:
    require_keys(row, "placeholder", ("key",))
    return PlaceholderDefinition(
        key=row["key"],
        description=optional(row, "description", ""),
        default_value=row.get("default_value"),
    )


def template_from_row(row: Mapping[str, Any]) -> NotificationTemplate:
    require_keys(row, "notification_template", TEMPLATE_REQUIRED)
    return NotificationTemplate(
        id=None if row.get("id") is None else str(row["id"]),
        template_code=row["template_code"],
        template_name=row["template_name"],
        event_type=row["event_type"],
        placeholders=tuple(placeholder_from_row(p) for p in optional(row, "placeholders", ())),
        is_active=bool(optional(row, "is_active", True)),
        **{name: row.get(name) for name in _TEMPLATE_CONTENT_FIELDS},
    )


def template_to_row(template: NotificationTemplate) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": template.id,
        "template_code": template.template_code,
        "template_name": template.template_name,
        "event_type": template.event_type,
        "placeholders": [
            {"key": p.key, "description": p.description, "default_value": p.default_value}
            for p in template.placeholders
        ],
        "is_active": template.is_active,
    }
    row.update({name: getattr(template, name) for name in _TEMPLATE_CONTENT_FIELDS})
    return row


def preference_from_row(row: Mapping[str, Any]) -> NotificationPreference:
    require_keys(row, "notification_preference", PREFERENCE_REQUIRED)
    created_at = row.get("created_at")
    updated_at = row.get("updated_at")
    return NotificationPreference(
        id=str(optional(row, "id", "")),
        user_id=str(row["user_id"]),
        event_type=row["event_type"],
        email_enabled=bool(optional(row, "email_enabled", True)),
        whatsapp_enabled=bool(optional(row, "whatsapp_enabled", False)),
        in_app_enabled=bool(optional(row, "in_app_enabled", True)),
        push_enabled=bool(optional(row, "push_enabled", False)),
        quiet_hours_start=row.get("quiet_hours_start"),
        quiet_hours_end=row.get("quiet_hours_end"),
        digest_frequency=DigestFrequency(optional(row, "digest_frequency", "immediate")),
        created_at=None if created_at is None else to_datetime(created_at),
        updated_at=None if updated_at is None else to_datetime(updated_at),
    )


def preference_to_row(preference: NotificationPreference) -> dict[str, Any]:
    return {
        "id": preference.id,
        "user_id": preference.user_id,
        "event_type": preference.event_type,
        "email_enabled": preference.email_enabled,
        "whatsapp_enabled": preference.whatsapp_enabled,
        "in_app_enabled": preference.in_app_enabled,
        "push_enabled": preference.push_enabled,
        "quiet_hours_start": preference.quiet_hours_start,
        "quiet_hours_end": preference.quiet_hours_end,
        "digest_frequency": preference.digest_frequency.value,
        "created_at": preference.created_at,
        "updated_at": preference.updated_at,
    }
