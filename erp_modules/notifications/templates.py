"""
Notification template rendering and validation.

Placeholders are written ``{{key}}`` or ``{{key|inline default}}``.  A
placeholder resolves to, in order: the data value, the template's
declared default, the inline default.  A placeholder with none of these
is left in the text unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from erp_modules.notifications.models import (
    ALL_CHANNELS,
    EventType,
    NotificationChannel,
    NotificationTemplate,
    PlaceholderDefinition,
    RenderedNotification,
)

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([a-zA-Z0-9_]+)\s*(?:\|([^}]*))?\}\}")
TEMPLATE_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]{2,29}$")


@dataclass(frozen=True)
class TemplateValidation:
    valid: bool
    error: str | None = None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlaceholderCheck:
    valid: bool
    missing_keys: tuple[str, ...] = ()


def replace_placeholders(
    text: str,
    data: Mapping[str, str],
    definitions: Iterable[PlaceholderDefinition] = (),
) -> str:
    if not text:
        return text
    defaults = {d.key: d.default_value for d in definitions if d.default_value is not None}

    def resolve(match: re.Match[str]) -> str:
        key, inline = match.group(1), match.group(2)
        if key in data and data[key] is not None:
            return str(data[key])
        if key in defaults:
            return defaults[key]
        if inline is not None and inline.strip():
            return inline.strip()
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(resolve, text)


def extract_placeholder_keys(text: str | None) -> list[str]:
    """Distinct placeholder keys in order of first appearance."""
    if not text:
        return []
    return list(dict.fromkeys(m.group(1) for m in PLACEHOLDER_PATTERN.finditer(text)))


def _contents(template: NotificationTemplate) -> tuple[str | None, ...]:
    return (
        template.email_subject,
        template.email_body_html,
        template.email_body_text,
        template.whatsapp_body,
        template.in_app_title,
        template.in_app_body,
        template.in_app_action_url,
        template.push_title,
        template.push_body,
    )


def validate_placeholder_data(
    template: NotificationTemplate,
    data: Mapping[str, str],
) -> PlaceholderCheck:
    """Keys used by the template that neither ``data`` nor any default covers."""
    defaults = {d.key for d in template.placeholders if d.default_value is not None}
    missing: dict[str, None] = {}
    for text in _contents(template):
        if not text:
            continue
        for match in PLACEHOLDER_PATTERN.finditer(text):
            key, inline = match.group(1), match.group(2)
            if key in data or key in defaults or (inline and inline.strip()):
                continue
            missing[key] = None
    keys = tuple(missing)
    return PlaceholderCheck(valid=not keys, missing_keys=keys)


def template_supports_channel(
    template: NotificationTemplate,
    channel: NotificationChannel,
) -> bool:
    if channel == NotificationChannel.EMAIL:
        return bool(template.email_body_html or template.email_body_text)
    if channel == NotificationChannel.WHATSAPP:
        return bool(template.whatsapp_body)
    if channel == NotificationChannel.IN_APP:
        return bool(template.in_app_body)
    return bool(template.push_body)


def get_template_supported_channels(template: NotificationTemplate) -> list[NotificationChannel]:
    return [ch for ch in ALL_CHANNELS if template_supports_channel(template, ch)]


def render_template(
    template: NotificationTemplate,
    data: Mapping[str, str],
    channel: NotificationChannel,
) -> RenderedNotification | None:
    """Rendered message for ``channel``, or None if the template has no content for it."""
    if not template_supports_channel(template, channel):
        return None

    def fill(text: str | None) -> str | None:
        return None if text is None else replace_placeholders(text, data, template.placeholders)

    if channel == NotificationChannel.EMAIL:
        body_text = fill(template.email_body_text)
        body_html = fill(template.email_body_html)
        return RenderedNotification(
            channel=channel,
            subject=fill(template.email_subject),
            body=body_text if body_text else body_html or "",
            body_html=body_html,
        )
    if channel == NotificationChannel.WHATSAPP:
        return RenderedNotification(channel=channel, body=fill(template.whatsapp_body) or "")
    if channel == NotificationChannel.IN_APP:
        return RenderedNotification(
            channel=channel,
            subject=fill(template.in_app_title),
            body=fill(template.in_app_body) or "",
            action_url=fill(template.in_app_action_url),
        )
    return RenderedNotification(
        channel=channel,
        subject=fill(template.push_title),
        body=fill(template.push_body) or "",
    )


def validate_template(data: Mapping[str, object]) -> TemplateValidation:
    """
    Check a template insert.

    A template with no content for any channel is valid but warned about.
    """
    code = data.get("template_code")
    if not isinstance(code, str) or not code.strip():
        return TemplateValidation(valid=False, error="Template code is required")
    if not TEMPLATE_CODE_PATTERN.match(code):
        return TemplateValidation(
            valid=False,
            error="Template code must be 3-30 uppercase letters, digits or underscores",
        )

    name = data.get("template_name")
    if not isinstance(name, str) or not name.strip():
        return TemplateValidation(valid=False, error="Template name is required")

    event_type = data.get("event_type")
    if event_type not in {e.value for e in EventType}:
        return TemplateValidation(valid=False, error=f"Invalid event type: {event_type}")

    content_keys = ("email_body_html", "email_body_text", "whatsapp_body", "in_app_body", "push_body")
    if not any(data.get(k) for k in content_keys):
        return TemplateValidation(
            valid=True, warnings=("Template has no content for any channel",)
        )
    return TemplateValidation(valid=True)
