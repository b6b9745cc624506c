"""
Notification preference rules: defaults, validation, enabled channels,
quiet hours and digest scheduling.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from erp_engines.schedule import (
    DEFAULT_DIGEST_HOUR,
    is_in_window,
    is_valid_time_format,
    next_daily_run,
    next_hour,
)
from erp_kernel.domain.validation import ValidationResult
from erp_modules.notifications.models import (
    ALL_CHANNELS,
    DigestFrequency,
    EventType,
    NotificationChannel,
    NotificationPreference,
)

_CHANNEL_FLAGS: dict[NotificationChannel, str] = {
    NotificationChannel.EMAIL: "email_enabled",
    NotificationChannel.WHATSAPP: "whatsapp_enabled",
    NotificationChannel.IN_APP: "in_app_enabled",
    NotificationChannel.PUSH: "push_enabled",
}


def create_default_preference(
    user_id: str,
    event_type: str,
    now: datetime | None = None,
) -> NotificationPreference:
    """Unsaved preference: email and in-app on, WhatsApp and push off, immediate."""
    return NotificationPreference(
        user_id=user_id,
        event_type=event_type,
        created_at=now,
        updated_at=now,
    )


def is_default_preference(preference: NotificationPreference) -> bool:
    return (
        preference.email_enabled
        and not preference.whatsapp_enabled
        and preference.in_app_enabled
        and not preference.push_enabled
        and preference.quiet_hours_start is None
        and preference.quiet_hours_end is None
        and preference.digest_frequency == DigestFrequency.IMMEDIATE
    )


def get_preference_for_sending(
    preference: NotificationPreference | None,
    user_id: str,
    event_type: str,
) -> NotificationPreference:
    return preference or create_default_preference(user_id, event_type)


def validate_preference(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a preference insert or partial update.

    Only the keys present in ``data`` are checked, except that the quiet
    hour bounds must be set together.
    """
    event_type = data.get("event_type")
    if event_type is not None and event_type not in {e.value for e in EventType}:
        return ValidationResult.from_errors([f"Invalid event type: {event_type}"])

    frequency = data.get("digest_frequency")
    if frequency is not None and frequency not in {f.value for f in DigestFrequency}:
        return ValidationResult.from_errors([f"Invalid digest frequency: {frequency}"])

    start = data.get("quiet_hours_start")
    end = data.get("quiet_hours_end")
    if start is not None and not is_valid_time_format(start):
        return ValidationResult.from_errors(
            ["Invalid quiet hours start time format. Use HH:MM"]
        )
    if end is not None and not is_valid_time_format(end):
        return ValidationResult.from_errors(
            ["Invalid quiet hours end time format. Use HH:MM"]
        )
    if (start is None) != (end is None):
        return ValidationResult.from_errors(
            ["Both quiet hours start and end must be set together"]
        )

    return ValidationResult.ok()


def is_channel_enabled(
    preference: NotificationPreference,
    channel: NotificationChannel,
) -> bool:
    return bool(getattr(preference, _CHANNEL_FLAGS[channel]))


def get_enabled_channels(preference: NotificationPreference) -> list[NotificationChannel]:
    return [ch for ch in ALL_CHANNELS if is_channel_enabled(preference, ch)]


def is_time_in_quiet_hours(preference: NotificationPreference, moment: datetime) -> bool:
    return is_in_window(preference.quiet_hours_start, preference.quiet_hours_end, moment)


def should_batch_notification(preference: NotificationPreference) -> bool:
    return preference.digest_frequency != DigestFrequency.IMMEDIATE


def get_next_digest_time(
    preference: NotificationPreference,
    from_time: datetime,
    digest_hour: int = DEFAULT_DIGEST_HOUR,
) -> datetime | None:
    """None for immediate delivery; next top of the hour; or next ``digest_hour``:00."""
    if preference.digest_frequency == DigestFrequency.HOURLY:
        return next_hour(from_time)
    if preference.digest_frequency == DigestFrequency.DAILY:
        return next_daily_run(from_time, digest_hour)
    return None
