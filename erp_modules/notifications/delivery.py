"""
Notification Delivery Planning (``erp_modules.notifications.delivery``).

Responsibility
--------------
Decide which channels a notification goes out on, why each other channel
is skipped, and whether to send now, after quiet hours, or in the next
digest.

Architecture position
---------------------
**Modules layer** -- composes preferences, templates and contact checks.
No I/O and no clock: the send time is a parameter.

Invariants enforced
-------------------
* A channel is delivered iff the template has content for it, the
  preference enables it, and (email/WhatsApp only) the contact is
  present and well-formed.  In-app and push need no contact data.
* Every channel not delivered has exactly one skip reason, the first
  failing check in the order: template, preference, contact presence,
  contact format.
* Timing: quiet hours win over digest batching; otherwise immediate.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime

from erp_kernel.logging_config import get_logger
from erp_modules.notifications.contacts import is_valid_email, is_valid_indonesian_phone
from erp_modules.notifications.models import (
    ALL_CHANNELS,
    DeliveryTiming,
    NotificationChannel,
    NotificationPreference,
    NotificationTemplate,
    PreparedNotification,
    RenderedNotification,
    SkippedChannel,
    SkipReason,
)
from erp_modules.notifications.preferences import (
    is_channel_enabled,
    is_time_in_quiet_hours,
    should_batch_notification,
)
from erp_modules.notifications.templates import render_template, template_supports_channel

logger = get_logger("modules.notifications.delivery")

_SKIP_MESSAGES: dict[tuple[SkipReason, NotificationChannel | None], str] = {
    (SkipReason.TEMPLATE_UNSUPPORTED, None): "Template does not support this channel",
    (SkipReason.DISABLED_BY_PREFERENCE, None): "Channel disabled in user preferences",
    (SkipReason.MISSING_CONTACT, NotificationChannel.EMAIL): "No email address provided",
    (SkipReason.MISSING_CONTACT, NotificationChannel.WHATSAPP): "No phone number provided",
    (SkipReason.INVALID_FORMAT, NotificationChannel.EMAIL): "Invalid email address format",
    (SkipReason.INVALID_FORMAT, NotificationChannel.WHATSAPP): "Invalid phone number format",
}


def skip_message(reason: SkipReason, channel: NotificationChannel) -> str:
    return _SKIP_MESSAGES.get((reason, channel)) or _SKIP_MESSAGES[(reason, None)]


def _contact_skip_reason(
    channel: NotificationChannel,
    email: str | None,
    phone: str | None,
) -> SkipReason | None:
    if channel == NotificationChannel.EMAIL:
        if not email or not email.strip():
            return SkipReason.MISSING_CONTACT
        return None if is_valid_email(email) else SkipReason.INVALID_FORMAT
    if channel == NotificationChannel.WHATSAPP:
        if not phone or not phone.strip():
            return SkipReason.MISSING_CONTACT
        return None if is_valid_indonesian_phone(phone) else SkipReason.INVALID_FORMAT
    return None


def channel_skip_reason(
    channel: NotificationChannel,
    template: NotificationTemplate,
    preference: NotificationPreference,
    email: str | None = None,
    phone: str | None = None,
) -> SkipReason | None:
    """The first failing check for ``channel``, or None if it will be delivered."""
    if not template_supports_channel(template, channel):
        return SkipReason.TEMPLATE_UNSUPPORTED
    if not is_channel_enabled(preference, channel):
        return SkipReason.DISABLED_BY_PREFERENCE
    return _contact_skip_reason(channel, email, phone)


def get_delivery_channels(
    template: NotificationTemplate,
    preference: NotificationPreference,
    email: str | None = None,
    phone: str | None = None,
) -> list[NotificationChannel]:
    return [
        ch for ch in ALL_CHANNELS
        if channel_skip_reason(ch, template, preference, email, phone) is None
    ]


def get_skipped_channels(
    template: NotificationTemplate,
    preference: NotificationPreference,
    email: str | None = None,
    phone: str | None = None,
) -> list[SkippedChannel]:
    skipped: list[SkippedChannel] = []
    for channel in ALL_CHANNELS:
        reason = channel_skip_reason(channel, template, preference, email, phone)
        if reason is not None:
            skipped.append(SkippedChannel(channel, reason, skip_message(reason, channel)))
    return skipped


def get_delivery_timing(
    preference: NotificationPreference,
    send_time: datetime,
) -> DeliveryTiming:
    if is_time_in_quiet_hours(preference, send_time):
        return DeliveryTiming.DELAYED_QUIET_HOURS
    if should_batch_notification(preference):
        return DeliveryTiming.BATCHED_DIGEST
    return DeliveryTiming.IMMEDIATE


def render_notifications_for_channels(
    template: NotificationTemplate,
    data: Mapping[str, str],
    channels: Iterable[NotificationChannel],
) -> list[RenderedNotification]:
    rendered = (render_template(template, data, channel) for channel in channels)
    return [r for r in rendered if r is not None]


def prepare_notification(
    template: NotificationTemplate,
    preference: NotificationPreference,
    data: Mapping[str, str],
    *,
    send_time: datetime,
    email: str | None = None,
    phone: str | None = None,
) -> PreparedNotification:
    delivery = get_delivery_channels(template, preference, email, phone)
    skipped = get_skipped_channels(template, preference, email, phone)
    timing = get_delivery_timing(preference, send_time)

    logger.debug(
        "notification_prepared",
        extra={
            "template_code": template.template_code,
            "user_id": preference.user_id,
            "delivery_channels": [ch.value for ch in delivery],
            "skipped": {s.channel.value: s.reason.value for s in skipped},
            "timing": timing.value,
        },
    )
    return PreparedNotification(
        rendered=tuple(render_notifications_for_channels(template, data, delivery)),
        delivery_channels=tuple(delivery),
        skipped_channels=tuple(skipped),
        timing=timing,
    )
