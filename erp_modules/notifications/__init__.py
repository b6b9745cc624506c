"""
Notifications Module.

Delivery planning for event notifications: which channels receive a
message, why the others are skipped, when it is sent, and what it says.
Time-of-day arithmetic comes from ``erp_engines.schedule``.
"""

from erp_modules.notifications.contacts import (
    format_for_whatsapp,
    format_phone_number,
    get_local_number,
    is_valid_email,
    is_valid_indonesian_phone,
    phone_numbers_equal,
    validate_phone_number,
)
from erp_modules.notifications.delivery import (
    channel_skip_reason,
    get_delivery_channels,
    get_delivery_timing,
    get_skipped_channels,
    prepare_notification,
    render_notifications_for_channels,
)
from erp_modules.notifications.mappers import (
    preference_from_row,
    preference_to_row,
    template_from_row,
    template_to_row,
)
from erp_modules.notifications.models import (
    ALL_CHANNELS,
    DeliveryTiming,
    DigestFrequency,
    EventType,
    NotificationChannel,
    NotificationPreference,
    NotificationTemplate,
    PhoneValidationResult,
    PlaceholderDefinition,
    PreparedNotification,
    RenderedNotification,
    SkippedChannel,
    SkipReason,
)
from erp_modules.notifications.preferences import (
    create_default_preference,
    get_enabled_channels,
    get_next_digest_time,
    get_preference_for_sending,
    is_channel_enabled,
    is_default_preference,
    is_time_in_quiet_hours,
    should_batch_notification,
    validate_preference,
)
from erp_modules.notifications.templates import (
    extract_placeholder_keys,
    get_template_supported_channels,
    render_template,
    replace_placeholders,
    validate_placeholder_data,
    validate_template,
)

__all__ = [
    "ALL_CHANNELS",
    "DeliveryTiming",
    "DigestFrequency",
    "EventType",
    "NotificationChannel",
    "NotificationPreference",
    "NotificationTemplate",
    "PhoneValidationResult",
    "PlaceholderDefinition",
    "PreparedNotification",
    "RenderedNotification",
    "SkipReason",
    "SkippedChannel",
    "channel_skip_reason",
    "create_default_preference",
    "extract_placeholder_keys",
    "format_for_whatsapp",
    "format_phone_number",
    "get_delivery_channels",
    "get_delivery_timing",
    "get_enabled_channels",
    "get_local_number",
    "get_next_digest_time",
    "get_preference_for_sending",
    "get_skipped_channels",
    "get_template_supported_channels",
    "is_channel_enabled",
    "is_default_preference",
    "is_time_in_quiet_hours",
    "is_valid_email",
    "is_valid_indonesian_phone",
    "phone_numbers_equal",
    "preference_from_row",
    "preference_to_row",
    "prepare_notification",
    "render_notifications_for_channels",
    "render_template",
    "replace_placeholders",
    "should_batch_notification",
    "template_from_row",
    "template_to_row",
    "validate_phone_number",
    "validate_placeholder_data",
    "validate_preference",
    "validate_template",
]
