"""
Notification Models (``erp_modules.notifications.models``).

Responsibility
--------------
Frozen dataclass value objects and closed enumerations for notification
delivery: templates with per-channel content, per-user per-event
preferences, and the outcome of preparing a notification (rendered
messages, delivery channels, skipped channels with reasons, timing).

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``; collections are tuples.
* Channels, event types, digest frequencies, skip reasons and delivery
  timings are closed ``Enum`` types.
* ``PreparedNotification``: every channel is in exactly one of
  ``delivery_channels`` and ``skipped_channels``.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationChannel(str, Enum):
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    IN_APP = "in_app"
    PUSH = "push"


# Fixed evaluation and reporting order
ALL_CHANNELS: tuple[NotificationChannel, ...] = (
    NotificationChannel.EMAIL,
    NotificationChannel.WHATSAPP,
    NotificationChannel.IN_APP,
    NotificationChannel.PUSH,
)


class EventType(str, Enum):
    JOB_ORDER_ASSIGNED = "job_order.assigned"
    JOB_ORDER_STATUS_CHANGED = "job_order.status_changed"
    INVOICE_SENT = "invoice.sent"
    INVOICE_OVERDUE = "invoice.overdue"
    INCIDENT_CREATED = "incident.created"
    DOCUMENT_EXPIRING = "document.expiring"
    MAINTENANCE_DUE = "maintenance.due"
    APPROVAL_REQUIRED = "approval.required"


class DigestFrequency(str, Enum):
    IMMEDIATE = "immediate"
    HOURLY = "hourly"
    DAILY = "daily"


class SkipReason(str, Enum):
    """Why a channel was left out of a delivery, checked in this order."""
    TEMPLATE_UNSUPPORTED = "template_unsupported"
    DISABLED_BY_PREFERENCE = "disabled_by_preference"
    MISSING_CONTACT = "missing_contact"
    INVALID_FORMAT = "invalid_format"


class DeliveryTiming(str, Enum):
    IMMEDIATE = "immediate"
    DELAYED_QUIET_HOURS = "delayed_quiet_hours"
    BATCHED_DIGEST = "batched_digest"


@dataclass(frozen=True)
class PlaceholderDefinition:
    key: str
    description: str = ""
    default_value: str | None = None


@dataclass(frozen=True)
class NotificationTemplate:
    """Per-channel message content for one event type; ``None`` means no content."""
    template_code: str
    template_name: str
    event_type: str
    id: str | None = None
    email_subject: str | None = None
    email_body_html: str | None = None
    email_body_text: str | None = None
    whatsapp_template_id: str | None = None
    whatsapp_body: str | None = None
    in_app_title: str | None = None
    in_app_body: str | None = None
    in_app_action_url: str | None = None
    push_title: str | None = None
    push_body: str | None = None
    placeholders: tuple[PlaceholderDefinition, ...] = ()
    is_active: bool = True


@dataclass(frozen=True)
class NotificationPreference:
    """
    A user's delivery preference for one event type.

    An empty ``id`` marks a default preference that was never stored.
    Quiet hours are ``HH:MM`` strings; both or neither are set.
    """
    user_id: str
    event_type: str
    email_enabled: bool = True
    whatsapp_enabled: bool = False
    in_app_enabled: bool = True
    push_enabled: bool = False
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    digest_frequency: DigestFrequency = DigestFrequency.IMMEDIATE
    id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PhoneValidationResult:
    valid: bool
    normalized: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class RenderedNotification:
    channel: NotificationChannel
    body: str
    subject: str | None = None
    body_html: str | None = None
    action_url: str | None = None


@dataclass(frozen=True)
class SkippedChannel:
    channel: NotificationChannel
    reason: SkipReason
    message: str


@dataclass(frozen=True)
class PreparedNotification:
    rendered: tuple[RenderedNotification, ...]
    delivery_channels: tuple[NotificationChannel, ...]
    skipped_channels: tuple[SkippedChannel, ...]
    timing: DeliveryTiming

    @property
    def should_send_now(self) -> bool:
        return self.timing == DeliveryTiming.IMMEDIATE
