"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from engagement.domain import engagement


@engagement.event(part_of="Notification")
class NotificationCreated:
    """A notification was stored for a recipient."""

    __version__ = "v1"

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    notification_type: String()
    title: String(required=True)
    created_at: DateTime(required=True)


@engagement.event(part_of="Notification")
class NotificationRead:
    """A recipient read a notification."""

    __version__ = "v1"

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    read_at: DateTime(required=True)
