"""Notification aggregate: a persisted message owned by exactly one recipient.

Notifications are written by the dispatch service and pushed live to the
owner's open connections. The only state change afterwards is unread → read.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from engagement.domain import engagement
from engagement.notification.events import NotificationCreated, NotificationRead


class NotificationType(Enum):
    CAMPAIGN = "campaign"
    TICKET_CREATION = "ticket_creation"
    TICKET_UPDATE = "ticket_update"
    PROJECT_SUBMISSION = "project_submission"
    PROJECT_ASSIGNMENT = "project_assignment"
    PROJECT_CREATED = "project_created"
    PROJECT_REFUSED = "project_refused"
    INVOICE_CREATED = "invoice_created"
    QUOTE_CREATED = "quote_created"
    LOYALTY_TIER_UPGRADE = "loyalty_tier_upgrade"


@engagement.aggregate
class Notification:
    """A message addressed to one recipient.

    ``notification_type`` is a free tag; the ``NotificationType`` values are
    the ones produced inside this domain, other modules may use their own.
    """

    recipient_id: Identifier(required=True)
    notification_type: String(max_length=100)
    title: String(required=True, max_length=255)
    message: Text(required=True)
    data: Text()  # JSON object, echoed verbatim to live listeners
    is_read: Boolean(default=False)
    created_at: DateTime()
    read_at: DateTime()

    @classmethod
    def create(cls, recipient_id, title, message, notification_type=None, data=None):
        """Create a new unread notification."""
        if data is not None and not isinstance(data, dict):
            raise ValidationError({"data": ["Notification data must be a mapping"]})

        now = datetime.now(UTC)
        notification = cls(
            recipient_id=str(recipient_id),
            notification_type=notification_type,
            title=title,
            message=message,
            data=json.dumps(data) if data is not None else None,
            is_read=False,
            created_at=now,
        )

        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                notification_type=notification_type,
                title=title,
                created_at=now,
            )
        )

        return notification

    def mark_read(self, read_at=None) -> bool:
        """Mark as read. Returns False when it was already read."""
        if self.is_read:
            return False

        now = read_at or datetime.now(UTC)
        self.is_read = True
        self.read_at = now

        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                read_at=now,
            )
        )
        return True

    def payload(self) -> dict | None:
        return json.loads(self.data) if self.data else None


def serialize_notification(notification: Notification) -> dict:
    """JSON-safe view of a notification, as sent to live listeners."""
    return {
        "id": str(notification.id),
        "recipient_id": str(notification.recipient_id),
        "type": notification.notification_type,
        "title": notification.title,
        "message": notification.message,
        "data": notification.payload(),
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat() if notification.created_at else None,
        "read_at": notification.read_at.isoformat() if notification.read_at else None,
    }
