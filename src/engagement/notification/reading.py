"""Read tracking: mark one or all of a recipient's notifications as read."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from engagement.domain import engagement
from engagement.notification.notification import Notification
from engagement.realtime.registry import get_registry
from engagement.utils.query import fetch_all

logger = structlog.get_logger(__name__)

ALL_READ_EVENT = "notifications:allRead"


@engagement.command(part_of="Notification")
class MarkNotificationRead:
    """Mark a single notification as read."""

    notification_id: Identifier(required=True)


@engagement.command(part_of="Notification")
class MarkAllNotificationsRead:
    """Mark every unread notification of a recipient as read."""

    recipient_id: Identifier(required=True)


@engagement.command_handler(part_of=Notification)
class NotificationReadingHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command):
        repo = current_domain.repository_for(Notification)
        notification = repo.get(str(command.notification_id))
        if notification.mark_read():
            repo.add(notification)
        return str(notification.id)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = fetch_all(
            repo._dao.query.filter(recipient_id=str(command.recipient_id), is_read=False),
        )

        count = 0
        for notification in unread:
            if notification.mark_read():
                repo.add(notification)
                count += 1
        return count


def mark_read(notification_id) -> Notification:
    """Mark one notification read and return it. Already-read stays read."""
    current_domain.process(MarkNotificationRead(notification_id=str(notification_id)), asynchronous=False)
    return current_domain.repository_for(Notification).get(str(notification_id))


def mark_all_read(recipient_id) -> int:
    """Flip all of a recipient's unread notifications, then tell their devices.

    The updates commit together before the ``notifications:allRead`` event is
    emitted. Returns the number of notifications changed.
    """
    count = current_domain.process(MarkAllNotificationsRead(recipient_id=str(recipient_id)), asynchronous=False)
    get_registry().emit_to_recipient(recipient_id, ALL_READ_EVENT, {"count": count})
    logger.info("Notifications marked read", recipient_id=str(recipient_id), count=count)
    return count
