"""Notification dispatch: persist a notification, then push it live.

Live delivery is best-effort. A recipient with no open connection simply
finds the notification on their next fetch, and a broken connection never
fails the dispatch.
"""

import structlog
from protean.utils.globals import current_domain

from engagement.directory.port import get_directory
from engagement.notification.notification import Notification, serialize_notification
from engagement.realtime.registry import get_registry

logger = structlog.get_logger(__name__)

NEW_NOTIFICATION_EVENT = "notification:new"


def dispatch(recipient_id, notification_type, title, message, data=None) -> Notification:
    """Store a notification for ``recipient_id`` and emit it to their connections.

    Raises:
        ObjectNotFoundError: the recipient is unknown to the directory.
    """
    recipient = get_directory().find_by_id(str(recipient_id))

    notification = Notification.create(
        recipient_id=str(recipient.user_id),
        notification_type=notification_type,
        title=title,
        message=message,
        data=data,
    )
    current_domain.repository_for(Notification).add(notification)

    delivered = get_registry().emit_to_recipient(
        recipient.user_id,
        NEW_NOTIFICATION_EVENT,
        serialize_notification(notification),
    )
    logger.info(
        "Notification dispatched",
        notification_id=str(notification.id),
        recipient_id=str(recipient.user_id),
        notification_type=notification_type,
        live_connections=delivered,
    )
    return notification
