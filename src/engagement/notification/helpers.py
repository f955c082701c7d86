"""Notification constructors for platform events.

Other platform modules (tickets, projects, billing, loyalty) call these when
something happens that a user should hear about. Each one renders the
matching template and hands the result to ``dispatch``.

Multi-recipient constructors skip unknown recipients with a warning so that
one stale id never blocks the rest of the batch. Single-recipient ones let
``ObjectNotFoundError`` propagate.
"""

import structlog
from protean.exceptions import ObjectNotFoundError

from engagement.directory.port import get_directory
from engagement.notification.dispatch import dispatch
from engagement.notification.notification import Notification, NotificationType
from engagement.templates import get_template

logger = structlog.get_logger(__name__)


def notify(recipient_id, notification_type: str, context: dict) -> Notification:
    """Render the template for ``notification_type`` and dispatch it."""
    rendered = get_template(notification_type).render(context)
    return dispatch(
        recipient_id=recipient_id,
        notification_type=notification_type,
        title=rendered["title"],
        message=rendered["message"],
        data=rendered["data"],
    )


def _notify_many(recipient_ids, notification_type: str, context: dict) -> list[Notification]:
    notifications = []
    for recipient_id in recipient_ids:
        try:
            notifications.append(notify(recipient_id, notification_type, context))
        except ObjectNotFoundError:
            logger.warning(
                "Skipping unknown recipient",
                recipient_id=str(recipient_id),
                notification_type=notification_type,
            )
    return notifications


def _client_name(client_user_id) -> str:
    client = get_directory().find_by_id(str(client_user_id))
    return client.full_name() or client.email or str(client.user_id)


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------
def notify_ticket_created(ticket_id, ticket_title, client_user_id, admin_ids) -> list[Notification]:
    """Tell every admin that a client opened a ticket."""
    context = {
        "ticket_id": str(ticket_id),
        "ticket_title": ticket_title,
        "client_id": str(client_user_id),
        "client_name": _client_name(client_user_id),
    }
    return _notify_many(admin_ids, NotificationType.TICKET_CREATION.value, context)


def notify_ticket_opened_for_client(ticket_id, ticket_title, user_id) -> Notification:
    return notify(
        user_id,
        NotificationType.TICKET_UPDATE.value,
        {"ticket_id": str(ticket_id), "ticket_title": ticket_title},
    )


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------
def notify_project_submitted(project_id, project_name, client_user_id, admin_ids) -> list[Notification]:
    """Tell every admin that a client submitted a project."""
    context = {
        "project_id": str(project_id),
        "project_name": project_name,
        "client_id": str(client_user_id),
        "client_name": _client_name(client_user_id),
    }
    return _notify_many(admin_ids, NotificationType.PROJECT_SUBMISSION.value, context)


def notify_project_members(project_id, project_name, member_ids, message) -> list[Notification]:
    """Tell assigned members about a project. Client accounts are never told."""
    directory = get_directory()
    internal_ids = []
    for member_id in member_ids:
        try:
            member = directory.find_by_id(str(member_id))
        except ObjectNotFoundError:
            logger.warning("Skipping unknown project member", recipient_id=str(member_id))
            continue
        if member.is_client():
            continue
        internal_ids.append(member.user_id)

    context = {"project_id": str(project_id), "project_name": project_name, "message": message}
    return _notify_many(internal_ids, NotificationType.PROJECT_ASSIGNMENT.value, context)


def notify_project_created(user_id, project_id, project_name) -> Notification:
    return notify(
        user_id,
        NotificationType.PROJECT_CREATED.value,
        {"project_id": str(project_id), "project_name": project_name},
    )


def notify_project_refused(user_id, project_id, project_name, reason) -> Notification:
    return notify(
        user_id,
        NotificationType.PROJECT_REFUSED.value,
        {"project_id": str(project_id), "project_name": project_name, "reason": reason},
    )


# ---------------------------------------------------------------------------
# Billing and loyalty
# ---------------------------------------------------------------------------
def notify_invoice_ready(user_id, document_id, reference, document_type="invoice") -> Notification | None:
    """Tell a client an invoice or quote is available.

    Returns None when the user is unknown; billing runs must not fail on a
    deleted account.
    """
    notification_type = (
        NotificationType.QUOTE_CREATED.value if document_type == "quote" else NotificationType.INVOICE_CREATED.value
    )
    context = {"document_id": str(document_id), "reference": reference, "document_type": document_type}
    try:
        return notify(user_id, notification_type, context)
    except ObjectNotFoundError:
        logger.warning("Skipping billing notice for unknown user", recipient_id=str(user_id))
        return None


def notify_tier_upgrade(user_id, client_id, old_tier, new_tier, reward=None) -> Notification:
    return notify(
        user_id,
        NotificationType.LOYALTY_TIER_UPGRADE.value,
        {
            "client_id": str(client_id),
            "old_tier": old_tier,
            "new_tier": new_tier,
            "reward": reward,
        },
    )
