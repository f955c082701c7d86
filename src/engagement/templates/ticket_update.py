"""Ticket update template: a support ticket was opened on the client's behalf."""

from engagement.notification.notification import NotificationType


class TicketUpdateTemplate:
    notification_type = NotificationType.TICKET_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        ticket_title = context["ticket_title"]
        return {
            "title": "New support ticket",
            "message": f'A new support ticket was opened for you: "{ticket_title}".',
            "data": {"ticket_id": context["ticket_id"], "ticket_title": ticket_title},
        }
