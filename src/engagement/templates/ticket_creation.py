"""Ticket creation template: tells admins a client opened a ticket."""

from engagement.notification.notification import NotificationType


class TicketCreationTemplate:
    notification_type = NotificationType.TICKET_CREATION.value

    @staticmethod
    def render(context: dict) -> dict:
        client_name = context.get("client_name", "A client")
        ticket_title = context["ticket_title"]
        return {
            "title": "New ticket created",
            "message": f'{client_name} created a new ticket: "{ticket_title}"',
            "data": {
                "ticket_id": context["ticket_id"],
                "ticket_title": ticket_title,
                "client_id": context.get("client_id"),
                "client_name": client_name,
            },
        }
