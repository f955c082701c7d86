"""Invoice and quote templates: a billing document is ready for the client."""

from engagement.notification.notification import NotificationType


def _render(label: str, context: dict) -> dict:
    reference = context["reference"]
    return {
        "title": f"New {label} available",
        "message": f"Your {label} {reference} is available in your client area.",
        "data": {
            "document_id": context["document_id"],
            "reference": reference,
            "document_type": context.get("document_type", label),
        },
    }


class InvoiceCreatedTemplate:
    notification_type = NotificationType.INVOICE_CREATED.value

    @staticmethod
    def render(context: dict) -> dict:
        return _render("invoice", context)


class QuoteCreatedTemplate:
    notification_type = NotificationType.QUOTE_CREATED.value

    @staticmethod
    def render(context: dict) -> dict:
        return _render("quote", context)
