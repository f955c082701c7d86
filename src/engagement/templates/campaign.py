"""Campaign notification template: live copy of a campaign message."""

from engagement.notification.notification import NotificationType


class CampaignTemplate:
    notification_type = NotificationType.CAMPAIGN.value

    @staticmethod
    def render(context: dict) -> dict:
        preview_length = context.get("preview_length", 200)
        message = context.get("description") or (context.get("content") or "")[:preview_length] or ""
        return {
            "title": context["campaign_name"],
            "message": message,
            "data": {
                "campaign_id": context["campaign_id"],
                "campaign_type": context["campaign_type"],
            },
        }
