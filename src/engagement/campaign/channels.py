"""Delivery channels for campaign execution.

``CHANNELS_BY_CAMPAIGN_TYPE`` is the dispatch table the execution engine
walks for each recipient. ``deliver`` returns True when the message went out,
False when the channel was skipped for this recipient, and raises on failure.
The engine counts skips and raises separately.
"""

import structlog

from engagement.campaign.campaign import Campaign, CampaignType
from engagement.channel import get_mail_transport
from engagement.config import get_setting
from engagement.directory.recipient import Recipient
from engagement.notification.dispatch import dispatch
from engagement.notification.notification import NotificationType
from engagement.templates import get_template

logger = structlog.get_logger(__name__)


class MessageChannel:
    """Store-and-forward message through the configured mail transport."""

    name = "message"

    def deliver(self, campaign: Campaign, recipient: Recipient) -> bool:
        """Send the campaign message. Returns False when the recipient has no address."""
        if not recipient.email:
            logger.warning(
                "Recipient has no email address, skipping message channel",
                recipient_id=str(recipient.user_id),
                campaign_id=str(campaign.id),
            )
            return False

        get_mail_transport().send_campaign_message(
            recipient.email,
            {
                "user_name": recipient.full_name(),
                "campaign_name": campaign.name,
                "content": campaign.content or "",
                "description": campaign.description or "",
            },
        )
        return True


class LiveNotificationChannel:
    """Persisted notification pushed to the recipient's live connections."""

    name = "live"

    def deliver(self, campaign: Campaign, recipient: Recipient) -> bool:
        template = get_template(NotificationType.CAMPAIGN.value)
        rendered = template.render(
            {
                "campaign_id": str(campaign.id),
                "campaign_name": campaign.name,
                "campaign_type": campaign.campaign_type,
                "description": campaign.description,
                "content": campaign.content,
                "preview_length": get_setting("campaign_push_preview_length"),
            }
        )
        dispatch(
            recipient_id=recipient.user_id,
            notification_type=template.notification_type,
            title=rendered["title"],
            message=rendered["message"],
            data=rendered["data"],
        )
        return True


MESSAGE_CHANNEL = MessageChannel()
LIVE_CHANNEL = LiveNotificationChannel()

CHANNELS_BY_CAMPAIGN_TYPE = {
    CampaignType.EMAIL.value: (MESSAGE_CHANNEL,),
    CampaignType.PUSH.value: (LIVE_CHANNEL,),
    CampaignType.MIXED.value: (MESSAGE_CHANNEL, LIVE_CHANNEL),
}


def channels_for(campaign_type: str) -> tuple:
    try:
        return CHANNELS_BY_CAMPAIGN_TYPE[campaign_type]
    except KeyError:
        raise ValueError(f"Unknown campaign type: {campaign_type}")
