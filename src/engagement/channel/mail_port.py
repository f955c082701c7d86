"""Campaign mail port: abstract interface for store-and-forward delivery."""

from abc import ABC, abstractmethod


class CampaignMailPort(ABC):
    """Abstract interface for campaign message transports.

    A call either hands the message to the transport or raises. Implementations
    own their own timeouts; the execution engine waits on each call.
    """

    @abstractmethod
    def send_campaign_message(self, to: str, context: dict) -> dict:
        """Send one campaign message.

        ``context`` carries ``user_name``, ``campaign_name``, ``content`` and
        ``description``. The subject line is the campaign name.

        Returns:
            dict with keys: message_id, status ("sent")

        Raises:
            ChannelDispatchError: when the transport rejects the message.
        """
        ...
