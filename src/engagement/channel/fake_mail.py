"""Fake mail adapter: records campaign messages for testing."""

from uuid import uuid4

from engagement.channel.mail_port import CampaignMailPort
from engagement.exceptions import ChannelDispatchError


class FakeMailAdapter(CampaignMailPort):
    """Mail adapter that records messages in memory for test assertions."""

    channel = "message"

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Mail delivery failed"
        self.failing_addresses: set[str] = set()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Mail delivery failed",
        failing_addresses=None,
    ):
        """Configure the fake adapter behavior for testing.

        ``failing_addresses`` makes only those recipients fail while the rest
        of the batch succeeds.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failing_addresses = set(failing_addresses or [])

    def send_campaign_message(self, to: str, context: dict) -> dict:
        if not self.should_succeed or to in self.failing_addresses:
            raise ChannelDispatchError(self.channel, to, self.failure_reason)

        message_id = f"mail-{uuid4().hex[:12]}"
        self.sent_messages.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": context.get("campaign_name", ""),
                "context": dict(context),
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def recipients(self) -> list[str]:
        return [message["to"] for message in self.sent_messages]

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Mail delivery failed"
        self.failing_addresses = set()
