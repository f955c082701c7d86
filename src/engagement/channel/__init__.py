"""Mail transport registry: singleton access to the campaign mail adapter.

Uses the recording fake by default; a real transport (SMTP, SendGrid) can be
installed at startup with ``configure_mail_transport``.
"""

from engagement.channel.mail_port import CampaignMailPort

_transport: CampaignMailPort | None = None


def get_mail_transport() -> CampaignMailPort:
    """Return the configured mail transport (singleton)."""
    global _transport
    if _transport is None:
        from engagement.channel.fake_mail import FakeMailAdapter

        _transport = FakeMailAdapter()
    return _transport


def configure_mail_transport(transport: CampaignMailPort) -> None:
    global _transport
    _transport = transport


def reset_mail_transport():
    """Reset the transport singleton (useful for testing)."""
    global _transport
    _transport = None
