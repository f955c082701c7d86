"""Errors raised by the engagement domain beyond Protean's own vocabulary."""


class ChannelDispatchError(Exception):
    """A delivery channel failed to hand a message to its transport."""

    def __init__(self, channel: str, recipient: str, reason: str):
        self.channel = channel
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"{channel} delivery to {recipient} failed: {reason}")
