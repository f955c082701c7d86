"""Fake live connection: records delivered events for testing."""

from uuid import uuid4

from engagement.realtime.registry import LiveConnection


class FakeConnection(LiveConnection):
    """Connection handle that keeps every event it receives in memory."""

    def __init__(self, connection_id: str | None = None):
        self._connection_id = connection_id or f"conn-{uuid4().hex[:12]}"
        self.received: list[tuple[str, object]] = []
        self.should_fail = False

    @property
    def connection_id(self) -> str:
        return self._connection_id

    def configure(self, should_fail: bool = False):
        """Configure the fake connection behavior for testing."""
        self.should_fail = should_fail

    def send(self, event, payload):
        if self.should_fail:
            raise ConnectionError(f"Connection {self._connection_id} is closed")
        self.received.append((event, payload))

    def events(self, name: str) -> list:
        """Payloads received for one event name."""
        return [payload for event, payload in self.received if event == name]
