"""Real-time fan-out registry: routes live events to connected recipients.

A recipient may hold several live connections at once (one per open tab or
device). The registry maps each recipient to their connection handles and
delivers an event to every one of them. It is process-local and rebuilt from
scratch when the process restarts, as clients reconnect and re-register.

All reads and writes of the recipient map happen under a single lock. Emits
copy the target handles under the lock and call ``send`` outside it, so a
slow connection never blocks registration.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class LiveConnection(ABC):
    """A handle to one open real-time connection."""

    @property
    @abstractmethod
    def connection_id(self) -> str: ...

    @abstractmethod
    def send(self, event: str, payload: Any) -> None:
        """Deliver one event. May raise if the underlying transport is gone."""
        ...


class FanOutRegistry:
    """Thread-safe mapping of recipient id to live connection handles.

    Invariants:
    - a handle is tracked under at most one recipient at a time;
    - a recipient entry exists only while it holds at least one handle;
    - unregistering an unknown handle is a no-op.
    """

    def __init__(self):
        self._by_recipient: dict[str, dict[str, LiveConnection]] = {}
        self._owners: dict[str, str] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    def register(self, handle: LiveConnection, recipient_id) -> None:
        """Associate ``handle`` with ``recipient_id``.

        Registering the same pair twice has no further effect. Registering a
        handle under a different recipient moves it there.
        """
        recipient_id = str(recipient_id)
        connection_id = handle.connection_id

        with self._lock:
            previous = self._owners.get(connection_id)
            if previous is not None and previous != recipient_id:
                self._detach(connection_id, previous)

            self._by_recipient.setdefault(recipient_id, {})[connection_id] = handle
            self._owners[connection_id] = recipient_id

        logger.info(
            "Live connection registered",
            recipient_id=recipient_id,
            connection_id=connection_id,
            moved_from=previous if previous != recipient_id else None,
        )

    def unregister(self, handle: LiveConnection) -> str | None:
        """Forget ``handle``. Returns the recipient it belonged to, if any."""
        connection_id = handle.connection_id

        with self._lock:
            owner = self._owners.pop(connection_id, None)
            if owner is not None:
                self._detach(connection_id, owner)

        if owner is not None:
            logger.info(
                "Live connection unregistered",
                recipient_id=owner,
                connection_id=connection_id,
            )
        return owner

    def _detach(self, connection_id: str, recipient_id: str) -> None:
        # Caller holds the lock
        handles = self._by_recipient.get(recipient_id)
        if handles is None:
            return
        handles.pop(connection_id, None)
        if not handles:
            del self._by_recipient[recipient_id]

    # -------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------
    def emit_to_recipient(self, recipient_id, event: str, payload: Any) -> int:
        """Send ``event`` to every live connection of one recipient.

        Returns the number of connections that accepted the event. A recipient
        with no connections is not an error.
        """
        recipient_id = str(recipient_id)
        with self._lock:
            targets = list(self._by_recipient.get(recipient_id, {}).values())

        delivered = self._deliver(targets, event, payload)
        logger.debug(
            "Live event emitted",
            live_event=event,
            recipient_id=recipient_id,
            delivered=delivered,
        )
        return delivered

    def emit_to_recipients(self, recipient_ids, event: str, payload: Any) -> int:
        return sum(self.emit_to_recipient(rid, event, payload) for rid in recipient_ids)

    def broadcast(self, event: str, payload: Any) -> int:
        """Send ``event`` to every live connection regardless of recipient."""
        with self._lock:
            targets = [handle for handles in self._by_recipient.values() for handle in handles.values()]

        delivered = self._deliver(targets, event, payload)
        logger.info("Live event broadcast", live_event=event, delivered=delivered)
        return delivered

    def _deliver(self, targets: list[LiveConnection], event: str, payload: Any) -> int:
        delivered = 0
        for handle in targets:
            try:
                handle.send(event, payload)
                delivered += 1
            except Exception as exc:
                logger.warning(
                    "Live connection send failed",
                    connection_id=handle.connection_id,
                    live_event=event,
                    error=str(exc),
                )
        return delivered

    # -------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------
    def connections_for(self, recipient_id) -> list[LiveConnection]:
        with self._lock:
            return list(self._by_recipient.get(str(recipient_id), {}).values())

    def connection_count(self) -> int:
        with self._lock:
            return len(self._owners)

    def recipient_of(self, handle: LiveConnection) -> str | None:
        with self._lock:
            return self._owners.get(handle.connection_id)


_registry: FanOutRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> FanOutRegistry:
    """Return the process-wide registry."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = FanOutRegistry()
        return _registry


def reset_registry() -> None:
    """Drop every tracked connection (useful for testing)."""
    global _registry
    with _registry_lock:
        _registry = None
