"""Tests for the real-time fan-out registry."""

import threading

from engagement.realtime.fake_connection import FakeConnection
from engagement.realtime.registry import FanOutRegistry, get_registry, reset_registry


class TestRegistration:
    def setup_method(self):
        self.registry = FanOutRegistry()

    def test_register_tracks_handle_under_recipient(self):
        c1 = FakeConnection()
        self.registry.register(c1, "u1")
        assert self.registry.connections_for("u1") == [c1]
        assert self.registry.connection_count() == 1

    def test_register_is_idempotent(self):
        c1 = FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.register(c1, "u1")
        assert self.registry.connections_for("u1") == [c1]
        assert self.registry.connection_count() == 1

    def test_reregister_moves_handle(self):
        c1 = FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.register(c1, "u2")
        assert self.registry.connections_for("u1") == []
        assert self.registry.connections_for("u2") == [c1]
        assert self.registry.recipient_of(c1) == "u2"

    def test_recipient_ids_are_normalized_to_strings(self):
        c1 = FakeConnection()
        self.registry.register(c1, 42)
        assert self.registry.connections_for("42") == [c1]

    def test_unregister_returns_owner(self):
        c1 = FakeConnection()
        self.registry.register(c1, "u1")
        assert self.registry.unregister(c1) == "u1"
        assert self.registry.connections_for("u1") == []
        assert self.registry.connection_count() == 0

    def test_double_unregister_is_safe(self):
        c1 = FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.unregister(c1)
        assert self.registry.unregister(c1) is None
        assert self.registry.connection_count() == 0

    def test_unregister_unknown_handle_is_noop(self):
        assert self.registry.unregister(FakeConnection()) is None

    def test_unregister_keeps_other_devices(self):
        c1, c2 = FakeConnection(), FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.register(c2, "u1")
        self.registry.unregister(c1)
        assert self.registry.connections_for("u1") == [c2]


class TestEmission:
    def setup_method(self):
        self.registry = FanOutRegistry()

    def test_emit_reaches_every_device_of_recipient_only(self):
        c1, c2, c3 = FakeConnection(), FakeConnection(), FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.register(c2, "u1")
        self.registry.register(c3, "u2")

        delivered = self.registry.emit_to_recipient("u1", "notification:new", {"id": "n-1"})

        assert delivered == 2
        assert c1.received == [("notification:new", {"id": "n-1"})]
        assert c2.received == [("notification:new", {"id": "n-1"})]
        assert c3.received == []

    def test_emit_to_recipient_without_connections_is_silent(self):
        assert self.registry.emit_to_recipient("nobody", "notification:new", {}) == 0

    def test_emit_after_unregister_skips_handle(self):
        c1 = FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.unregister(c1)
        self.registry.emit_to_recipient("u1", "notification:new", {})
        assert c1.received == []

    def test_failing_handle_does_not_block_others(self):
        broken, healthy = FakeConnection(), FakeConnection()
        broken.configure(should_fail=True)
        self.registry.register(broken, "u1")
        self.registry.register(healthy, "u1")

        delivered = self.registry.emit_to_recipient("u1", "notification:new", {"id": "n-1"})

        assert delivered == 1
        assert healthy.events("notification:new") == [{"id": "n-1"}]

    def test_emit_to_recipients(self):
        c1, c2, c3 = FakeConnection(), FakeConnection(), FakeConnection()
        self.registry.register(c1, "u1")
        self.registry.register(c2, "u2")
        self.registry.register(c3, "u3")

        delivered = self.registry.emit_to_recipients(["u1", "u2", "missing"], "ping", {})

        assert delivered == 2
        assert c3.received == []

    def test_broadcast_reaches_everyone(self):
        handles = [FakeConnection() for _ in range(3)]
        for i, handle in enumerate(handles):
            self.registry.register(handle, f"u{i}")

        assert self.registry.broadcast("maintenance", {"in": 5}) == 3
        assert all(h.received == [("maintenance", {"in": 5})] for h in handles)


class TestConcurrency:
    def test_parallel_register_and_unregister_keeps_map_consistent(self):
        registry = FanOutRegistry()
        handles = [FakeConnection() for _ in range(200)]

        def churn(batch):
            for handle in batch:
                registry.register(handle, "u1")
                registry.emit_to_recipient("u1", "ping", {})
                registry.unregister(handle)

        threads = [threading.Thread(target=churn, args=(handles[i::4],)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert registry.connection_count() == 0
        assert registry.connections_for("u1") == []


class TestSingleton:
    def test_get_registry_returns_same_instance(self):
        assert get_registry() is get_registry()

    def test_reset_registry(self):
        first = get_registry()
        reset_registry()
        assert get_registry() is not first
