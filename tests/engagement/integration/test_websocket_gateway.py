"""Integration tests for the live notification WebSocket."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from engagement.api import realtime_router
from engagement.notification.dispatch import dispatch
from engagement.notification.reading import mark_all_read


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(realtime_router)
    return TestClient(app)


def _register(ws, recipient_id, key="recipientId"):
    ws.send_json({"event": "register", "data": {key: recipient_id}})
    return ws.receive_json()


class TestRegistration:
    def test_register_acknowledged(self, client, registry):
        with client.websocket_connect("/ws/notifications") as ws:
            ack = _register(ws, "u1")
            assert ack == {"event": "register", "data": {"success": True, "message": "Registered successfully"}}
            assert len(registry.connections_for("u1")) == 1

    def test_user_id_key_is_accepted(self, client, registry):
        with client.websocket_connect("/ws/notifications") as ws:
            assert _register(ws, "u1", key="userId")["data"]["success"] is True

    def test_missing_recipient_id(self, client):
        with client.websocket_connect("/ws/notifications") as ws:
            ws.send_json({"event": "register", "data": {}})
            reply = ws.receive_json()
            assert reply["event"] == "error"
            assert reply["data"]["success"] is False

    def test_unknown_event(self, client):
        with client.websocket_connect("/ws/notifications") as ws:
            ws.send_json({"event": "subscribe", "data": {}})
            assert ws.receive_json()["event"] == "error"

    def test_non_object_data(self, client, registry):
        with client.websocket_connect("/ws/notifications") as ws:
            ws.send_json({"event": "register", "data": "u1"})
            reply = ws.receive_json()
            assert reply["event"] == "error"
            assert reply["data"]["success"] is False

            assert _register(ws, "u1")["data"]["success"] is True
        assert registry.connection_count() == 0

    def test_invalid_json(self, client):
        with client.websocket_connect("/ws/notifications") as ws:
            ws.send_text("not json")
            assert ws.receive_json()["event"] == "error"

    def test_disconnect_unregisters(self, client, registry):
        with client.websocket_connect("/ws/notifications") as ws:
            _register(ws, "u1")
        assert registry.connections_for("u1") == []
        assert registry.connection_count() == 0


class TestLiveDelivery:
    def test_dispatched_notification_reaches_socket(self, client, make_recipient):
        make_recipient("u1")
        with client.websocket_connect("/ws/notifications") as ws:
            _register(ws, "u1")

            notification = dispatch("u1", "ticket_update", "Ticket", "Opened")

            frame = ws.receive_json()
            assert frame["event"] == "notification:new"
            assert frame["data"]["id"] == str(notification.id)

    def test_two_tabs_both_receive(self, client, make_recipient):
        make_recipient("u1")
        with client.websocket_connect("/ws/notifications") as tab1, client.websocket_connect(
            "/ws/notifications"
        ) as tab2:
            _register(tab1, "u1")
            _register(tab2, "u1")

            dispatch("u1", None, "Hello", "Both tabs")

            assert tab1.receive_json()["data"]["title"] == "Hello"
            assert tab2.receive_json()["data"]["title"] == "Hello"

    def test_all_read_event(self, client, make_recipient):
        make_recipient("u1")
        dispatch("u1", None, "A", "body")
        with client.websocket_connect("/ws/notifications") as ws:
            _register(ws, "u1")
            mark_all_read("u1")
            assert ws.receive_json() == {"event": "notifications:allRead", "data": {"count": 1}}
