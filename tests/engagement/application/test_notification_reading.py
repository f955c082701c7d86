"""Application tests for read tracking."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from engagement.notification.dispatch import dispatch
from engagement.notification.notification import Notification
from engagement.notification.reading import mark_all_read, mark_read
from engagement.realtime.fake_connection import FakeConnection
from engagement.utils.query import fetch_all


def _unread(recipient_id):
    repo = current_domain.repository_for(Notification)
    return [n for n in fetch_all(repo._dao.query.filter(recipient_id=recipient_id)) if not n.is_read]


class TestMarkAllRead:
    def test_flips_all_unread_then_returns_zero(self, make_recipient):
        make_recipient("u1")
        for i in range(5):
            dispatch("u1", None, f"N{i}", "body")

        assert mark_all_read("u1") == 5
        assert _unread("u1") == []
        assert mark_all_read("u1") == 0

    def test_only_touches_the_recipients_notifications(self, make_recipient):
        make_recipient("u1")
        make_recipient("u2")
        dispatch("u1", None, "Mine", "body")
        dispatch("u2", None, "Theirs", "body")

        mark_all_read("u1")

        assert len(_unread("u2")) == 1

    def test_counts_only_previously_unread(self, make_recipient):
        make_recipient("u1")
        first = dispatch("u1", None, "A", "body")
        dispatch("u1", None, "B", "body")
        mark_read(first.id)

        assert mark_all_read("u1") == 1

    def test_emits_all_read_event_with_count(self, make_recipient, registry):
        make_recipient("u1")
        device = FakeConnection()
        registry.register(device, "u1")
        dispatch("u1", None, "A", "body")
        dispatch("u1", None, "B", "body")

        mark_all_read("u1")

        assert device.events("notifications:allRead") == [{"count": 2}]

    def test_returns_count_without_live_connections(self, make_recipient):
        make_recipient("u1")
        dispatch("u1", None, "A", "body")
        assert mark_all_read("u1") == 1


class TestMarkRead:
    def test_mark_single_notification(self, make_recipient):
        make_recipient("u1")
        notification = dispatch("u1", None, "A", "body")

        updated = mark_read(notification.id)

        assert updated.is_read is True
        assert updated.read_at is not None

    def test_read_stays_read(self, make_recipient):
        make_recipient("u1")
        notification = dispatch("u1", None, "A", "body")
        first = mark_read(notification.id)
        second = mark_read(notification.id)
        assert second.is_read is True
        assert second.read_at == first.read_at

    def test_unknown_notification(self):
        with pytest.raises(ObjectNotFoundError):
            mark_read("missing")
