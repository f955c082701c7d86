"""Application tests for the platform event notification constructors."""

import pytest
from protean.exceptions import ObjectNotFoundError

from engagement.notification import helpers
from engagement.realtime.fake_connection import FakeConnection


@pytest.fixture()
def people(make_recipient):
    make_recipient("admin-1", roles=["ADMIN"])
    make_recipient("admin-2", roles=["ADMIN"])
    make_recipient("staff-1", roles=["EMPLOYEE"], employee=True)
    make_recipient("client-1", first_name="Grace", last_name="Hopper", roles=["CLIENT_MARKETING"], client=True)


class TestTicketNotifications:
    def test_ticket_created_goes_to_each_admin(self, people, registry):
        device = FakeConnection()
        registry.register(device, "admin-2")

        notifications = helpers.notify_ticket_created("T-7", "Printer jam", "client-1", ["admin-1", "admin-2"])

        assert [n.recipient_id for n in notifications] == ["admin-1", "admin-2"]
        assert notifications[0].notification_type == "ticket_creation"
        assert notifications[0].message == 'Grace Hopper created a new ticket: "Printer jam"'
        assert device.events("notification:new")[0]["data"]["ticket_id"] == "T-7"

    def test_unknown_admin_is_skipped(self, people):
        notifications = helpers.notify_ticket_created("T-7", "Printer jam", "client-1", ["ghost", "admin-1"])
        assert [n.recipient_id for n in notifications] == ["admin-1"]

    def test_unknown_client_raises(self, people):
        with pytest.raises(ObjectNotFoundError):
            helpers.notify_ticket_created("T-7", "Printer jam", "ghost", ["admin-1"])

    def test_ticket_opened_for_client(self, people):
        notification = helpers.notify_ticket_opened_for_client("T-8", "Access request", "client-1")
        assert notification.notification_type == "ticket_update"
        assert notification.payload() == {"ticket_id": "T-8", "ticket_title": "Access request"}


class TestProjectNotifications:
    def test_project_submitted_to_admins(self, people):
        notifications = helpers.notify_project_submitted("P-1", "Website", "client-1", ["admin-1"])
        assert notifications[0].notification_type == "project_submission"
        assert notifications[0].payload()["client_name"] == "Grace Hopper"

    def test_project_members_excludes_clients(self, people):
        notifications = helpers.notify_project_members(
            "P-1", "Website", ["staff-1", "client-1", "admin-1", "ghost"], "You were added"
        )
        assert sorted(n.recipient_id for n in notifications) == ["admin-1", "staff-1"]
        assert notifications[0].message == 'You were added: "Website"'

    def test_project_created(self, people):
        notification = helpers.notify_project_created("client-1", "P-2", "Mobile app")
        assert notification.notification_type == "project_created"

    def test_project_refused(self, people):
        notification = helpers.notify_project_refused("client-1", "P-3", "Rebrand", "Out of scope")
        assert notification.payload()["reason"] == "Out of scope"


class TestBillingAndLoyaltyNotifications:
    def test_quote_ready(self, people):
        notification = helpers.notify_invoice_ready("client-1", "D-1", "Q-2026-001", document_type="quote")
        assert notification.notification_type == "quote_created"

    def test_invoice_ready(self, people):
        notification = helpers.notify_invoice_ready("client-1", "D-2", "F-2026-001")
        assert notification.notification_type == "invoice_created"

    def test_invoice_for_unknown_user_returns_none(self, people):
        assert helpers.notify_invoice_ready("ghost", "D-3", "F-2026-002") is None

    def test_tier_upgrade(self, people):
        notification = helpers.notify_tier_upgrade("client-1", "client-client-1", "Bronze", "Gold")
        assert notification.notification_type == "loyalty_tier_upgrade"
        assert notification.payload()["new_tier"] == "Gold"
        assert notification.payload()["reward"] == "Permanent VIP discount"
