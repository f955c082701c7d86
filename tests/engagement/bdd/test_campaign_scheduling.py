"""BDD tests for scheduled campaign delivery."""

from datetime import UTC, datetime, timedelta

from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from engagement.campaign.campaign import Campaign
from engagement.campaign.scheduler import sweep_once
from engagement.notification.notification import Notification
from engagement.utils.query import fetch_all

scenarios("features/campaign_scheduling.feature")


def _store(status, campaign_type, audience_type, minutes):
    campaign = Campaign.create(
        name="Scheduled",
        content="Body",
        campaign_type=campaign_type,
        status=status,
        audience_type=audience_type,
        start_date=datetime.now(UTC) - timedelta(minutes=minutes),
    )
    current_domain.repository_for(Campaign).add(campaign)
    return str(campaign.id)


@given(
    parsers.cfparse('an active "{campaign_type}" campaign for "{audience_type}" that started {minutes:d} minute ago'),
    target_fixture="campaign_id",
)
def active_campaign(campaign_type, audience_type, minutes):
    return _store("ACTIVE", campaign_type, audience_type, minutes)


@given(
    parsers.cfparse('an inactive "{campaign_type}" campaign for "{audience_type}" that started {minutes:d} minute ago'),
    target_fixture="campaign_id",
)
def inactive_campaign(campaign_type, audience_type, minutes):
    return _store("INACTIVE", campaign_type, audience_type, minutes)


@when("the scheduler sweeps", target_fixture="sweep")
def run_sweep():
    return sweep_once()


@when("the scheduler sweeps again", target_fixture="second_sweep")
def run_sweep_again():
    return sweep_once()


@then(parsers.cfparse("the campaign is executed with {sent:d} sent"))
def campaign_executed(campaign_id, sweep, sent):
    campaign = current_domain.repository_for(Campaign).get(campaign_id)
    assert sweep.executed == [campaign_id]
    assert campaign.executed_at is not None
    assert campaign.sent == sent
    assert campaign.status == "ACTIVE"


@then("the campaign is not executed")
def campaign_not_executed(campaign_id, sweep):
    assert sweep.executed == []
    assert current_domain.repository_for(Campaign).get(campaign_id).executed_at is None


@then("the second sweep executes nothing")
def second_sweep_empty(second_sweep):
    assert second_sweep.executed == []
    assert second_sweep.failed == []


@then(parsers.cfparse("{count:d} live notifications are stored"))
def notifications_stored(count):
    assert len(fetch_all(current_domain.repository_for(Notification)._dao.query)) == count


@then(parsers.cfparse("{count:d} messages are sent through the mail channel"))
def mails_sent(fake_mail, count):
    assert len(fake_mail.sent_messages) == count
