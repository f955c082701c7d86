"""Domain events for the Campaign aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from engagement.domain import engagement


@engagement.event(part_of="Campaign")
class CampaignCreated:
    """A campaign was authored."""

    __version__ = "v1"

    campaign_id: Identifier(required=True)
    name: String(required=True)
    campaign_type: String(required=True)
    status: String(required=True)
    audience_type: String(required=True)
    start_date: DateTime()
    created_at: DateTime(required=True)


@engagement.event(part_of="Campaign")
class CampaignUpdated:
    """Authoring details of a campaign changed."""

    __version__ = "v1"

    campaign_id: Identifier(required=True)
    status: String(required=True)
    start_date: DateTime()
    updated_at: DateTime(required=True)


@engagement.event(part_of="Campaign")
class CampaignExecuted:
    """A campaign was delivered to its audience."""

    __version__ = "v1"

    campaign_id: Identifier(required=True)
    audience_type: String(required=True)
    sent: Integer(required=True)
    errors: Integer(required=True)
    executed_at: DateTime(required=True)

