"""Campaign authoring commands + handlers: create, update, delete."""

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from engagement.campaign.campaign import Campaign
from engagement.domain import engagement

logger = structlog.get_logger(__name__)


@engagement.command(part_of="Campaign")
class CreateCampaign:
    """Author a new campaign."""

    name: String(required=True, max_length=255)
    description: Text()
    campaign_type: String(max_length=10)
    status: String(max_length=10)
    audience_type: String(max_length=10)
    start_date: DateTime()
    end_date: DateTime()
    target_audience: Integer(min_value=0)
    content: Text()


@engagement.command(part_of="Campaign")
class UpdateCampaign:
    """Change authoring details. Omitted fields keep their value."""

    campaign_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    campaign_type: String(max_length=10)
    status: String(max_length=10)
    audience_type: String(max_length=10)
    start_date: DateTime()
    end_date: DateTime()
    target_audience: Integer(min_value=0)
    content: Text()


@engagement.command(part_of="Campaign")
class DeleteCampaign:
    campaign_id: Identifier(required=True)


@engagement.command_handler(part_of=Campaign)
class ManageCampaignHandler:
    @handle(CreateCampaign)
    def create_campaign(self, command):
        campaign = Campaign.create(
            name=command.name,
            description=command.description,
            campaign_type=command.campaign_type,
            status=command.status,
            audience_type=command.audience_type,
            start_date=command.start_date,
            end_date=command.end_date,
            target_audience=command.target_audience,
            content=command.content,
        )
        current_domain.repository_for(Campaign).add(campaign)
        return str(campaign.id)

    @handle(UpdateCampaign)
    def update_campaign(self, command):
        repo = current_domain.repository_for(Campaign)
        campaign = repo.get(str(command.campaign_id))
        campaign.update_details(
            name=command.name,
            description=command.description,
            campaign_type=command.campaign_type,
            status=command.status,
            audience_type=command.audience_type,
            start_date=command.start_date,
            end_date=command.end_date,
            target_audience=command.target_audience,
            content=command.content,
        )
        repo.add(campaign)
        return str(campaign.id)

    @handle(DeleteCampaign)
    def delete_campaign(self, command):
        repo = current_domain.repository_for(Campaign)
        campaign = repo.get(str(command.campaign_id))
        repo._dao.delete(campaign)
        logger.info("Campaign deleted", campaign_id=str(command.campaign_id))
        return str(command.campaign_id)
