"""Template registry: maps notification types to template classes.

Each template renders ``title``, ``message`` and ``data`` from the context
supplied by the platform event that triggered it.
"""

from engagement.notification.notification import NotificationType
from engagement.templates.billing_document import InvoiceCreatedTemplate, QuoteCreatedTemplate
from engagement.templates.campaign import CampaignTemplate
from engagement.templates.loyalty_tier_upgrade import LoyaltyTierUpgradeTemplate
from engagement.templates.project_assignment import ProjectAssignmentTemplate
from engagement.templates.project_created import ProjectCreatedTemplate
from engagement.templates.project_refused import ProjectRefusedTemplate
from engagement.templates.project_submission import ProjectSubmissionTemplate
from engagement.templates.ticket_creation import TicketCreationTemplate
from engagement.templates.ticket_update import TicketUpdateTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.CAMPAIGN.value: CampaignTemplate,
    NotificationType.TICKET_CREATION.value: TicketCreationTemplate,
    NotificationType.TICKET_UPDATE.value: TicketUpdateTemplate,
    NotificationType.PROJECT_SUBMISSION.value: ProjectSubmissionTemplate,
    NotificationType.PROJECT_ASSIGNMENT.value: ProjectAssignmentTemplate,
    NotificationType.PROJECT_CREATED.value: ProjectCreatedTemplate,
    NotificationType.PROJECT_REFUSED.value: ProjectRefusedTemplate,
    NotificationType.INVOICE_CREATED.value: InvoiceCreatedTemplate,
    NotificationType.QUOTE_CREATED.value: QuoteCreatedTemplate,
    NotificationType.LOYALTY_TIER_UPGRADE.value: LoyaltyTierUpgradeTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
