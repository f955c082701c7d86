"""Audience resolver: expands a campaign's audience selector into recipients."""

from enum import Enum

import structlog

from engagement.directory.port import RecipientDirectory, get_directory
from engagement.directory.recipient import Recipient

logger = structlog.get_logger(__name__)


class AudienceType(Enum):
    ALL = "ALL"
    CLIENTS = "CLIENTS"
    EMPLOYEES = "EMPLOYEES"


class AudienceResolver:
    """Resolve an audience selector against the recipient directory.

    ``ALL`` returns every known user; ``CLIENTS`` and ``EMPLOYEES`` return only
    users owning the matching profile. An empty audience is a valid result.
    """

    def __init__(self, directory: RecipientDirectory | None = None):
        self.directory = directory or get_directory()

    def resolve(self, audience_type: str) -> list[Recipient]:
        try:
            selector = AudienceType(audience_type)
        except ValueError:
            raise ValueError(f"Unknown audience type: {audience_type}")

        if selector == AudienceType.CLIENTS:
            recipients = self.directory.find_with_client_profile()
        elif selector == AudienceType.EMPLOYEES:
            recipients = self.directory.find_with_employee_profile()
        else:
            recipients = self.directory.find_all()

        logger.debug(
            "Audience resolved",
            audience_type=selector.value,
            size=len(recipients),
        )
        return recipients


def resolve_audience(audience_type: str) -> list[Recipient]:
    return AudienceResolver().resolve(audience_type)
