"""Campaign aggregate: a scheduled, audience-targeted broadcast.

A campaign becomes due once it is ACTIVE and its ``start_date`` has passed.
Execution happens at most once; ``executed_at`` records it and is never
cleared, so later status changes cannot make the scheduler pick it up again.

``end_date`` is informational. ``opened`` and ``clicked`` belong to external
tracking and are never written here.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, Text

from engagement.audience.resolver import AudienceType
from engagement.campaign.events import (
    CampaignCreated,
    CampaignExecuted,
    CampaignUpdated,
)
from engagement.domain import engagement


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class CampaignType(Enum):
    EMAIL = "EMAIL"
    PUSH = "PUSH"
    MIXED = "MIXED"


class CampaignStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


_COUNTERS = ("target_audience", "sent", "opened", "clicked")

_EDITABLE_FIELDS = (
    "name",
    "description",
    "campaign_type",
    "status",
    "audience_type",
    "start_date",
    "end_date",
    "target_audience",
    "content",
)


def to_utc(moment: datetime | None) -> datetime | None:
    """Express ``moment`` in UTC. Naive values are taken to be UTC already."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _align(moment: datetime, reference: datetime) -> datetime:
    """Normalize timezone awareness of ``moment`` to match ``reference``."""
    if moment.tzinfo is not None and reference.tzinfo is None:
        return moment.replace(tzinfo=None)
    if moment.tzinfo is None and reference.tzinfo is not None:
        return moment.replace(tzinfo=reference.tzinfo)
    return moment


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@engagement.aggregate
class Campaign:
    """A broadcast sent once to an audience over one or two channels."""

    name: String(required=True, max_length=255)
    description: Text()
    campaign_type: String(choices=CampaignType, default=CampaignType.EMAIL.value)
    status: String(choices=CampaignStatus, default=CampaignStatus.INACTIVE.value)
    audience_type: String(choices=AudienceType, default=AudienceType.ALL.value)

    # Scheduling
    start_date: DateTime()  # Null means manual trigger only
    end_date: DateTime()
    executed_at: DateTime()

    # Counters
    target_audience: Integer(min_value=0, default=0)
    sent: Integer(min_value=0, default=0)
    opened: Integer(min_value=0, default=0)
    clicked: Integer(min_value=0, default=0)

    content: Text()

    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def counters_cannot_be_negative(self):
        for counter in _COUNTERS:
            value = getattr(self, counter)
            if value is not None and value < 0:
                raise ValidationError({counter: ["Counters cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        description=None,
        campaign_type=CampaignType.EMAIL.value,
        status=CampaignStatus.INACTIVE.value,
        audience_type=AudienceType.ALL.value,
        start_date=None,
        end_date=None,
        target_audience=0,
        content=None,
    ):
        now = datetime.now(UTC)
        campaign = cls(
            name=name,
            description=description,
            campaign_type=campaign_type or CampaignType.EMAIL.value,
            status=status or CampaignStatus.INACTIVE.value,
            audience_type=audience_type or AudienceType.ALL.value,
            start_date=to_utc(start_date),
            end_date=to_utc(end_date),
            target_audience=target_audience or 0,
            content=content,
            created_at=now,
            updated_at=now,
        )

        campaign.raise_(
            CampaignCreated(
                campaign_id=str(campaign.id),
                name=name,
                campaign_type=campaign.campaign_type,
                status=campaign.status,
                audience_type=campaign.audience_type,
                start_date=start_date,
                created_at=now,
            )
        )

        return campaign

    # -------------------------------------------------------------------
    # Authoring
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply the given authoring changes. ``None`` values are ignored."""
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({"fields": [f"Not editable: {', '.join(sorted(unknown))}"]})

        for field_name, value in changes.items():
            if value is None:
                continue
            if field_name in ("start_date", "end_date"):
                value = to_utc(value)
            setattr(self, field_name, value)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            CampaignUpdated(
                campaign_id=str(self.id),
                status=self.status,
                start_date=self.start_date,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------
    def is_executed(self) -> bool:
        return self.executed_at is not None

    def is_due(self, as_of=None) -> bool:
        """True when the scheduler should execute this campaign now."""
        if self.status != CampaignStatus.ACTIVE.value:
            return False
        if self.start_date is None or self.is_executed():
            return False

        as_of = as_of or datetime.now(UTC)
        return _align(self.start_date, as_of) <= as_of

    def record_execution(self, sent: int, errors: int = 0, executed_at=None):
        """Store the outcome of a delivery run and leave the campaign ACTIVE."""
        now = executed_at or datetime.now(UTC)
        self.sent = sent
        self.executed_at = now
        self.status = CampaignStatus.ACTIVE.value
        self.updated_at = now

        self.raise_(
            CampaignExecuted(
                campaign_id=str(self.id),
                audience_type=self.audience_type,
                sent=sent,
                errors=errors,
                executed_at=now,
            )
        )
