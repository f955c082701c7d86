"""Campaign execution engine: deliver one campaign to its whole audience.

Recipients are processed one after another. Each channel attempt for each
recipient is isolated: a failure is logged, counted in ``errors`` and the run
moves on. A recipient counts once toward ``sent`` when at least one of their
channel attempts did not raise. Channels skipped for want of an address are
counted in ``skipped``. The outcome is stored on the campaign, which
is marked executed and left ACTIVE.
"""

import threading
from dataclasses import dataclass

import structlog
from protean.exceptions import InvalidOperationError
from protean.utils.globals import current_domain

from engagement.audience.resolver import AudienceResolver
from engagement.campaign.campaign import Campaign
from engagement.campaign.channels import channels_for

logger = structlog.get_logger(__name__)

# Held for the whole check, deliver and persist sequence of an execution, and
# by the sweep around its claim check. Reentrant so a sweep can call execute.
execution_lock = threading.RLock()


@dataclass(frozen=True)
class ExecutionResult:
    sent: int
    errors: int
    skipped: int = 0

    def to_dict(self) -> dict:
        return {"sent": self.sent, "errors": self.errors, "skipped": self.skipped}


class CampaignExecutor:
    def __init__(self, resolver: AudienceResolver | None = None):
        self._resolver = resolver

    @property
    def resolver(self) -> AudienceResolver:
        return self._resolver or AudienceResolver()

    def execute(self, campaign_id, allow_rerun: bool = False) -> ExecutionResult:
        """Deliver the campaign and persist its counters.

        Executions in this process run one at a time, so a second trigger for
        the same campaign only sees it after the first has stored
        ``executed_at``.

        Raises:
            ObjectNotFoundError: the campaign does not exist.
            InvalidOperationError: the campaign already ran and ``allow_rerun``
                is not set.
        """
        with execution_lock:
            return self._execute(str(campaign_id), allow_rerun)

    def _execute(self, campaign_id: str, allow_rerun: bool) -> ExecutionResult:
        repo = current_domain.repository_for(Campaign)
        campaign = repo.get(campaign_id)

        if campaign.is_executed() and not allow_rerun:
            raise InvalidOperationError(f"Campaign {campaign_id} was already executed at {campaign.executed_at}")

        channels = channels_for(campaign.campaign_type)
        audience = self.resolver.resolve(campaign.audience_type)
        logger.info(
            "Executing campaign",
            campaign_id=campaign_id,
            campaign_name=campaign.name,
            campaign_type=campaign.campaign_type,
            audience_size=len(audience),
        )

        sent = 0
        errors = 0
        skipped = 0
        for recipient in audience:
            failures = 0
            for channel in channels:
                try:
                    if not channel.deliver(campaign, recipient):
                        skipped += 1
                except Exception as exc:
                    failures += 1
                    logger.error(
                        "Campaign delivery failed",
                        campaign_id=campaign_id,
                        recipient_id=str(recipient.user_id),
                        channel=channel.name,
                        error=str(exc),
                    )
            errors += failures
            if failures < len(channels):
                sent += 1

        campaign.record_execution(sent=sent, errors=errors)
        repo.add(campaign)

        logger.info(
            "Campaign executed",
            campaign_id=campaign_id,
            sent=sent,
            errors=errors,
            skipped=skipped,
        )
        return ExecutionResult(sent=sent, errors=errors, skipped=skipped)


def execute_campaign(campaign_id, allow_rerun: bool = False) -> ExecutionResult:
    """Run a campaign now, from the scheduler or a manual trigger."""
    return CampaignExecutor().execute(campaign_id, allow_rerun=allow_rerun)
