"""Campaign scheduler: executes ACTIVE campaigns whose start date has passed.

``sweep_once`` is a pure function of the stored campaigns and the clock; the
HTTP maintenance endpoint and tests call it directly. ``CampaignScheduler``
registers it as a recurring ``schedule`` job and runs pending jobs from a
background thread.

Only one scheduler may run against a database. Inside a process, the claim
check and the execution that follows it hold ``execution_lock``, so
overlapping sweeps and manual triggers deliver a campaign once. Two processes
racing are not covered.
"""

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

import schedule
import structlog
from protean.utils.globals import current_domain

from engagement.campaign.campaign import Campaign, CampaignStatus, to_utc
from engagement.campaign.execution import CampaignExecutor, execution_lock
from engagement.config import get_setting
from engagement.utils.query import fetch_all

logger = structlog.get_logger(__name__)


@dataclass
class SweepResult:
    executed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"executed": list(self.executed), "failed": list(self.failed)}


def find_due_campaigns(as_of=None) -> list[Campaign]:
    """ACTIVE, never-executed campaigns whose start date is at or before ``as_of``."""
    as_of = to_utc(as_of or datetime.now(UTC))
    repo = current_domain.repository_for(Campaign)
    candidates = fetch_all(
        repo._dao.query.filter(
            status=CampaignStatus.ACTIVE.value,
            executed_at__isnull=True,
            start_date__lte=as_of,
        )
    )
    due = [campaign for campaign in candidates if campaign.is_due(as_of)]
    return sorted(due, key=lambda c: (c.start_date.replace(tzinfo=None), str(c.id)))


def sweep_once(as_of=None, executor: CampaignExecutor | None = None) -> SweepResult:
    """Execute every due campaign once. Never raises for a single campaign."""
    as_of = as_of or datetime.now(UTC)
    executor = executor or CampaignExecutor()
    repo = current_domain.repository_for(Campaign)
    result = SweepResult()

    due = find_due_campaigns(as_of)
    if not due:
        logger.debug("No campaigns due", as_of=str(as_of))
        return result

    logger.info("Campaigns due for execution", count=len(due), as_of=str(as_of))

    for candidate in due:
        campaign_id = str(candidate.id)
        try:
            with execution_lock:
                # Claim: a fresh load must still show the campaign unexecuted
                if repo.get(campaign_id).is_executed():
                    logger.info("Campaign already executed, skipping", campaign_id=campaign_id)
                    continue

                executor.execute(campaign_id)
            result.executed.append(campaign_id)
        except Exception as exc:
            result.failed.append(campaign_id)
            logger.error(
                "Scheduled campaign execution failed",
                campaign_id=campaign_id,
                error=str(exc),
                exc_info=True,
            )

    logger.info(
        "Campaign sweep finished",
        executed=len(result.executed),
        failed=len(result.failed),
    )
    return result


class CampaignScheduler:
    """Recurring ``schedule`` job around ``sweep_once``.

    Each tick runs inside a fresh domain context. A failing tick is logged
    and the job stays scheduled. The first sweep runs as soon as the loop
    starts.
    """

    def __init__(self, domain, interval: float | None = None, sweep=sweep_once):
        self.domain = domain
        self.interval = interval if interval is not None else get_setting("campaign_sweep_interval")
        self._sweep = sweep
        self.jobs = schedule.Scheduler()
        self.jobs.every(self.interval).seconds.do(self.tick)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def tick(self) -> SweepResult | None:
        try:
            with self.domain.domain_context():
                return self._sweep()
        except Exception as exc:
            logger.error("Campaign scheduler tick failed", error=str(exc), exc_info=True)
            return None

    def run_forever(self) -> None:
        """Run pending jobs until ``stop`` is called."""
        poll = min(self.interval, 1)
        logger.info("Campaign scheduler started", interval=self.interval)
        self.jobs.run_all()
        while not self._stop.is_set():
            self.jobs.run_pending()
            self._stop.wait(poll)
        logger.info("Campaign scheduler stopped")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="campaign-scheduler", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
