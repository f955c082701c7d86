"""Campaign scheduler runner.

Runs the campaign sweep loop in its own process, for deployments where the
web workers do not run the scheduler. Run exactly one of these per database.

Usage:
    python src/server.py                 # Sweep every campaign_sweep_interval seconds
    python src/server.py --interval 30   # Override the interval
    python src/server.py --once          # Single sweep, then exit
"""

import argparse

import structlog

from engagement.campaign.scheduler import CampaignScheduler, sweep_once
from engagement.domain import engagement

logger = structlog.get_logger(__name__)


def run_once():
    with engagement.domain_context():
        result = sweep_once()
    logger.info("Single sweep finished", **result.to_dict())
    return result


def main():
    parser = argparse.ArgumentParser(description="Engagement campaign scheduler")
    parser.add_argument(
        "--interval",
        type=float,
        help="Seconds between sweeps (default: campaign_sweep_interval setting)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single sweep and exit",
    )
    args = parser.parse_args()

    engagement.init()

    if args.once:
        run_once()
        return

    scheduler = CampaignScheduler(engagement, interval=args.interval)
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        logger.info("Scheduler interrupted")


if __name__ == "__main__":
    main()
