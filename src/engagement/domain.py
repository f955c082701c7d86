"""Engagement bounded context: campaign delivery and real-time notification fan-out.

Owns Campaigns (scheduled, audience-targeted broadcasts), Notifications
(persisted per-recipient messages pushed live to connected devices) and a
local Recipient directory mirrored from the platform's user store.
"""

from protean.domain import Domain

from engagement.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
engagement = Domain(name="engagement")
