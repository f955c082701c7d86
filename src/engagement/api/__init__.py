"""Engagement domain API package."""

from engagement.api.routes import campaign_router, notification_router, recipient_router
from engagement.realtime.gateway import router as realtime_router

__all__ = ["campaign_router", "notification_router", "recipient_router", "realtime_router"]
