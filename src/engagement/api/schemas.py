"""Pydantic request/response models for the Engagement API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

CampaignTypeLiteral = Literal["EMAIL", "PUSH", "MIXED"]
CampaignStatusLiteral = Literal["ACTIVE", "INACTIVE"]
AudienceTypeLiteral = Literal["ALL", "CLIENTS", "EMPLOYEES"]


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class CreateCampaignRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Spring newsletter",
                    "description": "What's new this season",
                    "campaign_type": "MIXED",
                    "status": "ACTIVE",
                    "audience_type": "CLIENTS",
                    "start_date": "2026-04-01T09:00:00Z",
                    "content": "<p>Hello!</p>",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    campaign_type: CampaignTypeLiteral = "EMAIL"
    status: CampaignStatusLiteral = "INACTIVE"
    audience_type: AudienceTypeLiteral = "ALL"
    start_date: datetime | None = None
    end_date: datetime | None = None
    target_audience: int = Field(0, ge=0)
    content: str | None = None


class UpdateCampaignRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    campaign_type: CampaignTypeLiteral | None = None
    status: CampaignStatusLiteral | None = None
    audience_type: AudienceTypeLiteral | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    target_audience: int | None = Field(None, ge=0)
    content: str | None = None


class CreateNotificationRequest(BaseModel):
    recipient_id: str = Field(..., min_length=1)
    notification_type: str | None = Field(None, max_length=100, examples=["ticket_update"])
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    data: dict[str, Any] | None = None


class MarkAllReadRequest(BaseModel):
    recipient_id: str = Field(..., min_length=1)


class SyncRecipientRequest(BaseModel):
    email: str | None = Field(None, max_length=254)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    roles: list[str] = Field(default_factory=list, examples=[["CLIENT_MARKETING"]])
    client_profile_id: str | None = None
    employee_profile_id: str | None = None


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class CampaignIdResponse(BaseModel):
    campaign_id: str


class CampaignResponse(BaseModel):
    campaign_id: str
    name: str
    description: str | None = None
    campaign_type: str
    status: str
    audience_type: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    executed_at: datetime | None = None
    target_audience: int
    sent: int
    opened: int
    clicked: int
    content: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class CampaignListResponse(BaseModel):
    data: list[CampaignResponse]
    meta: PageMeta


class ExecutionResponse(BaseModel):
    campaign_id: str
    sent: int
    errors: int
    skipped: int = 0


class SweepResponse(BaseModel):
    executed: list[str]
    failed: list[str]


class NotificationResponse(BaseModel):
    id: str
    recipient_id: str
    type: str | None = None
    title: str
    message: str
    data: dict[str, Any] | None = None
    is_read: bool
    created_at: str | None = None
    read_at: str | None = None


class NotificationListResponse(BaseModel):
    data: list[NotificationResponse]
    meta: PageMeta


class MarkAllReadResponse(BaseModel):
    count: int


class RecipientIdResponse(BaseModel):
    user_id: str
