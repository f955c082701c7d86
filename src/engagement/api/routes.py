"""FastAPI routes for the Engagement domain.

Thin adapters that translate HTTP requests into domain commands and service
calls. Unknown ids become 404, operations refused by the domain become 409;
validation errors are left to Protean's exception handlers.
"""

import json
import math
from contextlib import contextmanager
from datetime import UTC, datetime

from fastapi import APIRouter, HTTPException, Query
from protean.exceptions import InvalidOperationError, ObjectNotFoundError
from protean.utils.globals import current_domain

from engagement.api.schemas import (
    CampaignIdResponse,
    CampaignListResponse,
    CampaignResponse,
    CreateCampaignRequest,
    CreateNotificationRequest,
    ExecutionResponse,
    MarkAllReadRequest,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    PageMeta,
    RecipientIdResponse,
    StatusResponse,
    SweepResponse,
    SyncRecipientRequest,
    UpdateCampaignRequest,
)
from engagement.campaign.campaign import Campaign
from engagement.campaign.execution import execute_campaign
from engagement.campaign.management import CreateCampaign, DeleteCampaign, UpdateCampaign
from engagement.campaign.scheduler import sweep_once
from engagement.directory.sync import SyncRecipient
from engagement.notification.dispatch import dispatch
from engagement.notification.notification import Notification, serialize_notification
from engagement.notification.reading import mark_all_read, mark_read
from engagement.utils.query import fetch_all

campaign_router = APIRouter(prefix="/campaigns", tags=["campaigns"])
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])
recipient_router = APIRouter(prefix="/recipients", tags=["recipients"])


@contextmanager
def _domain_errors():
    try:
        yield
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidOperationError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


def _sortable(moment):
    if moment is None:
        return datetime.min
    return moment.replace(tzinfo=None)


def _paginate(records: list, page: int, limit: int) -> tuple[list, PageMeta]:
    total = len(records)
    start = (page - 1) * limit
    meta = PageMeta(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))
    return records[start : start + limit], meta


def _campaign_response(campaign: Campaign) -> CampaignResponse:
    return CampaignResponse(
        campaign_id=str(campaign.id),
        name=campaign.name,
        description=campaign.description,
        campaign_type=campaign.campaign_type,
        status=campaign.status,
        audience_type=campaign.audience_type,
        start_date=campaign.start_date,
        end_date=campaign.end_date,
        executed_at=campaign.executed_at,
        target_audience=campaign.target_audience,
        sent=campaign.sent,
        opened=campaign.opened,
        clicked=campaign.clicked,
        content=campaign.content,
        created_at=campaign.created_at,
        updated_at=campaign.updated_at,
    )


# ---------------------------------------------------------------------------
# Campaigns
# ---------------------------------------------------------------------------
@campaign_router.post("", status_code=201, response_model=CampaignIdResponse)
async def create_campaign(body: CreateCampaignRequest) -> CampaignIdResponse:
    command = CreateCampaign(
        name=body.name,
        description=body.description,
        campaign_type=body.campaign_type,
        status=body.status,
        audience_type=body.audience_type,
        start_date=body.start_date,
        end_date=body.end_date,
        target_audience=body.target_audience,
        content=body.content,
    )
    campaign_id = current_domain.process(command, asynchronous=False)
    return CampaignIdResponse(campaign_id=campaign_id)


@campaign_router.get("", response_model=CampaignListResponse)
async def list_campaigns(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = None,
    status: str | None = None,
    campaign_type: str | None = None,
    start_date_from: datetime | None = None,
    start_date_to: datetime | None = None,
) -> CampaignListResponse:
    """List campaigns, most recently created first."""
    repo = current_domain.repository_for(Campaign)
    campaigns = fetch_all(repo._dao.query)

    if search:
        needle = search.lower()
        campaigns = [
            c for c in campaigns if needle in c.name.lower() or needle in (c.description or "").lower()
        ]
    if status:
        campaigns = [c for c in campaigns if c.status == status]
    if campaign_type:
        campaigns = [c for c in campaigns if c.campaign_type == campaign_type]
    if start_date_from:
        campaigns = [c for c in campaigns if c.start_date and _sortable(c.start_date) >= _sortable(start_date_from)]
    if start_date_to:
        campaigns = [c for c in campaigns if c.start_date and _sortable(c.start_date) <= _sortable(start_date_to)]

    campaigns.sort(key=lambda c: _sortable(c.created_at), reverse=True)
    page_items, meta = _paginate(campaigns, page, limit)
    return CampaignListResponse(data=[_campaign_response(c) for c in page_items], meta=meta)


@campaign_router.post("/maintenance/process-due", response_model=SweepResponse)
async def process_due_campaigns() -> SweepResponse:
    """Run one scheduler sweep now."""
    result = sweep_once(datetime.now(UTC))
    return SweepResponse(**result.to_dict())


@campaign_router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(campaign_id: str) -> CampaignResponse:
    with _domain_errors():
        campaign = current_domain.repository_for(Campaign).get(campaign_id)
    return _campaign_response(campaign)


@campaign_router.patch("/{campaign_id}", response_model=CampaignIdResponse)
async def update_campaign(campaign_id: str, body: UpdateCampaignRequest) -> CampaignIdResponse:
    command = UpdateCampaign(campaign_id=campaign_id, **body.model_dump(exclude_none=True))
    with _domain_errors():
        current_domain.process(command, asynchronous=False)
    return CampaignIdResponse(campaign_id=campaign_id)


@campaign_router.delete("/{campaign_id}", response_model=StatusResponse)
async def delete_campaign(campaign_id: str) -> StatusResponse:
    with _domain_errors():
        current_domain.process(DeleteCampaign(campaign_id=campaign_id), asynchronous=False)
    return StatusResponse()


@campaign_router.post("/{campaign_id}/execute", response_model=ExecutionResponse)
async def execute(campaign_id: str, force: bool = False) -> ExecutionResponse:
    """Run a campaign now. Partial delivery failures are reported, not raised."""
    with _domain_errors():
        result = execute_campaign(campaign_id, allow_rerun=force)
    return ExecutionResponse(campaign_id=campaign_id, **result.to_dict())


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------
@notification_router.post("", status_code=201, response_model=NotificationResponse)
async def create_notification(body: CreateNotificationRequest) -> NotificationResponse:
    with _domain_errors():
        notification = dispatch(
            recipient_id=body.recipient_id,
            notification_type=body.notification_type,
            title=body.title,
            message=body.message,
            data=body.data,
        )
    return NotificationResponse(**serialize_notification(notification))


@notification_router.get("", response_model=NotificationListResponse)
async def list_notifications(
    recipient_id: str | None = None,
    is_read: bool | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
) -> NotificationListResponse:
    """List notifications, newest first."""
    queryset = current_domain.repository_for(Notification)._dao.query
    if recipient_id:
        queryset = queryset.filter(recipient_id=recipient_id)
    notifications = fetch_all(queryset)

    if is_read is not None:
        notifications = [n for n in notifications if bool(n.is_read) == is_read]
    if search:
        needle = search.lower()
        notifications = [n for n in notifications if needle in n.title.lower() or needle in n.message.lower()]

    notifications.sort(key=lambda n: _sortable(n.created_at), reverse=True)
    page_items, meta = _paginate(notifications, page, limit)
    return NotificationListResponse(
        data=[NotificationResponse(**serialize_notification(n)) for n in page_items],
        meta=meta,
    )


@notification_router.patch("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_notifications_read(body: MarkAllReadRequest) -> MarkAllReadResponse:
    count = mark_all_read(body.recipient_id)
    return MarkAllReadResponse(count=count)


@notification_router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(notification_id: str) -> NotificationResponse:
    with _domain_errors():
        notification = current_domain.repository_for(Notification).get(notification_id)
    return NotificationResponse(**serialize_notification(notification))


@notification_router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(notification_id: str) -> NotificationResponse:
    with _domain_errors():
        notification = mark_read(notification_id)
    return NotificationResponse(**serialize_notification(notification))


# ---------------------------------------------------------------------------
# Recipient directory
# ---------------------------------------------------------------------------
@recipient_router.put("/{user_id}", response_model=RecipientIdResponse)
async def sync_recipient(user_id: str, body: SyncRecipientRequest) -> RecipientIdResponse:
    """Upsert the local copy of a platform user."""
    command = SyncRecipient(
        user_id=user_id,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        roles=json.dumps(body.roles),
        client_profile_id=body.client_profile_id,
        employee_profile_id=body.employee_profile_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return RecipientIdResponse(user_id=result)
