from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.core.result import unwrap
from vidtube.schemas.engagement import (
    SubscribedChannelsResponse,
    SubscribersResponse,
    SubscriptionToggleResponse,
)
from vidtube.schemas.users import AuthenticatedUser, OwnerSummary
from vidtube.services.engagement_service import EngagementService


router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("/c/{channel_id}", response_model=SubscriptionToggleResponse)
def toggle_subscription(
    channel_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    state = unwrap(EngagementService.toggle_subscription(db, current_user.id, channel_id))
    return SubscriptionToggleResponse(subscribed=state.is_present)


@router.get("/c/{channel_id}", response_model=SubscribersResponse)
def get_channel_subscribers(
    channel_id: str,
    paging: PageParams = Depends(get_page_params),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    page = unwrap(EngagementService.get_channel_subscribers(db, channel_id, paging.page, paging.limit))
    return SubscribersResponse(
        subscribers=[OwnerSummary.model_validate(u) for u in page.items],
        current_page=page.page,
        total_pages=page.total_pages,
        total_subscribers=page.total,
    )


@router.get("/u/{subscriber_id}", response_model=SubscribedChannelsResponse)
def get_subscribed_channels(
    subscriber_id: str,
    paging: PageParams = Depends(get_page_params),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    page = unwrap(EngagementService.get_subscribed_channels(db, subscriber_id, paging.page, paging.limit))
    return SubscribedChannelsResponse(
        subscribed_channels=[OwnerSummary.model_validate(u) for u in page.items],
        current_page=page.page,
        total_pages=page.total_pages,
        total_subscribed_channels=page.total,
    )
