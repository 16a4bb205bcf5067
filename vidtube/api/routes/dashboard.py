from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.api.routes.videos import to_stats_responses
from vidtube.schemas.dashboard import ChannelStatsResponse, ChannelVideosResponse
from vidtube.schemas.users import AuthenticatedUser
from vidtube.services.dashboard_service import DashboardService
from vidtube.services.video_service import VideoService


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=ChannelStatsResponse)
def get_channel_stats(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Totals across the signed-in user's channel."""
    return ChannelStatsResponse(**DashboardService.get_channel_stats(db, current_user.id))


@router.get("/videos", response_model=ChannelVideosResponse)
def get_channel_videos(
    paging: PageParams = Depends(get_page_params),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    page = DashboardService.get_channel_videos(db, current_user.id, paging.page, paging.limit)
    return ChannelVideosResponse(
        videos=to_stats_responses(VideoService.with_stats(db, page.items)),
        current_page=page.page,
        total_pages=page.total_pages,
        total_videos=page.total,
    )
