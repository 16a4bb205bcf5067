import enum

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.core.result import unwrap
from vidtube.models import LikeTarget
from vidtube.schemas.engagement import LikedVideosResponse, LikeToggleResponse
from vidtube.schemas.users import AuthenticatedUser
from vidtube.schemas.videos import VideoResponse
from vidtube.services.engagement_service import EngagementService


router = APIRouter(prefix="/likes", tags=["Likes"])


class LikeKind(str, enum.Enum):
    """Short path segment for each likeable target."""
    VIDEO = "v"
    COMMENT = "c"
    TWEET = "t"


_TARGETS = {
    LikeKind.VIDEO: LikeTarget.VIDEO,
    LikeKind.COMMENT: LikeTarget.COMMENT,
    LikeKind.TWEET: LikeTarget.TWEET,
}


@router.post("/toggle/{kind}/{target_id}", response_model=LikeToggleResponse)
def toggle_like(
    kind: LikeKind,
    target_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Like the target if not yet liked, otherwise remove the like."""
    state = unwrap(EngagementService.toggle_like(db, current_user.id, target_id, _TARGETS[kind]))
    return LikeToggleResponse(liked=state.is_present)


@router.get("/videos", response_model=LikedVideosResponse)
def get_liked_videos(
    paging: PageParams = Depends(get_page_params),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    page = EngagementService.get_liked_videos(db, current_user.id, paging.page, paging.limit)
    return LikedVideosResponse(
        liked_videos=[VideoResponse.model_validate(v) for v in page.items],
        current_page=page.page,
        total_pages=page.total_pages,
        total_liked_videos=page.total,
    )
