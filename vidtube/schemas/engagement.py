from pydantic import BaseModel

from vidtube.schemas.users import OwnerSummary
from vidtube.schemas.videos import VideoResponse


class LikeToggleResponse(BaseModel):
    liked: bool


class SubscriptionToggleResponse(BaseModel):
    subscribed: bool


class LikedVideosResponse(BaseModel):
    liked_videos: list[VideoResponse]
    current_page: int
    total_pages: int
    total_liked_videos: int


class SubscribersResponse(BaseModel):
    subscribers: list[OwnerSummary]
    current_page: int
    total_pages: int
    total_subscribers: int


class SubscribedChannelsResponse(BaseModel):
    subscribed_channels: list[OwnerSummary]
    current_page: int
    total_pages: int
    total_subscribed_channels: int
