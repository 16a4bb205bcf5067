from pydantic import BaseModel

from vidtube.schemas.videos import VideoWithStatsResponse


class ChannelStatsResponse(BaseModel):
    total_videos: int
    total_subscribers: int
    total_views: int
    total_likes: int


class ChannelVideosResponse(BaseModel):
    videos: list[VideoWithStatsResponse]
    current_page: int
    total_pages: int
    total_videos: int
