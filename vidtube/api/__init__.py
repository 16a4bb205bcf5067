from vidtube.api.routes.users import router as users_router
from vidtube.api.routes.videos import router as videos_router
from vidtube.api.routes.comments import router as comments_router
from vidtube.api.routes.likes import router as likes_router
from vidtube.api.routes.subscriptions import router as subscriptions_router
from vidtube.api.routes.tweets import router as tweets_router
from vidtube.api.routes.playlists import router as playlists_router
from vidtube.api.routes.dashboard import router as dashboard_router

__all__ = [
    "users_router",
    "videos_router",
    "comments_router",
    "likes_router",
    "subscriptions_router",
    "tweets_router",
    "playlists_router",
    "dashboard_router",
]
