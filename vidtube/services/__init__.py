from vidtube.services.auth_service import AuthService
from vidtube.services.comment_service import CommentService
from vidtube.services.credential_store import CredentialStore
from vidtube.services.dashboard_service import DashboardService
from vidtube.services.engagement_service import EdgeState, EngagementService
from vidtube.services.ownership_service import OwnershipService
from vidtube.services.playlist_service import PlaylistService
from vidtube.services.token_service import TokenPair, TokenService
from vidtube.services.tweet_service import TweetService
from vidtube.services.user_service import UserService
from vidtube.services.video_service import VideoService

__all__ = [
    "AuthService",
    "CommentService",
    "CredentialStore",
    "DashboardService",
    "EdgeState",
    "EngagementService",
    "OwnershipService",
    "PlaylistService",
    "TokenPair",
    "TokenService",
    "TweetService",
    "UserService",
    "VideoService",
]
