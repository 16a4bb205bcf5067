from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.comment import Comment
from vidtube.models.tweet import Tweet
from vidtube.models.playlist import Playlist, PlaylistVideo
from vidtube.models.like import Like, LikeTarget
from vidtube.models.subscription import Subscription
from vidtube.models.watch_history import WatchHistory

__all__ = [
    "User",
    "Video",
    "Comment",
    "Tweet",
    "Playlist",
    "PlaylistVideo",
    "Like",
    "LikeTarget",
    "Subscription",
    "WatchHistory",
]
