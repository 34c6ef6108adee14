"""
Models package
SQLAlchemy ORM models and MongoDB collection helpers

Relational models (one model per file):
- User: account and channel profile
- UserPreferenceTag: tags chosen during onboarding
- Video: uploaded video
- VideoTag: lowercase video tags
- Comment: comment on a video
- Like: like on a video, comment or tweet
- Subscription: subscriber -> channel edge
- Playlist / PlaylistVideo: ordered video lists
- Tweet: short text post

MongoDB Collections:
- WatchHistory: per user and video watch progress
"""

from common.extensions import db

from app.models.user import User
from app.models.user_preference_tag import UserPreferenceTag
from app.models.video import Video
from app.models.video_tag import VideoTag
from app.models.comment import Comment
from app.models.tweet import Tweet
from app.models.like import Like
from app.models.subscription import Subscription
from app.models.playlist import Playlist
from app.models.playlist_video import PlaylistVideo

from app.models.mongodb import WatchHistory, WatchHistoryRepository

__all__ = [
    # Database instance
    'db',

    # SQLAlchemy Models
    'User',
    'UserPreferenceTag',
    'Video',
    'VideoTag',
    'Comment',
    'Tweet',
    'Like',
    'Subscription',
    'Playlist',
    'PlaylistVideo',

    # MongoDB Models
    'WatchHistory',
    'WatchHistoryRepository'
]
