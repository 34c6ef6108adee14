from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.dto.video import VideoDto


@dataclass
class UserDto:
    user_id: str
    username: str
    email: str
    fullname: str
    avatar: str
    cover_image: Optional[str]
    has_completed_onboarding: bool
    preference_tags: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user):
        return cls(
            user_id=user.user_id,
            username=user.username,
            email=user.email,
            fullname=user.fullname,
            avatar=user.avatar,
            cover_image=user.cover_image,
            has_completed_onboarding=bool(user.has_completed_onboarding),
            preference_tags=user.preference_tag_names,
            created_at=user.created_at,
            updated_at=user.updated_at
        )


@dataclass
class LoginDto:
    user: UserDto
    access_token: str
    refresh_token: str


@dataclass
class TokenPairDto:
    access_token: str
    refresh_token: str


@dataclass
class ChannelProfileDto:
    user_id: str
    username: str
    email: str
    fullname: str
    avatar: str
    cover_image: Optional[str]
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
    created_at: datetime


# ==================== Watch history ====================

@dataclass
class WatchHistoryItemDto:
    video: VideoDto
    watch_duration_seconds: float
    is_completed: bool
    last_watched_at: datetime
    progress_percent: float


@dataclass
class WatchHistoryListDto:
    history: List[WatchHistoryItemDto]
    total: int
