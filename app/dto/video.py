from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.dto.common import OwnerDto


@dataclass
class VideoDto:
    video_id: str
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    view_count: int
    is_published: bool
    tags: List[str]
    owner: Optional[OwnerDto]
    created_at: datetime
    updated_at: datetime

    likes_count: Optional[int] = None
    comments_count: Optional[int] = None
    is_liked: Optional[bool] = None
    recommendation_score: Optional[float] = None

    @classmethod
    def from_model(cls, video, **extras):
        return cls(
            video_id=video.video_id,
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            title=video.title,
            description=video.description,
            duration=video.duration or 0,
            view_count=video.view_count or 0,
            is_published=bool(video.is_published),
            tags=video.tag_names,
            owner=OwnerDto.from_model(video.owner),
            created_at=video.created_at,
            updated_at=video.updated_at,
            **extras
        )

    def to_ranking_dict(self):
        return {
            'video_id': self.video_id,
            'tags': self.tags,
            'view_count': self.view_count,
            'created_at': self.created_at,
            'duration': self.duration
        }


@dataclass
class WatchProgressDto:
    video_id: str
    watch_duration_seconds: float
    is_completed: bool
    last_watched_at: datetime


@dataclass
class PublishToggleDto:
    video_id: str
    is_published: bool
