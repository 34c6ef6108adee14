from dataclasses import dataclass
from datetime import datetime
from typing import List

from app.dto.video import VideoDto


@dataclass
class LikeStatusDto:
    is_liked: bool
    likes_count: int


@dataclass
class LikedVideoDto:
    liked_at: datetime
    video: VideoDto


@dataclass
class LikedVideoListDto:
    videos: List[LikedVideoDto]
    total: int
