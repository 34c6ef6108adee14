from dataclasses import dataclass
from typing import Optional

from app.dto.video import VideoDto


@dataclass
class RecentActivityDto:
    videos: int
    views: int
    likes: int


@dataclass
class ChannelStatsDto:
    total_videos: int
    total_views: int
    total_likes: int
    average_views: float
    total_subscribers: int
    total_subscribed_to: int
    last_30_days: RecentActivityDto
    top_video: Optional[VideoDto]
