from dataclasses import dataclass
from typing import List

from app.dto.video import VideoDto


@dataclass
class TagScoreDto:
    tag: str
    score: float


@dataclass
class FeedDto:
    docs: List[VideoDto]
    total_docs: int
    page: int
    limit: int
    has_next_page: bool
    is_personalized: bool
    feed_type: str
    needs_onboarding: bool
    user_top_tags: List[TagScoreDto]


@dataclass
class TagCountDto:
    tag: str
    video_count: int


@dataclass
class TagCatalogDto:
    tags: List[TagCountDto]
    total: int


@dataclass
class PreferencesDto:
    selected_tags: List[str]
    has_completed_onboarding: bool


@dataclass
class TrendingDto:
    videos: List[VideoDto]
    total: int
    window_hours: int
