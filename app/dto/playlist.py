from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.dto.common import OwnerDto
from app.dto.video import VideoDto


@dataclass
class PlaylistSummaryDto:
    playlist_id: str
    name: str
    description: str
    owner_id: str
    total_videos: int
    total_duration: float
    thumbnail: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass
class PlaylistListDto:
    playlists: List[PlaylistSummaryDto]
    total: int


@dataclass
class PlaylistDetailDto:
    playlist_id: str
    name: str
    description: str
    owner: Optional[OwnerDto]
    videos: List[VideoDto]
    total_videos: int
    total_duration: float
    created_at: datetime
    updated_at: datetime
