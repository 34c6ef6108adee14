from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.dto.common import OwnerDto


@dataclass
class CommentDto:
    comment_id: str
    video_id: str
    content: str
    is_modified: bool
    owner: Optional[OwnerDto]
    likes_count: int
    is_liked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, comment, likes_count=0, is_liked=False):
        return cls(
            comment_id=comment.comment_id,
            video_id=comment.video_id,
            content=comment.content,
            is_modified=bool(comment.is_modified),
            owner=OwnerDto.from_model(comment.owner),
            likes_count=likes_count,
            is_liked=is_liked,
            created_at=comment.created_at,
            updated_at=comment.updated_at
        )
