from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.dto.common import OwnerDto


@dataclass
class TweetDto:
    tweet_id: str
    content: str
    owner: Optional[OwnerDto]
    likes_count: int
    is_liked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, tweet, likes_count=0, is_liked=False):
        return cls(
            tweet_id=tweet.tweet_id,
            content=tweet.content,
            owner=OwnerDto.from_model(tweet.owner),
            likes_count=likes_count,
            is_liked=is_liked,
            created_at=tweet.created_at,
            updated_at=tweet.updated_at
        )
