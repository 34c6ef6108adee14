from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass
from pymongo import ASCENDING, DESCENDING
from common.utils.logging_utils import get_logger

logger = get_logger('watch_history')


@dataclass
class WatchHistory:
    user_id: str
    video_id: str

    last_watched_at: datetime
    watch_duration_seconds: float = 0.0
    is_completed: bool = False

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'WatchHistory':
        return cls(
            user_id=data['user_id'],
            video_id=data['video_id'],
            last_watched_at=data.get('last_watched_at'),
            watch_duration_seconds=data.get('watch_duration_seconds', 0.0),
            is_completed=data.get('is_completed', False),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at')
        )


class WatchHistoryRepository:

    COLLECTION_NAME = 'watch_history'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]
        self.collection.create_index([('user_id', ASCENDING), ('video_id', ASCENDING)], unique=True)
        self.collection.create_index([('user_id', ASCENDING), ('last_watched_at', DESCENDING)])
        self.collection.create_index('video_id')

    def record_progress(self, user_id: str, video_id: str,
                        watch_duration_seconds: float, is_completed: bool) -> WatchHistory:
        now = datetime.utcnow()

        update = {
            '$set': {
                'watch_duration_seconds': watch_duration_seconds,
                'last_watched_at': now,
                'updated_at': now
            },
            '$setOnInsert': {
                'created_at': now
            }
        }

        #NOTE: completion is sticky, a later partial watch never clears it
        if is_completed:
            update['$set']['is_completed'] = True
        else:
            update['$setOnInsert']['is_completed'] = False

        self.collection.update_one({'user_id': user_id, 'video_id': video_id}, update, upsert=True)

        return self.find_one(user_id, video_id)

    def touch(self, user_id: str, video_id: str):
        now = datetime.utcnow()

        self.collection.update_one(
            {'user_id': user_id, 'video_id': video_id},
            {
                '$set': {'last_watched_at': now, 'updated_at': now},
                '$setOnInsert': {
                    'watch_duration_seconds': 0.0,
                    'is_completed': False,
                    'created_at': now
                }
            },
            upsert=True
        )

    def find_one(self, user_id: str, video_id: str) -> Optional[WatchHistory]:
        doc = self.collection.find_one({'user_id': user_id, 'video_id': video_id})
        return WatchHistory.from_dict(doc) if doc else None

    def find_by_user_id(self, user_id: str, limit: int = 0) -> List[WatchHistory]:
        cursor = self.collection.find({'user_id': user_id}).sort('last_watched_at', DESCENDING)
        if limit:
            cursor = cursor.limit(limit)

        return [WatchHistory.from_dict(doc) for doc in cursor]

    def delete_by_user_id(self, user_id: str) -> int:
        result = self.collection.delete_many({'user_id': user_id})
        logger.info(f"Cleared {result.deleted_count} watch history rows of user {user_id}")
        return result.deleted_count

    def delete_by_video_id(self, video_id: str) -> int:
        result = self.collection.delete_many({'video_id': video_id})
        return result.deleted_count
