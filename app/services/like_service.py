from typing import Dict, Iterable, Optional, Set

from sqlalchemy import func

from app.dto.like import LikeStatusDto, LikedVideoDto, LikedVideoListDto
from app.dto.video import VideoDto
from app.models.comment import Comment
from app.models.like import Like
from app.models.tweet import Tweet
from app.models.video import Video
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils.logging_utils import get_logger

logger = get_logger('like_service')

TARGET_COLUMNS = {
    'video': Like.video_id,
    'comment': Like.comment_id,
    'tweet': Like.tweet_id,
}


def count_likes(target: str, target_id: str) -> int:
    column = TARGET_COLUMNS[target]
    return Like.query.filter(column == target_id).count()


def is_liked_by(target: str, target_id: str, user_id: Optional[str]) -> bool:
    if not user_id:
        return False

    column = TARGET_COLUMNS[target]
    return Like.query.filter(column == target_id, Like.liked_by == user_id).first() is not None


def count_likes_bulk(target: str, target_ids: Iterable[str]) -> Dict[str, int]:
    target_ids = list(target_ids)
    if not target_ids:
        return {}

    column = TARGET_COLUMNS[target]
    rows = db.session.query(column, func.count(Like.like_id)).filter(
        column.in_(target_ids)
    ).group_by(column).all()
    return {target_id: count for target_id, count in rows}


def liked_ids_bulk(target: str, target_ids: Iterable[str], user_id: Optional[str]) -> Set[str]:
    target_ids = list(target_ids)
    if not user_id or not target_ids:
        return set()

    column = TARGET_COLUMNS[target]
    rows = db.session.query(column).filter(column.in_(target_ids), Like.liked_by == user_id).all()
    return {row[0] for row in rows}


class LikeService:

    @staticmethod
    def _toggle(target: str, target_id: str, user_id: str) -> LikeStatusDto:
        column = TARGET_COLUMNS[target]

        existing = Like.query.filter(column == target_id, Like.liked_by == user_id).first()
        if existing:
            db.session.delete(existing)
            is_liked = False
        else:
            like = Like(liked_by=user_id)
            setattr(like, column.key, target_id)
            db.session.add(like)
            is_liked = True

        db.session.flush()

        likes_count = count_likes(target, target_id)
        logger.info(f"User {user_id} {'liked' if is_liked else 'unliked'} {target} {target_id}")
        return LikeStatusDto(is_liked=is_liked, likes_count=likes_count)

    @staticmethod
    @transactional
    def toggle_video_like(video_id: str, user_id: str) -> LikeStatusDto:
        if not db.session.get(Video, video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        return LikeService._toggle('video', video_id, user_id)

    @staticmethod
    @transactional
    def toggle_comment_like(comment_id: str, user_id: str) -> LikeStatusDto:
        if not db.session.get(Comment, comment_id):
            raise BusinessError(APIError.COMMENT_NOT_FOUND)
        return LikeService._toggle('comment', comment_id, user_id)

    @staticmethod
    @transactional
    def toggle_tweet_like(tweet_id: str, user_id: str) -> LikeStatusDto:
        if not db.session.get(Tweet, tweet_id):
            raise BusinessError(APIError.TWEET_NOT_FOUND)
        return LikeService._toggle('tweet', tweet_id, user_id)

    @staticmethod
    @transactional_readonly
    def get_video_like_status(video_id: str, user_id: Optional[str]) -> LikeStatusDto:
        if not db.session.get(Video, video_id):
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        return LikeStatusDto(
            is_liked=is_liked_by('video', video_id, user_id),
            likes_count=count_likes('video', video_id)
        )

    @staticmethod
    @transactional_readonly
    def get_liked_videos(user_id: str) -> LikedVideoListDto:
        rows = db.session.query(Like, Video).join(
            Video, Like.video_id == Video.video_id
        ).filter(
            Like.liked_by == user_id
        ).order_by(Like.created_at.desc(), Like.like_id).all()

        videos = [
            LikedVideoDto(liked_at=like.created_at, video=VideoDto.from_model(video))
            for like, video in rows
        ]
        return LikedVideoListDto(videos=videos, total=len(videos))

    @staticmethod
    def delete_likes_of(target: str, target_ids: Iterable[str]) -> int:
        target_ids = list(target_ids)
        if not target_ids:
            return 0

        column = TARGET_COLUMNS[target]
        return Like.query.filter(column.in_(target_ids)).delete(synchronize_session=False)
