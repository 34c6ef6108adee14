from datetime import datetime, timedelta

from sqlalchemy import func

from app.dto.common import PageDto
from app.dto.dashboard import ChannelStatsDto, RecentActivityDto
from app.dto.video import VideoDto
from app.models.comment import Comment
from app.models.like import Like
from app.models.subscription import Subscription
from app.models.video import Video
from app.services.like_service import count_likes_bulk
from app.services.video_service import sorted_query
from common.decorator.db_decorators import transactional_readonly
from common.extensions import db

RECENT_WINDOW_DAYS = 30


def _count_comments_bulk(video_ids):
    if not video_ids:
        return {}

    rows = db.session.query(Comment.video_id, func.count(Comment.comment_id)).filter(
        Comment.video_id.in_(video_ids)
    ).group_by(Comment.video_id).all()
    return {video_id: count for video_id, count in rows}


class DashboardService:

    @staticmethod
    @transactional_readonly
    def get_channel_stats(user_id: str) -> ChannelStatsDto:
        total_videos, total_views = db.session.query(
            func.count(Video.video_id), func.coalesce(func.sum(Video.view_count), 0)
        ).filter(Video.owner_id == user_id).one()

        total_likes = db.session.query(func.count(Like.like_id)).join(
            Video, Like.video_id == Video.video_id
        ).filter(Video.owner_id == user_id).scalar() or 0

        total_subscribers = Subscription.query.filter_by(channel_id=user_id).count()
        total_subscribed_to = Subscription.query.filter_by(subscriber_id=user_id).count()

        since = datetime.utcnow() - timedelta(days=RECENT_WINDOW_DAYS)
        recent_videos, recent_views = db.session.query(
            func.count(Video.video_id), func.coalesce(func.sum(Video.view_count), 0)
        ).filter(Video.owner_id == user_id, Video.created_at >= since).one()

        recent_likes = db.session.query(func.count(Like.like_id)).join(
            Video, Like.video_id == Video.video_id
        ).filter(Video.owner_id == user_id, Video.created_at >= since).scalar() or 0

        top_video = Video.query.filter_by(owner_id=user_id).order_by(
            Video.view_count.desc(), Video.created_at.desc()
        ).first()

        average_views = round(int(total_views) / total_videos, 2) if total_videos else 0.0

        return ChannelStatsDto(
            total_videos=total_videos,
            total_views=int(total_views),
            total_likes=total_likes,
            average_views=average_views,
            total_subscribers=total_subscribers,
            total_subscribed_to=total_subscribed_to,
            last_30_days=RecentActivityDto(
                videos=recent_videos,
                views=int(recent_views),
                likes=recent_likes
            ),
            top_video=VideoDto.from_model(top_video) if top_video else None
        )

    @staticmethod
    @transactional_readonly
    def get_channel_videos(user_id: str, page: int, limit: int,
                           sort_by: str = 'created_at', sort_type: str = 'desc') -> PageDto:
        query = Video.query.filter_by(owner_id=user_id)
        total = query.count()
        videos = sorted_query(query, sort_by, sort_type).offset((page - 1) * limit).limit(limit).all()

        video_ids = [v.video_id for v in videos]
        likes = count_likes_bulk('video', video_ids)
        comments = _count_comments_bulk(video_ids)

        docs = [
            VideoDto.from_model(
                v,
                likes_count=likes.get(v.video_id, 0),
                comments_count=comments.get(v.video_id, 0)
            )
            for v in videos
        ]
        return PageDto.of(docs, total, page, limit)
