from datetime import datetime, timedelta
from typing import Optional

from flask import current_app
from sqlalchemy import func

import common.extensions as extensions
from app.dto.recommendation import (
    FeedDto, TagScoreDto, TagCountDto, TagCatalogDto, PreferencesDto, TrendingDto
)
from app.dto.video import VideoDto
from app.models.video import Video
from app.models.video_tag import VideoTag
from app.models.mongodb.watch_history import WatchHistoryRepository
from app.services.user_service import get_user_or_404
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.content_tag import ContentTagEnum
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils.logging_utils import get_logger
from common.utils.tag_rec_alg import (
    FEED_POPULAR, FEED_TRENDING_POPULAR,
    rank_by_popularity, rank_videos_with_policy, get_top_tags, paginate
)
from common.utils.tag_utils import filter_catalog_tags

logger = get_logger('recommendation_service')


def _load_candidates():
    videos = Video.query.filter(Video.is_published.is_(True)).order_by(
        Video.created_at.desc(), Video.video_id
    ).all()
    return {v.video_id: VideoDto.from_model(v) for v in videos}


def _load_watch_history(user_id: str):
    limit = current_app.config.get('RECOMMENDATION_HISTORY_LIMIT', 100)
    records = WatchHistoryRepository(extensions.mongo_db).find_by_user_id(user_id, limit=limit)
    if not records:
        return []

    video_ids = [record.video_id for record in records]
    videos = {v.video_id: v for v in Video.query.filter(Video.video_id.in_(video_ids)).all()}

    history = []
    for record in records:
        video = videos.get(record.video_id)
        if video is None:
            continue
        history.append({
            'tags': video.tag_names,
            'watch_duration_seconds': record.watch_duration_seconds,
            'duration': video.duration,
            'is_completed': record.is_completed
        })
    return history


def _trending_window() -> timedelta:
    return timedelta(hours=current_app.config.get('TRENDING_WINDOW_HOURS', 48))


class RecommendationService:

    @staticmethod
    @transactional_readonly
    def get_feed(user_id: Optional[str], page: int, limit: int) -> FeedDto:
        candidates = _load_candidates()
        ranking_input = [dto.to_ranking_dict() for dto in candidates.values()]

        if not user_id:
            ranked = rank_by_popularity(ranking_input)
            feed_type = FEED_POPULAR
            affinity = {}
            needs_onboarding = False
        else:
            user = get_user_or_404(user_id)
            history = _load_watch_history(user_id)

            ranked, feed_type, affinity = rank_videos_with_policy(
                history,
                ranking_input,
                user.preference_tag_names,
                datetime.utcnow(),
                _trending_window()
            )
            needs_onboarding = feed_type == FEED_TRENDING_POPULAR and not user.has_completed_onboarding

        page_items = paginate(ranked, page, limit)
        docs = []
        for item in page_items:
            dto = candidates[item['video_id']]
            dto.recommendation_score = item['recommendation_score']
            docs.append(dto)

        logger.debug(f"Feed for {user_id or 'anonymous'}: {feed_type}, {len(ranked)} candidates")

        return FeedDto(
            docs=docs,
            total_docs=len(ranked),
            page=page,
            limit=limit,
            has_next_page=page * limit < len(ranked),
            is_personalized=feed_type not in (FEED_POPULAR, FEED_TRENDING_POPULAR),
            feed_type=feed_type,
            needs_onboarding=needs_onboarding,
            user_top_tags=[TagScoreDto(**t) for t in get_top_tags(affinity)]
        )

    @staticmethod
    @transactional_readonly
    def get_tag_catalog() -> TagCatalogDto:
        rows = db.session.query(VideoTag.tag, func.count(VideoTag.video_tag_id)).join(
            Video, VideoTag.video_id == Video.video_id
        ).filter(
            Video.is_published.is_(True)
        ).group_by(VideoTag.tag).all()
        counts = {tag: count for tag, count in rows}

        tags = [TagCountDto(tag=tag, video_count=counts.get(tag, 0)) for tag in ContentTagEnum.values()]
        tags.sort(key=lambda t: -t.video_count)

        return TagCatalogDto(tags=tags, total=len(tags))

    @staticmethod
    @transactional
    def save_preferences(user_id: str, selected_tags) -> PreferencesDto:
        valid_tags = filter_catalog_tags(selected_tags)
        if not valid_tags:
            raise BusinessError(APIError.INVALID_PREFERENCE_TAGS)

        user = get_user_or_404(user_id)
        user.replace_preference_tags(valid_tags)
        user.complete_onboarding()
        db.session.flush()

        logger.info(f"User {user_id} saved {len(valid_tags)} preference tags")
        return PreferencesDto(
            selected_tags=user.preference_tag_names,
            has_completed_onboarding=bool(user.has_completed_onboarding)
        )

    @staticmethod
    @transactional_readonly
    def get_trending(limit: int) -> TrendingDto:
        window = _trending_window()
        since = datetime.utcnow() - window

        videos = Video.query.filter(
            Video.is_published.is_(True),
            Video.created_at >= since
        ).order_by(Video.view_count.desc(), Video.created_at.desc()).limit(limit).all()

        return TrendingDto(
            videos=[VideoDto.from_model(v) for v in videos],
            total=len(videos),
            window_hours=int(window.total_seconds() // 3600)
        )
