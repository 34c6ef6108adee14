from typing import Optional

from sqlalchemy import or_

import common.extensions as extensions
from app.dto.common import PageDto
from app.dto.video import VideoDto, WatchProgressDto, PublishToggleDto
from app.models.comment import Comment
from app.models.playlist_video import PlaylistVideo
from app.models.video import Video
from app.models.mongodb.watch_history import WatchHistoryRepository
from app.services.like_service import LikeService, count_likes, is_liked_by
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils import media_host
from common.utils.logging_utils import get_logger
from common.utils.tag_utils import normalize_tags, extract_hashtags
from common.utils.upload_utils import save_temp_file
from common.utils.validators import ensure_valid_id, ensure_not_blank

logger = get_logger('video_service')

SORT_COLUMNS = {
    'created_at': Video.created_at,
    'view_count': Video.view_count,
    'duration': Video.duration,
    'title': Video.title,
}


def get_video_or_404(video_id) -> Video:
    ensure_valid_id(video_id, 'video id')

    video = db.session.get(Video, video_id)
    if not video:
        raise BusinessError(APIError.VIDEO_NOT_FOUND)
    return video


def get_owned_video(video_id, user_id) -> Video:
    video = get_video_or_404(video_id)
    if video.owner_id != user_id:
        raise BusinessError(APIError.VIDEO_FORBIDDEN)
    return video


def resolve_tags(raw_tags, description) -> list:
    tags = normalize_tags(raw_tags)
    if tags:
        return tags
    return extract_hashtags(description)


def sorted_query(query, sort_by, sort_type):
    column = SORT_COLUMNS.get(sort_by, Video.created_at)
    ordering = column.asc() if sort_type == 'asc' else column.desc()
    return query.order_by(ordering, Video.video_id)


class VideoService:

    @staticmethod
    @transactional_readonly
    def list_videos(page: int, limit: int, query: Optional[str] = None,
                    sort_by: str = 'created_at', sort_type: str = 'desc',
                    user_id: Optional[str] = None) -> PageDto:
        base_query = Video.query.filter(Video.is_published.is_(True))

        if user_id:
            ensure_valid_id(user_id, 'user id')
            base_query = base_query.filter(Video.owner_id == user_id)

        if query and query.strip():
            pattern = f"%{query.strip()}%"
            base_query = base_query.filter(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))

        total = base_query.count()
        videos = sorted_query(base_query, sort_by, sort_type).offset((page - 1) * limit).limit(limit).all()

        return PageDto.of([VideoDto.from_model(v) for v in videos], total, page, limit)

    @staticmethod
    @transactional
    def publish_video(owner_id: str, title: str, description: str, tags,
                      video_file, thumbnail_file) -> VideoDto:
        ensure_not_blank(title=title, description=description)

        if video_file is None or not video_file.filename:
            raise BusinessError(APIError.VIDEO_FILE_REQUIRED)
        if thumbnail_file is None or not thumbnail_file.filename:
            raise BusinessError(APIError.THUMBNAIL_REQUIRED)

        uploaded_video = media_host.upload_on_media_host(save_temp_file(video_file), 'video')
        if not uploaded_video or not uploaded_video.url:
            raise BusinessError(APIError.MEDIA_UPLOAD_FAIL, "Error while uploading video")

        uploaded_thumbnail = media_host.upload_on_media_host(save_temp_file(thumbnail_file), 'image')
        if not uploaded_thumbnail or not uploaded_thumbnail.url:
            #NOTE: drop the already hosted video so no asset is left without a row
            media_host.delete_from_media_host(uploaded_video.public_id, 'video')
            raise BusinessError(APIError.MEDIA_UPLOAD_FAIL, "Error while uploading thumbnail")

        video = Video(
            video_file=uploaded_video.url,
            video_public_id=uploaded_video.public_id,
            thumbnail=uploaded_thumbnail.url,
            thumbnail_public_id=uploaded_thumbnail.public_id,
            title=title.strip(),
            description=description.strip(),
            duration=uploaded_video.duration or 0,
            view_count=0,
            is_published=True,
            owner_id=owner_id
        )
        video.replace_tags(resolve_tags(tags, description))

        db.session.add(video)
        db.session.flush()

        logger.info(f"User {owner_id} published video {video.video_id}")
        return VideoDto.from_model(video)

    @staticmethod
    @transactional
    def get_video(video_id: str, viewer_id: Optional[str] = None) -> VideoDto:
        video = get_video_or_404(video_id)

        if not video.is_published and video.owner_id != viewer_id:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        video.increment_view_count()
        db.session.flush()

        if viewer_id:
            WatchHistoryRepository(extensions.mongo_db).touch(viewer_id, video.video_id)

        return VideoDto.from_model(
            video,
            likes_count=count_likes('video', video.video_id),
            is_liked=is_liked_by('video', video.video_id, viewer_id)
        )

    @staticmethod
    @transactional
    def update_video(video_id: str, user_id: str, title: Optional[str] = None,
                     description: Optional[str] = None, tags=None, thumbnail_file=None) -> VideoDto:
        video = get_owned_video(video_id, user_id)

        if title is not None:
            ensure_not_blank(title=title)
            video.title = title.strip()

        if description is not None:
            ensure_not_blank(description=description)
            video.description = description.strip()

        if tags is not None:
            video.replace_tags(normalize_tags(tags))

        old_thumbnail_public_id = None
        if thumbnail_file is not None and thumbnail_file.filename:
            uploaded = media_host.upload_on_media_host(save_temp_file(thumbnail_file), 'image')
            if not uploaded or not uploaded.url:
                raise BusinessError(APIError.MEDIA_UPLOAD_FAIL, "Error while uploading thumbnail")

            old_thumbnail_public_id = video.thumbnail_public_id
            video.thumbnail = uploaded.url
            video.thumbnail_public_id = uploaded.public_id

        db.session.flush()

        if old_thumbnail_public_id:
            media_host.delete_from_media_host(old_thumbnail_public_id, 'image')

        return VideoDto.from_model(video)

    @staticmethod
    @transactional
    def delete_video(video_id: str, user_id: str):
        video = get_owned_video(video_id, user_id)
        video_public_id = video.video_public_id
        thumbnail_public_id = video.thumbnail_public_id

        comment_ids = [row[0] for row in db.session.query(Comment.comment_id).filter_by(video_id=video_id).all()]
        LikeService.delete_likes_of('comment', comment_ids)
        LikeService.delete_likes_of('video', [video_id])
        Comment.query.filter_by(video_id=video_id).delete(synchronize_session=False)
        PlaylistVideo.query.filter_by(video_id=video_id).delete(synchronize_session=False)

        db.session.delete(video)
        db.session.flush()

        WatchHistoryRepository(extensions.mongo_db).delete_by_video_id(video_id)

        media_host.delete_from_media_host(video_public_id, 'video')
        media_host.delete_from_media_host(thumbnail_public_id, 'image')

        logger.info(f"User {user_id} deleted video {video_id}")

    @staticmethod
    @transactional
    def toggle_publish(video_id: str, user_id: str) -> PublishToggleDto:
        video = get_owned_video(video_id, user_id)
        video.is_published = not video.is_published
        db.session.flush()

        return PublishToggleDto(video_id=video.video_id, is_published=bool(video.is_published))

    @staticmethod
    @transactional_readonly
    def update_watch_progress(user_id: str, video_id: str, watch_duration_seconds: float,
                              is_completed: bool) -> WatchProgressDto:
        video = get_video_or_404(video_id)

        record = WatchHistoryRepository(extensions.mongo_db).record_progress(
            user_id, video.video_id, watch_duration_seconds, is_completed
        )

        return WatchProgressDto(
            video_id=record.video_id,
            watch_duration_seconds=record.watch_duration_seconds,
            is_completed=record.is_completed,
            last_watched_at=record.last_watched_at
        )
