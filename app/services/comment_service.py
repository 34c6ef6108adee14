from typing import Optional

from app.dto.comment import CommentDto
from app.dto.common import PageDto
from app.models.comment import Comment
from app.services.like_service import LikeService, count_likes_bulk, liked_ids_bulk, count_likes, is_liked_by
from app.services.video_service import get_video_or_404
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils.logging_utils import get_logger
from common.utils.validators import ensure_valid_id, ensure_not_blank

logger = get_logger('comment_service')


def get_owned_comment(comment_id, user_id) -> Comment:
    ensure_valid_id(comment_id, 'comment id')

    comment = db.session.get(Comment, comment_id)
    if not comment:
        raise BusinessError(APIError.COMMENT_NOT_FOUND)
    if comment.owner_id != user_id:
        raise BusinessError(APIError.COMMENT_FORBIDDEN)
    return comment


class CommentService:

    @staticmethod
    @transactional_readonly
    def get_video_comments(video_id: str, page: int, limit: int, viewer_id: Optional[str] = None) -> PageDto:
        video = get_video_or_404(video_id)

        query = Comment.query.filter_by(video_id=video.video_id)
        total = query.count()
        comments = query.order_by(
            Comment.created_at.desc(), Comment.comment_id
        ).offset((page - 1) * limit).limit(limit).all()

        comment_ids = [c.comment_id for c in comments]
        likes = count_likes_bulk('comment', comment_ids)
        liked = liked_ids_bulk('comment', comment_ids, viewer_id)

        docs = [
            CommentDto.from_model(c, likes_count=likes.get(c.comment_id, 0), is_liked=c.comment_id in liked)
            for c in comments
        ]
        return PageDto.of(docs, total, page, limit)

    @staticmethod
    @transactional
    def add_comment(video_id: str, user_id: str, content: str) -> CommentDto:
        if content is None or not content.strip():
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "Content is required")

        video = get_video_or_404(video_id)

        comment = Comment(video_id=video.video_id, owner_id=user_id, content=content.strip(), is_modified=False)
        db.session.add(comment)
        db.session.flush()

        logger.info(f"User {user_id} commented on video {video.video_id}")
        return CommentDto.from_model(comment)

    @staticmethod
    @transactional
    def update_comment(comment_id: str, user_id: str, content: str) -> CommentDto:
        ensure_not_blank(content=content)

        comment = get_owned_comment(comment_id, user_id)
        comment.content = content.strip()
        comment.is_modified = True
        db.session.flush()

        return CommentDto.from_model(
            comment,
            likes_count=count_likes('comment', comment.comment_id),
            is_liked=is_liked_by('comment', comment.comment_id, user_id)
        )

    @staticmethod
    @transactional
    def delete_comment(comment_id: str, user_id: str):
        comment = get_owned_comment(comment_id, user_id)

        LikeService.delete_likes_of('comment', [comment.comment_id])
        db.session.delete(comment)

        logger.info(f"User {user_id} deleted comment {comment_id}")
