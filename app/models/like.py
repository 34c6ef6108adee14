import uuid
from datetime import datetime
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Like(db.Model):
    __tablename__ = 'likes'

    # Primary Key
    like_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='Like ID (UUID)'
    )

    # Target, exactly one of the three is set
    video_id = Column(
        String(36),
        ForeignKey('video.video_id', ondelete='CASCADE', onupdate='CASCADE'),
        comment='Liked video ID (FK)'
    )
    comment_id = Column(
        String(36),
        ForeignKey('comment.comment_id', ondelete='CASCADE', onupdate='CASCADE'),
        comment='Liked comment ID (FK)'
    )
    tweet_id = Column(
        String(36),
        ForeignKey('tweet.tweet_id', ondelete='CASCADE', onupdate='CASCADE'),
        comment='Liked tweet ID (FK)'
    )

    liked_by = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='User ID (FK)'
    )

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Liked at')

    # Relationships
    video = relationship('Video')
    user = relationship('User')

    # One like per user and target
    __table_args__ = (
        db.UniqueConstraint('liked_by', 'video_id', name='uk_like_user_video'),
        db.UniqueConstraint('liked_by', 'comment_id', name='uk_like_user_comment'),
        db.UniqueConstraint('liked_by', 'tweet_id', name='uk_like_user_tweet'),
        CheckConstraint(
            '(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)'
            ' + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END)'
            ' + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1',
            name='ck_like_single_target'
        ),
    )

    def __repr__(self):
        return f'<Like liked_by={self.liked_by} video={self.video_id} comment={self.comment_id} tweet={self.tweet_id}>'
