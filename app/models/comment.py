import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Comment(db.Model):
    __tablename__ = 'comment'

    # Primary Key
    comment_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='Comment ID (UUID)'
    )

    # Foreign Keys
    video_id = Column(
        String(36),
        ForeignKey('video.video_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Video ID (FK)'
    )
    owner_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Author ID (FK)'
    )

    content = Column(Text, nullable=False, comment='Comment body')

    is_modified = Column(Boolean, default=False, nullable=False, comment='Edited after posting')

    # Timestamps
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Posted at')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='Updated at'
    )

    # Relationships
    video = relationship('Video')
    owner = relationship('User')

    __table_args__ = (
        Index('idx_video_comments', 'video_id', 'created_at'),
    )

    def __repr__(self):
        return f'<Comment comment_id={self.comment_id} video_id={self.video_id}>'
