import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Float, BigInteger, Boolean, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Video(db.Model):
    __tablename__ = 'video'

    video_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='Video ID (UUID), also the watch_history key'
    )

    # Hosted media
    video_file = Column(String(500), nullable=False, comment='Video URL')
    video_public_id = Column(String(255), comment='Media host id of the video')
    thumbnail = Column(String(500), nullable=False, comment='Thumbnail URL')
    thumbnail_public_id = Column(String(255), comment='Media host id of the thumbnail')

    title = Column(String(255), nullable=False, comment='Title')
    description = Column(Text, nullable=False, comment='Description')
    duration = Column(Float, default=0, nullable=False, comment='Length in seconds')
    view_count = Column(BigInteger, default=0, nullable=False, comment='Views')
    is_published = Column(Boolean, default=True, nullable=False, comment='Visible in public listings')

    owner_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Owner ID (FK)'
    )

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Published at')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='Updated at'
    )

    owner = relationship('User', back_populates='videos')
    tags = relationship(
        'VideoTag',
        back_populates='video',
        cascade='all, delete-orphan',
        order_by='VideoTag.video_tag_id'
    )

    __table_args__ = (
        Index('idx_video_published_created', 'is_published', 'created_at'),
        Index('idx_video_owner', 'owner_id', 'created_at'),
    )

    def __repr__(self):
        return f'<Video {self.title} ({self.video_id})>'

    @property
    def tag_names(self):
        return [t.tag for t in self.tags]

    def replace_tags(self, tags):
        from app.models.video_tag import VideoTag

        existing = {t.tag: t for t in self.tags}
        self.tags = [existing.get(tag) or VideoTag(tag=tag) for tag in tags]

    def increment_view_count(self):
        self.view_count = (self.view_count or 0) + 1
