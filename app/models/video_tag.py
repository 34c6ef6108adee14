from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from common.extensions import db


class VideoTag(db.Model):
    __tablename__ = 'video_tag'

    video_tag_id = Column(Integer, primary_key=True, autoincrement=True, comment='Video tag ID')

    video_id = Column(
        String(36),
        ForeignKey('video.video_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Video ID (FK)'
    )
    tag = Column(String(50), nullable=False, index=True, comment='Lowercase tag')

    video = relationship('Video', back_populates='tags')

    __table_args__ = (
        db.UniqueConstraint('video_id', 'tag', name='uk_video_tag'),
    )

    def __repr__(self):
        return f'<VideoTag {self.video_id} {self.tag}>'
