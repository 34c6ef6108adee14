import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Playlist(db.Model):
    __tablename__ = 'playlist'

    playlist_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='Playlist ID (UUID)'
    )

    name = Column(String(255), nullable=False, comment='Playlist name')
    description = Column(Text, nullable=False, comment='Playlist description')

    owner_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        index=True,
        comment='Owner ID (FK)'
    )

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Created at')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='Updated at'
    )

    owner = relationship('User')
    entries = relationship(
        'PlaylistVideo',
        back_populates='playlist',
        cascade='all, delete-orphan',
        order_by='PlaylistVideo.position'
    )

    def __repr__(self):
        return f'<Playlist {self.name} ({self.playlist_id})>'

    def has_video(self, video_id):
        return any(entry.video_id == video_id for entry in self.entries)

    def append_video(self, video_id):
        from app.models.playlist_video import PlaylistVideo

        next_position = max((entry.position for entry in self.entries), default=-1) + 1
        self.entries.append(PlaylistVideo(video_id=video_id, position=next_position))

    def remove_video(self, video_id):
        self.entries = [entry for entry in self.entries if entry.video_id != video_id]
