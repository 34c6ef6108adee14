from datetime import datetime
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from common.extensions import db


class PlaylistVideo(db.Model):
    __tablename__ = 'playlist_video'

    playlist_video_id = Column(Integer, primary_key=True, autoincrement=True, comment='Playlist entry ID')

    playlist_id = Column(
        String(36),
        ForeignKey('playlist.playlist_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Playlist ID (FK)'
    )
    video_id = Column(
        String(36),
        ForeignKey('video.video_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        index=True,
        comment='Video ID (FK)'
    )
    position = Column(Integer, nullable=False, default=0, comment='Order within the playlist')

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Added at')

    playlist = relationship('Playlist', back_populates='entries')
    video = relationship('Video')

    __table_args__ = (
        db.UniqueConstraint('playlist_id', 'video_id', name='uk_playlist_video'),
    )

    def __repr__(self):
        return f'<PlaylistVideo {self.playlist_id} #{self.position} {self.video_id}>'
