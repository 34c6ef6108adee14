from typing import Optional

from app.dto.common import OwnerDto
from app.dto.playlist import PlaylistSummaryDto, PlaylistListDto, PlaylistDetailDto
from app.dto.video import VideoDto
from app.models.playlist import Playlist
from app.services.user_service import get_user_or_404
from app.services.video_service import get_video_or_404
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils.logging_utils import get_logger
from common.utils.validators import ensure_valid_id, ensure_not_blank

logger = get_logger('playlist_service')


def get_playlist_or_404(playlist_id) -> Playlist:
    ensure_valid_id(playlist_id, 'playlist id')

    playlist = db.session.get(Playlist, playlist_id)
    if not playlist:
        raise BusinessError(APIError.PLAYLIST_NOT_FOUND)
    return playlist


def get_owned_playlist(playlist_id, user_id) -> Playlist:
    playlist = get_playlist_or_404(playlist_id)
    if playlist.owner_id != user_id:
        raise BusinessError(APIError.PLAYLIST_FORBIDDEN)
    return playlist


def to_summary(playlist: Playlist) -> PlaylistSummaryDto:
    videos = [entry.video for entry in playlist.entries if entry.video is not None]

    return PlaylistSummaryDto(
        playlist_id=playlist.playlist_id,
        name=playlist.name,
        description=playlist.description,
        owner_id=playlist.owner_id,
        total_videos=len(videos),
        total_duration=sum(v.duration or 0 for v in videos),
        thumbnail=videos[0].thumbnail if videos else None,
        created_at=playlist.created_at,
        updated_at=playlist.updated_at
    )


def to_detail(playlist: Playlist) -> PlaylistDetailDto:
    videos = [entry.video for entry in playlist.entries if entry.video is not None]

    return PlaylistDetailDto(
        playlist_id=playlist.playlist_id,
        name=playlist.name,
        description=playlist.description,
        owner=OwnerDto.from_model(playlist.owner),
        videos=[VideoDto.from_model(v) for v in videos],
        total_videos=len(videos),
        total_duration=sum(v.duration or 0 for v in videos),
        created_at=playlist.created_at,
        updated_at=playlist.updated_at
    )


class PlaylistService:

    @staticmethod
    @transactional
    def create_playlist(user_id: str, name: str, description: str) -> PlaylistSummaryDto:
        ensure_not_blank(name=name, description=description)

        playlist = Playlist(owner_id=user_id, name=name.strip(), description=description.strip())
        db.session.add(playlist)
        db.session.flush()

        logger.info(f"User {user_id} created playlist {playlist.playlist_id}")
        return to_summary(playlist)

    @staticmethod
    @transactional_readonly
    def get_user_playlists(user_id: str) -> PlaylistListDto:
        ensure_valid_id(user_id, 'user id')
        get_user_or_404(user_id)

        playlists = Playlist.query.filter_by(owner_id=user_id).order_by(
            Playlist.created_at.desc(), Playlist.playlist_id
        ).all()

        summaries = [to_summary(p) for p in playlists]
        return PlaylistListDto(playlists=summaries, total=len(summaries))

    @staticmethod
    @transactional_readonly
    def get_playlist(playlist_id: str) -> PlaylistDetailDto:
        return to_detail(get_playlist_or_404(playlist_id))

    @staticmethod
    @transactional
    def update_playlist(playlist_id: str, user_id: str, name: Optional[str] = None,
                        description: Optional[str] = None) -> PlaylistSummaryDto:
        if name is None and description is None:
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "name or description is required")

        playlist = get_owned_playlist(playlist_id, user_id)

        if name is not None:
            ensure_not_blank(name=name)
            playlist.name = name.strip()

        if description is not None:
            ensure_not_blank(description=description)
            playlist.description = description.strip()

        db.session.flush()
        return to_summary(playlist)

    @staticmethod
    @transactional
    def delete_playlist(playlist_id: str, user_id: str):
        playlist = get_owned_playlist(playlist_id, user_id)
        db.session.delete(playlist)

        logger.info(f"User {user_id} deleted playlist {playlist_id}")

    @staticmethod
    @transactional
    def add_video(video_id: str, playlist_id: str, user_id: str) -> PlaylistDetailDto:
        playlist = get_owned_playlist(playlist_id, user_id)
        video = get_video_or_404(video_id)

        if playlist.has_video(video.video_id):
            raise BusinessError(APIError.PLAYLIST_VIDEO_DUPLICATE)

        playlist.append_video(video.video_id)
        db.session.flush()
        db.session.refresh(playlist)

        return to_detail(playlist)

    @staticmethod
    @transactional
    def remove_video(video_id: str, playlist_id: str, user_id: str) -> PlaylistDetailDto:
        playlist = get_owned_playlist(playlist_id, user_id)
        ensure_valid_id(video_id, 'video id')

        if not playlist.has_video(video_id):
            raise BusinessError(APIError.PLAYLIST_VIDEO_MISSING)

        playlist.remove_video(video_id)
        db.session.flush()

        return to_detail(playlist)
