from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import MessageResponseSchema, api_response_schema
from app.schemas.playlist import (
    PlaylistCreateRequestSchema, PlaylistUpdateRequestSchema,
    PlaylistSummarySchema, PlaylistListSchema, PlaylistDetailSchema
)
from app.services.playlist_service import PlaylistService
from common.decorator.auth_decorators import login_required

playlist_blueprint = Blueprint(
    'playlists',
    __name__,
    url_prefix='/api/v1/playlists',
    description='User playlists'
)


@playlist_blueprint.route('/', methods=['POST'], strict_slashes=False)
@login_required
@playlist_blueprint.arguments(PlaylistCreateRequestSchema)
@playlist_blueprint.response(201, api_response_schema(PlaylistSummarySchema))
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def create_playlist(data):
    playlist = PlaylistService.create_playlist(g.user_id, data['name'], data['description'])

    return ApiResponse(201, playlist, "Playlist created successfully")


@playlist_blueprint.route('/user/<user_id>', methods=['GET'])
@login_required
@playlist_blueprint.response(200, api_response_schema(PlaylistListSchema))
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_playlists(user_id):
    return ApiResponse(200, PlaylistService.get_user_playlists(user_id), "Playlists fetched successfully")


@playlist_blueprint.route('/add/<video_id>/<playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.response(200, api_response_schema(PlaylistDetailSchema))
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def add_video_to_playlist(video_id, playlist_id):
    playlist = PlaylistService.add_video(video_id, playlist_id, g.user_id)

    return ApiResponse(200, playlist, "Video added to playlist successfully")


@playlist_blueprint.route('/remove/<video_id>/<playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.response(200, api_response_schema(PlaylistDetailSchema))
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def remove_video_from_playlist(video_id, playlist_id):
    playlist = PlaylistService.remove_video(video_id, playlist_id, g.user_id)

    return ApiResponse(200, playlist, "Video removed from playlist successfully")


@playlist_blueprint.route('/<playlist_id>', methods=['GET'])
@login_required
@playlist_blueprint.response(200, api_response_schema(PlaylistDetailSchema))
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def get_playlist(playlist_id):
    return ApiResponse(200, PlaylistService.get_playlist(playlist_id), "Playlist fetched successfully")


@playlist_blueprint.route('/<playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.arguments(PlaylistUpdateRequestSchema)
@playlist_blueprint.response(200, api_response_schema(PlaylistSummarySchema))
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def update_playlist(data, playlist_id):
    playlist = PlaylistService.update_playlist(
        playlist_id,
        g.user_id,
        name=data.get('name'),
        description=data.get('description')
    )
    return ApiResponse(200, playlist, "Playlist updated successfully")


@playlist_blueprint.route('/<playlist_id>', methods=['DELETE'])
@login_required
@playlist_blueprint.response(200, MessageResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def delete_playlist(playlist_id):
    PlaylistService.delete_playlist(playlist_id, g.user_id)

    return ApiResponse(200, {}, "Playlist deleted successfully")
