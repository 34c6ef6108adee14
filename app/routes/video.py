from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import MessageResponseSchema, api_response_schema, page_schema
from app.schemas.recommendation import FeedQuerySchema, FeedSchema
from app.schemas.video import (
    VideoSchema, VideoDetailSchema, VideoListQuerySchema,
    PublishVideoFormSchema, PublishVideoFilesSchema,
    UpdateVideoFormSchema, UpdateVideoFilesSchema,
    PublishToggleSchema, WatchUpdateRequestSchema, WatchProgressSchema
)
from app.services.recommendation_service import RecommendationService
from app.services.video_service import VideoService
from common.decorator.auth_decorators import login_required, login_optional

video_blueprint = Blueprint(
    'videos',
    __name__,
    url_prefix='/api/v1/videos',
    description='Video upload, playback and watch progress'
)


@video_blueprint.route('/', methods=['GET'], strict_slashes=False)
@login_optional
@video_blueprint.arguments(VideoListQuerySchema, location='query')
@video_blueprint.response(200, api_response_schema(page_schema(VideoSchema)))
def list_videos(args):
    result = VideoService.list_videos(
        page=args['page'],
        limit=args['limit'],
        query=args.get('query'),
        sort_by=args['sort_by'],
        sort_type=args['sort_type'],
        user_id=args.get('user_id')
    )
    return ApiResponse(200, result, "Videos fetched successfully")


@video_blueprint.route('/', methods=['POST'], strict_slashes=False)
@login_required
@video_blueprint.arguments(PublishVideoFormSchema, location='form')
@video_blueprint.arguments(PublishVideoFilesSchema, location='files')
@video_blueprint.response(201, api_response_schema(VideoSchema))
@video_blueprint.doc(security=[{"BearerAuth": []}])
def publish_video(form, files):
    video = VideoService.publish_video(
        owner_id=g.user_id,
        title=form['title'],
        description=form['description'],
        tags=form.get('tags'),
        video_file=files.get('video_file'),
        thumbnail_file=files.get('thumbnail')
    )
    return ApiResponse(201, video, "Video published successfully")


@video_blueprint.route('/recommended', methods=['GET'])
@login_optional
@video_blueprint.arguments(FeedQuerySchema, location='query')
@video_blueprint.response(200, api_response_schema(FeedSchema))
def get_recommended_videos(args):
    feed = RecommendationService.get_feed(g.user_id, args['page'], args['limit'])

    return ApiResponse(200, feed, "Recommended videos fetched successfully")


@video_blueprint.route('/watch-update', methods=['PATCH'])
@login_required
@video_blueprint.arguments(WatchUpdateRequestSchema)
@video_blueprint.response(200, api_response_schema(WatchProgressSchema))
@video_blueprint.doc(security=[{"BearerAuth": []}])
def update_watch_progress(data):
    progress = VideoService.update_watch_progress(
        g.user_id,
        data['video_id'],
        data['watch_duration_seconds'],
        data['is_completed']
    )
    return ApiResponse(200, progress, "Watch history updated")


@video_blueprint.route('/toggle/publish/<video_id>', methods=['PATCH'])
@login_required
@video_blueprint.response(200, api_response_schema(PublishToggleSchema))
@video_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_publish_status(video_id):
    result = VideoService.toggle_publish(video_id, g.user_id)

    return ApiResponse(200, result, "Publish status toggled successfully")


@video_blueprint.route('/<video_id>', methods=['GET'])
@login_optional
@video_blueprint.response(200, api_response_schema(VideoDetailSchema))
def get_video(video_id):
    video = VideoService.get_video(video_id, g.user_id)

    return ApiResponse(200, video, "Video fetched successfully")


@video_blueprint.route('/<video_id>', methods=['PATCH'])
@login_required
@video_blueprint.arguments(UpdateVideoFormSchema, location='form')
@video_blueprint.arguments(UpdateVideoFilesSchema, location='files')
@video_blueprint.response(200, api_response_schema(VideoSchema))
@video_blueprint.doc(security=[{"BearerAuth": []}])
def update_video(form, files, video_id):
    video = VideoService.update_video(
        video_id,
        g.user_id,
        title=form.get('title'),
        description=form.get('description'),
        tags=form.get('tags'),
        thumbnail_file=files.get('thumbnail')
    )
    return ApiResponse(200, video, "Video updated successfully")


@video_blueprint.route('/<video_id>', methods=['DELETE'])
@login_required
@video_blueprint.response(200, MessageResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def delete_video(video_id):
    VideoService.delete_video(video_id, g.user_id)

    return ApiResponse(200, {}, "Video deleted successfully")
