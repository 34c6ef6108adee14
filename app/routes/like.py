from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import api_response_schema
from app.schemas.like import LikeStatusSchema, LikedVideoListSchema
from app.services.like_service import LikeService
from common.decorator.auth_decorators import login_required, login_optional
from common.utils.validators import ensure_valid_id

like_blueprint = Blueprint(
    'likes',
    __name__,
    url_prefix='/api/v1/likes',
    description='Likes on videos, comments and tweets'
)


def _toggle_message(status, target):
    return f"{target} {'liked' if status.is_liked else 'unliked'}"


@like_blueprint.route('/toggle/v/<video_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, api_response_schema(LikeStatusSchema))
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_video_like(video_id):
    ensure_valid_id(video_id, 'video id')
    status = LikeService.toggle_video_like(video_id, g.user_id)

    return ApiResponse(200, status, _toggle_message(status, 'Video'))


@like_blueprint.route('/toggle/c/<comment_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, api_response_schema(LikeStatusSchema))
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_comment_like(comment_id):
    ensure_valid_id(comment_id, 'comment id')
    status = LikeService.toggle_comment_like(comment_id, g.user_id)

    return ApiResponse(200, status, _toggle_message(status, 'Comment'))


@like_blueprint.route('/toggle/t/<tweet_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, api_response_schema(LikeStatusSchema))
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_tweet_like(tweet_id):
    ensure_valid_id(tweet_id, 'tweet id')
    status = LikeService.toggle_tweet_like(tweet_id, g.user_id)

    return ApiResponse(200, status, _toggle_message(status, 'Tweet'))


@like_blueprint.route('/status/v/<video_id>', methods=['GET'])
@login_optional
@like_blueprint.response(200, api_response_schema(LikeStatusSchema))
def get_video_like_status(video_id):
    ensure_valid_id(video_id, 'video id')
    status = LikeService.get_video_like_status(video_id, g.user_id)

    return ApiResponse(200, status, "Like status fetched successfully")


@like_blueprint.route('/videos', methods=['GET'])
@login_required
@like_blueprint.response(200, api_response_schema(LikedVideoListSchema))
@like_blueprint.doc(security=[{"BearerAuth": []}])
def get_liked_videos():
    return ApiResponse(200, LikeService.get_liked_videos(g.user_id), "Liked videos fetched successfully")
