from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.comment import CommentRequestSchema, CommentSchema
from app.schemas.common_schema import (
    MessageResponseSchema, PaginationQuerySchema, api_response_schema, page_schema
)
from app.services.comment_service import CommentService
from common.decorator.auth_decorators import login_required, login_optional

comment_blueprint = Blueprint(
    'comments',
    __name__,
    url_prefix='/api/v1/comments',
    description='Video comments'
)


@comment_blueprint.route('/<video_id>', methods=['GET'])
@login_optional
@comment_blueprint.arguments(PaginationQuerySchema, location='query')
@comment_blueprint.response(200, api_response_schema(page_schema(CommentSchema)))
def get_video_comments(args, video_id):
    comments = CommentService.get_video_comments(video_id, args['page'], args['limit'], g.user_id)

    return ApiResponse(200, comments, "Comments fetched successfully")


@comment_blueprint.route('/<video_id>', methods=['POST'])
@login_required
@comment_blueprint.arguments(CommentRequestSchema)
@comment_blueprint.response(201, api_response_schema(CommentSchema))
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def add_comment(data, video_id):
    comment = CommentService.add_comment(video_id, g.user_id, data['content'])

    return ApiResponse(201, comment, "Comment added successfully")


@comment_blueprint.route('/c/<comment_id>', methods=['PATCH'])
@login_required
@comment_blueprint.arguments(CommentRequestSchema)
@comment_blueprint.response(200, api_response_schema(CommentSchema))
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def update_comment(data, comment_id):
    comment = CommentService.update_comment(comment_id, g.user_id, data['content'])

    return ApiResponse(200, comment, "Comment updated successfully")


@comment_blueprint.route('/c/<comment_id>', methods=['DELETE'])
@login_required
@comment_blueprint.response(200, MessageResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def delete_comment(comment_id):
    CommentService.delete_comment(comment_id, g.user_id)

    return ApiResponse(200, {}, "Comment deleted successfully")
