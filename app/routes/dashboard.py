from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import api_response_schema, page_schema
from app.schemas.dashboard import ChannelStatsSchema, DashboardVideoSchema, DashboardVideosQuerySchema
from app.services.dashboard_service import DashboardService
from common.decorator.auth_decorators import login_required

dashboard_blueprint = Blueprint(
    'dashboard',
    __name__,
    url_prefix='/api/v1/dashboard',
    description='Channel statistics for the signed-in user'
)


@dashboard_blueprint.route('/stats', methods=['GET'])
@login_required
@dashboard_blueprint.response(200, api_response_schema(ChannelStatsSchema))
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_stats():
    return ApiResponse(200, DashboardService.get_channel_stats(g.user_id), "Channel stats fetched successfully")


@dashboard_blueprint.route('/videos', methods=['GET'])
@login_required
@dashboard_blueprint.arguments(DashboardVideosQuerySchema, location='query')
@dashboard_blueprint.response(200, api_response_schema(page_schema(DashboardVideoSchema)))
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_videos(args):
    videos = DashboardService.get_channel_videos(
        g.user_id,
        args['page'],
        args['limit'],
        sort_by=args['sort_by'],
        sort_type=args['sort_type']
    )
    return ApiResponse(200, videos, "Channel videos fetched successfully")
