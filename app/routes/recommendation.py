from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import api_response_schema
from app.schemas.recommendation import (
    FeedQuerySchema, FeedSchema,
    TagCatalogSchema,
    PreferencesRequestSchema, PreferencesSchema,
    TrendingQuerySchema, TrendingSchema
)
from app.services.recommendation_service import RecommendationService
from common.decorator.auth_decorators import login_required, login_optional

recommendation_blueprint = Blueprint(
    'recommendations',
    __name__,
    url_prefix='/api/v1/recommendations',
    description='Tag based recommendation feed and onboarding'
)


@recommendation_blueprint.route('/feed', methods=['GET'])
@login_optional
@recommendation_blueprint.arguments(FeedQuerySchema, location='query')
@recommendation_blueprint.response(200, api_response_schema(FeedSchema))
def get_feed(args):
    feed = RecommendationService.get_feed(g.user_id, args['page'], args['limit'])

    return ApiResponse(200, feed, "Feed fetched successfully")


@recommendation_blueprint.route('/personalized', methods=['GET'])
@login_required
@recommendation_blueprint.arguments(FeedQuerySchema, location='query')
@recommendation_blueprint.response(200, api_response_schema(FeedSchema))
@recommendation_blueprint.doc(security=[{"BearerAuth": []}])
def get_personalized_feed(args):
    feed = RecommendationService.get_feed(g.user_id, args['page'], args['limit'])

    return ApiResponse(200, feed, "Personalized feed fetched successfully")


@recommendation_blueprint.route('/tags', methods=['GET'])
@recommendation_blueprint.response(200, api_response_schema(TagCatalogSchema))
def get_available_tags():
    return ApiResponse(200, RecommendationService.get_tag_catalog(), "Available tags fetched successfully")


@recommendation_blueprint.route('/preferences', methods=['POST'])
@login_required
@recommendation_blueprint.arguments(PreferencesRequestSchema)
@recommendation_blueprint.response(200, api_response_schema(PreferencesSchema))
@recommendation_blueprint.doc(security=[{"BearerAuth": []}])
def save_preferences(data):
    preferences = RecommendationService.save_preferences(g.user_id, data['selected_tags'])

    return ApiResponse(200, preferences, "Preferences saved successfully")


@recommendation_blueprint.route('/trending', methods=['GET'])
@recommendation_blueprint.arguments(TrendingQuerySchema, location='query')
@recommendation_blueprint.response(200, api_response_schema(TrendingSchema))
def get_trending_videos(args):
    return ApiResponse(200, RecommendationService.get_trending(args['limit']), "Trending videos fetched successfully")
