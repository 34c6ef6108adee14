from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import (
    MessageResponseSchema, PaginationQuerySchema, api_response_schema, page_schema
)
from app.schemas.tweet import TweetRequestSchema, TweetSchema
from app.services.tweet_service import TweetService
from common.decorator.auth_decorators import login_required

tweet_blueprint = Blueprint(
    'tweets',
    __name__,
    url_prefix='/api/v1/tweets',
    description='Short text posts'
)


@tweet_blueprint.route('/', methods=['POST'], strict_slashes=False)
@login_required
@tweet_blueprint.arguments(TweetRequestSchema)
@tweet_blueprint.response(201, api_response_schema(TweetSchema))
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def create_tweet(data):
    tweet = TweetService.create_tweet(g.user_id, data['content'])

    return ApiResponse(201, tweet, "Tweet created successfully")


@tweet_blueprint.route('/user/<user_id>', methods=['GET'])
@login_required
@tweet_blueprint.arguments(PaginationQuerySchema, location='query')
@tweet_blueprint.response(200, api_response_schema(page_schema(TweetSchema)))
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_tweets(args, user_id):
    tweets = TweetService.get_user_tweets(user_id, args['page'], args['limit'], g.user_id)

    return ApiResponse(200, tweets, "Tweets fetched successfully")


@tweet_blueprint.route('/<tweet_id>', methods=['PATCH'])
@login_required
@tweet_blueprint.arguments(TweetRequestSchema)
@tweet_blueprint.response(200, api_response_schema(TweetSchema))
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def update_tweet(data, tweet_id):
    tweet = TweetService.update_tweet(tweet_id, g.user_id, data['content'])

    return ApiResponse(200, tweet, "Tweet updated successfully")


@tweet_blueprint.route('/<tweet_id>', methods=['DELETE'])
@login_required
@tweet_blueprint.response(200, MessageResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def delete_tweet(tweet_id):
    TweetService.delete_tweet(tweet_id, g.user_id)

    return ApiResponse(200, {}, "Tweet deleted successfully")
