from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import api_response_schema
from app.schemas.subscription import (
    SubscriptionToggleSchema, SubscriptionStatusSchema,
    SubscriberListSchema, SubscribedChannelListSchema
)
from app.services.subscription_service import SubscriptionService
from common.decorator.auth_decorators import login_required

subscription_blueprint = Blueprint(
    'subscriptions',
    __name__,
    url_prefix='/api/v1/subscriptions',
    description='Channel subscriptions'
)


@subscription_blueprint.route('/c/<channel_id>', methods=['POST'])
@login_required
@subscription_blueprint.response(200, api_response_schema(SubscriptionToggleSchema))
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_subscription(channel_id):
    result = SubscriptionService.toggle_subscription(channel_id, g.user_id)
    message = "Subscribed successfully" if result.is_subscribed else "Unsubscribed successfully"

    return ApiResponse(200, result, message)


@subscription_blueprint.route('/c/<channel_id>', methods=['GET'])
@login_required
@subscription_blueprint.response(200, api_response_schema(SubscriberListSchema))
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_subscribers(channel_id):
    subscribers = SubscriptionService.get_channel_subscribers(channel_id)

    return ApiResponse(200, subscribers, "Subscribers fetched successfully")


@subscription_blueprint.route('/u/<subscriber_id>', methods=['GET'])
@login_required
@subscription_blueprint.response(200, api_response_schema(SubscribedChannelListSchema))
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_subscribed_channels(subscriber_id):
    channels = SubscriptionService.get_subscribed_channels(subscriber_id)

    return ApiResponse(200, channels, "Subscribed channels fetched successfully")


@subscription_blueprint.route('/status/c/<channel_id>', methods=['GET'])
@login_required
@subscription_blueprint.response(200, api_response_schema(SubscriptionStatusSchema))
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_subscription_status(channel_id):
    status = SubscriptionService.get_subscription_status(channel_id, g.user_id)

    return ApiResponse(200, status, "Subscription status fetched successfully")
