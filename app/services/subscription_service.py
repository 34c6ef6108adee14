from typing import Dict, Iterable

from sqlalchemy import func

from app.dto.common import OwnerDto
from app.dto.subscription import (
    SubscriptionToggleDto, SubscriptionStatusDto,
    SubscriberDto, SubscriberListDto,
    SubscribedChannelDto, SubscribedChannelListDto
)
from app.models.subscription import Subscription
from app.models.user import User
from app.services.user_service import get_user_or_404
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils.logging_utils import get_logger
from common.utils.validators import ensure_valid_id

logger = get_logger('subscription_service')


def count_subscribers_bulk(channel_ids: Iterable[str]) -> Dict[str, int]:
    channel_ids = list(channel_ids)
    if not channel_ids:
        return {}

    rows = db.session.query(Subscription.channel_id, func.count(Subscription.subscription_id)).filter(
        Subscription.channel_id.in_(channel_ids)
    ).group_by(Subscription.channel_id).all()
    return {channel_id: count for channel_id, count in rows}


class SubscriptionService:

    @staticmethod
    @transactional
    def toggle_subscription(channel_id: str, subscriber_id: str) -> SubscriptionToggleDto:
        ensure_valid_id(channel_id, 'channel id')

        if channel_id == subscriber_id:
            raise BusinessError(APIError.SELF_SUBSCRIPTION)

        if not db.session.get(User, channel_id):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        existing = Subscription.query.filter_by(channel_id=channel_id, subscriber_id=subscriber_id).first()
        if existing:
            db.session.delete(existing)
            is_subscribed = False
        else:
            db.session.add(Subscription(channel_id=channel_id, subscriber_id=subscriber_id))
            is_subscribed = True

        db.session.flush()

        subscribers_count = Subscription.query.filter_by(channel_id=channel_id).count()
        logger.info(f"User {subscriber_id} {'subscribed to' if is_subscribed else 'unsubscribed from'} {channel_id}")
        return SubscriptionToggleDto(is_subscribed=is_subscribed, subscribers_count=subscribers_count)

    @staticmethod
    @transactional_readonly
    def get_channel_subscribers(channel_id: str) -> SubscriberListDto:
        ensure_valid_id(channel_id, 'channel id')
        if not db.session.get(User, channel_id):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        rows = db.session.query(Subscription, User).join(
            User, Subscription.subscriber_id == User.user_id
        ).filter(
            Subscription.channel_id == channel_id
        ).order_by(Subscription.created_at.desc(), Subscription.subscription_id).all()

        subscriber_ids = [user.user_id for _, user in rows]
        counts = count_subscribers_bulk(subscriber_ids)

        subscribed_back = set()
        if subscriber_ids:
            subscribed_back = {
                row[0] for row in db.session.query(Subscription.channel_id).filter(
                    Subscription.subscriber_id == channel_id,
                    Subscription.channel_id.in_(subscriber_ids)
                ).all()
            }

        subscribers = [
            SubscriberDto(
                subscriber=OwnerDto.from_model(user),
                subscribed_at=subscription.created_at,
                subscribers_count=counts.get(user.user_id, 0),
                is_subscribed_back=user.user_id in subscribed_back
            )
            for subscription, user in rows
        ]
        return SubscriberListDto(subscribers=subscribers, total=len(subscribers))

    @staticmethod
    @transactional_readonly
    def get_subscribed_channels(subscriber_id: str) -> SubscribedChannelListDto:
        ensure_valid_id(subscriber_id, 'subscriber id')
        get_user_or_404(subscriber_id)

        rows = db.session.query(Subscription, User).join(
            User, Subscription.channel_id == User.user_id
        ).filter(
            Subscription.subscriber_id == subscriber_id
        ).order_by(Subscription.created_at.desc(), Subscription.subscription_id).all()

        counts = count_subscribers_bulk(user.user_id for _, user in rows)

        channels = [
            SubscribedChannelDto(
                channel=OwnerDto.from_model(user),
                subscribed_at=subscription.created_at,
                subscribers_count=counts.get(user.user_id, 0)
            )
            for subscription, user in rows
        ]
        return SubscribedChannelListDto(channels=channels, total=len(channels))

    @staticmethod
    @transactional_readonly
    def get_subscription_status(channel_id: str, subscriber_id: str) -> SubscriptionStatusDto:
        ensure_valid_id(channel_id, 'channel id')

        is_subscribed = Subscription.query.filter_by(
            channel_id=channel_id, subscriber_id=subscriber_id
        ).first() is not None
        return SubscriptionStatusDto(is_subscribed=is_subscribed)
