from marshmallow import Schema, fields

from app.schemas.common_schema import OwnerSchema


class SubscriptionToggleSchema(Schema):
    is_subscribed = fields.Boolean()
    subscribers_count = fields.Integer()


class SubscriptionStatusSchema(Schema):
    is_subscribed = fields.Boolean()


class SubscriberSchema(Schema):
    subscriber = fields.Nested(OwnerSchema)
    subscribed_at = fields.DateTime()
    subscribers_count = fields.Integer(metadata={'description': "Subscriber's own subscriber count"})
    is_subscribed_back = fields.Boolean(metadata={'description': 'Channel owner subscribes to this subscriber'})


class SubscriberListSchema(Schema):
    subscribers = fields.List(fields.Nested(SubscriberSchema))
    total = fields.Integer()


class SubscribedChannelSchema(Schema):
    channel = fields.Nested(OwnerSchema)
    subscribed_at = fields.DateTime()
    subscribers_count = fields.Integer()


class SubscribedChannelListSchema(Schema):
    channels = fields.List(fields.Nested(SubscribedChannelSchema))
    total = fields.Integer()
