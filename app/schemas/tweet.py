from marshmallow import Schema, fields, validate

from app.schemas.common_schema import OwnerSchema

TWEET_MAX_LENGTH = 280


class TweetRequestSchema(Schema):
    content = fields.String(
        required=True,
        validate=validate.Length(min=1, max=TWEET_MAX_LENGTH),
        metadata={'description': 'Post body (1~280 chars)'}
    )


class TweetSchema(Schema):
    tweet_id = fields.String()
    content = fields.String()
    owner = fields.Nested(OwnerSchema, allow_none=True)
    likes_count = fields.Integer()
    is_liked = fields.Boolean()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
