from marshmallow import Schema, fields

from app.schemas.video import VideoSchema


class LikeStatusSchema(Schema):
    is_liked = fields.Boolean()
    likes_count = fields.Integer()


class LikedVideoSchema(Schema):
    liked_at = fields.DateTime()
    video = fields.Nested(VideoSchema)


class LikedVideoListSchema(Schema):
    videos = fields.List(fields.Nested(LikedVideoSchema))
    total = fields.Integer()
