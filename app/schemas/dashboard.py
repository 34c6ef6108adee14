from marshmallow import Schema, fields, validate

from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.video import VideoSchema, VIDEO_SORT_FIELDS


class RecentActivitySchema(Schema):
    videos = fields.Integer()
    views = fields.Integer()
    likes = fields.Integer()


class ChannelStatsSchema(Schema):
    total_videos = fields.Integer()
    total_views = fields.Integer()
    total_likes = fields.Integer()
    average_views = fields.Float()
    total_subscribers = fields.Integer()
    total_subscribed_to = fields.Integer()
    last_30_days = fields.Nested(RecentActivitySchema)
    top_video = fields.Nested(VideoSchema, allow_none=True)


class DashboardVideoSchema(VideoSchema):
    likes_count = fields.Integer()
    comments_count = fields.Integer()


class DashboardVideosQuerySchema(PaginationQuerySchema):
    sort_by = fields.String(
        load_default='created_at',
        validate=validate.OneOf(VIDEO_SORT_FIELDS),
        metadata={'description': 'Sort field'}
    )
    sort_type = fields.String(
        load_default='desc',
        validate=validate.OneOf(['asc', 'desc']),
        metadata={'description': 'Sort direction'}
    )
