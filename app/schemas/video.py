from marshmallow import Schema, fields, validate
from flask_smorest.fields import Upload

from app.schemas.common_schema import OwnerSchema, PaginationQuerySchema

VIDEO_SORT_FIELDS = ['created_at', 'view_count', 'duration', 'title']


class VideoSchema(Schema):
    video_id = fields.String()
    video_file = fields.String(metadata={'description': 'Hosted video URL'})
    thumbnail = fields.String(metadata={'description': 'Hosted thumbnail URL'})
    title = fields.String()
    description = fields.String()
    duration = fields.Float(metadata={'description': 'Length in seconds'})
    view_count = fields.Integer()
    is_published = fields.Boolean()
    tags = fields.List(fields.String())
    owner = fields.Nested(OwnerSchema, allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class VideoDetailSchema(VideoSchema):
    likes_count = fields.Integer()
    is_liked = fields.Boolean()


class VideoListQuerySchema(PaginationQuerySchema):
    query = fields.String(load_default=None, metadata={'description': 'Search in title and description'})
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
    user_id = fields.String(load_default=None, metadata={'description': 'Owner filter'})


class PublishVideoFormSchema(Schema):
    title = fields.String(required=True, metadata={'description': 'Title'})
    description = fields.String(required=True, metadata={'description': 'Description'})
    tags = fields.String(
        load_default=None,
        metadata={'description': 'Comma separated tags, defaults to #hashtags found in the description'}
    )


class PublishVideoFilesSchema(Schema):
    video_file = Upload(metadata={'description': 'Video file'})
    thumbnail = Upload(metadata={'description': 'Thumbnail image'})


class UpdateVideoFormSchema(Schema):
    title = fields.String(metadata={'description': 'Title'})
    description = fields.String(metadata={'description': 'Description'})
    tags = fields.String(metadata={'description': 'Comma separated tags'})


class UpdateVideoFilesSchema(Schema):
    thumbnail = Upload(metadata={'description': 'Replacement thumbnail'})


class PublishToggleSchema(Schema):
    video_id = fields.String()
    is_published = fields.Boolean()


class WatchUpdateRequestSchema(Schema):
    video_id = fields.String(required=True, metadata={'description': 'Video ID'})
    watch_duration_seconds = fields.Float(
        required=True,
        validate=validate.Range(min=0),
        metadata={'description': 'Seconds watched so far'}
    )
    is_completed = fields.Boolean(load_default=False, metadata={'description': 'Watched to the end'})


class WatchProgressSchema(Schema):
    video_id = fields.String()
    watch_duration_seconds = fields.Float()
    is_completed = fields.Boolean()
    last_watched_at = fields.DateTime()
