from marshmallow import Schema, fields

from app.schemas.common_schema import OwnerSchema


class CommentRequestSchema(Schema):
    content = fields.String(required=True, metadata={'description': 'Comment body'})


class CommentSchema(Schema):
    comment_id = fields.String()
    video_id = fields.String()
    content = fields.String()
    is_modified = fields.Boolean()
    owner = fields.Nested(OwnerSchema, allow_none=True)
    likes_count = fields.Integer()
    is_liked = fields.Boolean()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
