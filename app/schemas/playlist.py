from marshmallow import Schema, fields

from app.schemas.common_schema import OwnerSchema
from app.schemas.video import VideoSchema


class PlaylistCreateRequestSchema(Schema):
    name = fields.String(required=True, metadata={'description': 'Playlist name'})
    description = fields.String(required=True, metadata={'description': 'Playlist description'})


class PlaylistUpdateRequestSchema(Schema):
    name = fields.String(metadata={'description': 'Playlist name'})
    description = fields.String(metadata={'description': 'Playlist description'})


class PlaylistSummarySchema(Schema):
    playlist_id = fields.String()
    name = fields.String()
    description = fields.String()
    owner_id = fields.String()
    total_videos = fields.Integer()
    total_duration = fields.Float()
    thumbnail = fields.String(allow_none=True, metadata={'description': 'Thumbnail of the first video'})
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class PlaylistListSchema(Schema):
    playlists = fields.List(fields.Nested(PlaylistSummarySchema))
    total = fields.Integer()


class PlaylistDetailSchema(Schema):
    playlist_id = fields.String()
    name = fields.String()
    description = fields.String()
    owner = fields.Nested(OwnerSchema, allow_none=True)
    videos = fields.List(fields.Nested(VideoSchema))
    total_videos = fields.Integer()
    total_duration = fields.Float()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
