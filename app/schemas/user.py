from marshmallow import Schema, fields, validate
from flask_smorest.fields import Upload

from app.schemas.video import VideoSchema


class RegisterFormSchema(Schema):
    fullname = fields.String(required=True, metadata={'description': 'Display name'})
    email = fields.Email(required=True, metadata={'description': 'Email'})
    username = fields.String(
        required=True,
        validate=validate.Length(max=50),
        metadata={'description': 'Channel handle'}
    )
    password = fields.String(
        required=True,
        validate=validate.Length(min=6, max=128),
        metadata={'description': 'Password (6~128 chars)'}
    )


class RegisterFilesSchema(Schema):
    avatar = Upload(metadata={'description': 'Avatar image (required)'})
    cover_image = Upload(metadata={'description': 'Cover image'})


class AvatarFilesSchema(Schema):
    avatar = Upload(metadata={'description': 'Avatar image'})


class CoverImageFilesSchema(Schema):
    cover_image = Upload(metadata={'description': 'Cover image'})


class LoginRequestSchema(Schema):
    username = fields.String(metadata={'description': 'Username (or send email)'})
    email = fields.String(metadata={'description': 'Email (or send username)'})
    password = fields.String(required=True, metadata={'description': 'Password'})


class RefreshTokenRequestSchema(Schema):
    refresh_token = fields.String(metadata={'description': 'Refresh token, takes precedence over the refreshToken cookie'})


class ChangePasswordRequestSchema(Schema):
    old_password = fields.String(required=True, metadata={'description': 'Current password'})
    new_password = fields.String(
        required=True,
        validate=validate.Length(min=6, max=128),
        metadata={'description': 'New password (6~128 chars)'}
    )


class UpdateAccountRequestSchema(Schema):
    fullname = fields.String(required=True, metadata={'description': 'Display name'})
    email = fields.Email(required=True, metadata={'description': 'Email'})


class UserSchema(Schema):
    user_id = fields.String()
    username = fields.String()
    email = fields.String()
    fullname = fields.String()
    avatar = fields.String()
    cover_image = fields.String(allow_none=True)
    has_completed_onboarding = fields.Boolean()
    preference_tags = fields.List(fields.String())
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class LoginSchema(Schema):
    user = fields.Nested(UserSchema)
    access_token = fields.String(data_key='accessToken')
    refresh_token = fields.String(data_key='refreshToken')


class TokenPairSchema(Schema):
    access_token = fields.String(data_key='accessToken')
    refresh_token = fields.String(data_key='refreshToken')


class ChannelProfileSchema(Schema):
    user_id = fields.String()
    username = fields.String()
    email = fields.String()
    fullname = fields.String()
    avatar = fields.String()
    cover_image = fields.String(allow_none=True)
    subscribers_count = fields.Integer()
    channels_subscribed_to_count = fields.Integer()
    is_subscribed = fields.Boolean()
    created_at = fields.DateTime()


# ==================== Watch history ====================

class WatchHistoryItemSchema(Schema):
    video = fields.Nested(VideoSchema)
    watch_duration_seconds = fields.Float()
    is_completed = fields.Boolean()
    last_watched_at = fields.DateTime()
    progress_percent = fields.Float(metadata={'description': 'Watched share of the video (0~100)'})


class WatchHistoryListSchema(Schema):
    history = fields.List(fields.Nested(WatchHistoryItemSchema))
    total = fields.Integer()
