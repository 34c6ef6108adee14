import datetime
from typing import Optional

from sqlalchemy import or_

import common.extensions as extensions
from app.dto.user import (
    UserDto, LoginDto, TokenPairDto, ChannelProfileDto,
    WatchHistoryItemDto, WatchHistoryListDto
)
from app.dto.video import VideoDto
from app.models.user import User
from app.models.video import Video
from app.models.subscription import Subscription
from app.models.mongodb.watch_history import WatchHistoryRepository
from common.decorator.auth_decorators import BLACKLIST_KEY
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils import create_access_token, create_refresh_token, decode_token
from common.utils import media_host
from common.utils.logging_utils import get_logger
from common.utils.upload_utils import save_temp_file, remove_temp_file
from common.utils.validators import ensure_not_blank

logger = get_logger('user_service')


def get_user_or_404(user_id) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise BusinessError(APIError.USER_NOT_FOUND)
    return user


def _upload_image(file_storage, error_message) -> media_host.MediaUploadResult:
    local_path = save_temp_file(file_storage)
    result = media_host.upload_on_media_host(local_path, 'image')
    if not result or not result.url:
        raise BusinessError(APIError.MEDIA_UPLOAD_FAIL, error_message)
    return result


class UserService:

    @staticmethod
    @transactional
    def register(fullname: str, email: str, username: str, password: str,
                 avatar_file, cover_image_file=None) -> UserDto:
        ensure_not_blank(fullname=fullname, email=email, username=username, password=password)

        username = username.strip().lower()
        email = email.strip().lower()

        existing = User.query.filter(or_(User.username == username, User.email == email)).first()
        if existing:
            raise BusinessError(APIError.AUTH_DUPLICATE_USER)

        if avatar_file is None or not avatar_file.filename:
            raise BusinessError(APIError.AVATAR_REQUIRED)

        avatar = _upload_image(avatar_file, "Avatar upload failed")

        cover_image = None
        if cover_image_file is not None and cover_image_file.filename:
            cover_image = media_host.upload_on_media_host(save_temp_file(cover_image_file), 'image')
            if cover_image is None:
                logger.warning(f"Cover image upload failed for new user {username}")

        user = User(
            username=username,
            email=email,
            fullname=fullname.strip(),
            avatar=avatar.url,
            avatar_public_id=avatar.public_id,
            cover_image=cover_image.url if cover_image else None,
            cover_image_public_id=cover_image.public_id if cover_image else None,
            has_completed_onboarding=False
        )
        user.set_password(password)

        db.session.add(user)
        db.session.flush()

        logger.info(f"Registered user {user.user_id} ({username})")
        return UserDto.from_model(user)

    @staticmethod
    @transactional
    def login(password: str, username: Optional[str] = None, email: Optional[str] = None) -> LoginDto:
        if not (username and username.strip()) and not (email and email.strip()):
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "username or email is required")

        conditions = []
        if username and username.strip():
            conditions.append(User.username == username.strip().lower())
        if email and email.strip():
            conditions.append(User.email == email.strip().lower())

        user = User.query.filter(or_(*conditions)).first()
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND, "User does not exist")

        if not user.check_password(password):
            raise BusinessError(APIError.AUTH_INVALID_PASSWORD)

        access_token = create_access_token(user)
        refresh_token = create_refresh_token(user)
        user.refresh_token = refresh_token

        logger.info(f"User {user.user_id} logged in")
        return LoginDto(
            user=UserDto.from_model(user),
            access_token=access_token,
            refresh_token=refresh_token
        )

    @staticmethod
    @transactional
    def logout(user_id: str, access_token: Optional[str]):
        user = get_user_or_404(user_id)
        user.refresh_token = None

        if access_token:
            UserService.blacklist_token(access_token)

        logger.info(f"User {user_id} logged out")

    @staticmethod
    def blacklist_token(token: str):
        redis_client = extensions.redis_client
        if redis_client is None:
            logger.warning("Redis unavailable, token blacklist disabled")
            return

        payload = decode_token(token)
        exp_timestamp = payload.get('exp')

        if exp_timestamp:
            current_timestamp = datetime.datetime.now(datetime.timezone.utc).timestamp()
            ttl_seconds = int(exp_timestamp - current_timestamp)

            #NOTE: an expired token needs no blacklist entry
            if ttl_seconds > 0:
                redis_client.setex(BLACKLIST_KEY.format(token=token), ttl_seconds, "1")

    @staticmethod
    @transactional
    def refresh_tokens(incoming_refresh_token: Optional[str]) -> TokenPairDto:
        if not incoming_refresh_token:
            raise BusinessError(APIError.AUTH_UNAUTHORIZED, "Refresh token is required")

        payload = decode_token(incoming_refresh_token)
        if payload.get('type') != 'refresh':
            raise BusinessError(APIError.AUTH_INVALID_TOKEN, "Invalid refresh token")

        user = db.session.get(User, payload.get('sub'))
        if not user:
            raise BusinessError(APIError.AUTH_INVALID_TOKEN, "Invalid refresh token")

        if user.refresh_token != incoming_refresh_token:
            raise BusinessError(APIError.AUTH_REFRESH_TOKEN_REUSED)

        access_token = create_access_token(user)
        refresh_token = create_refresh_token(user)
        user.refresh_token = refresh_token

        return TokenPairDto(access_token=access_token, refresh_token=refresh_token)

    @staticmethod
    @transactional
    def change_password(user_id: str, old_password: str, new_password: str):
        user = get_user_or_404(user_id)

        if not user.check_password(old_password):
            raise BusinessError(APIError.AUTH_INVALID_OLD_PASSWORD)

        user.set_password(new_password)
        logger.info(f"User {user_id} changed password")

    @staticmethod
    @transactional_readonly
    def get_current_user(user_id: str) -> UserDto:
        return UserDto.from_model(get_user_or_404(user_id))

    @staticmethod
    @transactional
    def update_account(user_id: str, fullname: str, email: str) -> UserDto:
        ensure_not_blank(fullname=fullname, email=email)

        user = get_user_or_404(user_id)
        email = email.strip().lower()

        duplicate = User.query.filter(User.email == email, User.user_id != user_id).first()
        if duplicate:
            raise BusinessError(APIError.AUTH_DUPLICATE_EMAIL)

        user.fullname = fullname.strip()
        user.email = email
        db.session.flush()

        return UserDto.from_model(user)

    @staticmethod
    @transactional
    def update_avatar(user_id: str, avatar_file) -> UserDto:
        if avatar_file is None or not avatar_file.filename:
            raise BusinessError(APIError.AVATAR_REQUIRED)

        user = get_user_or_404(user_id)
        uploaded = _upload_image(avatar_file, "Avatar upload failed")

        old_public_id = user.avatar_public_id
        user.avatar = uploaded.url
        user.avatar_public_id = uploaded.public_id
        db.session.flush()

        if old_public_id:
            media_host.delete_from_media_host(old_public_id, 'image')

        return UserDto.from_model(user)

    @staticmethod
    @transactional
    def update_cover_image(user_id: str, cover_image_file) -> UserDto:
        if cover_image_file is None or not cover_image_file.filename:
            raise BusinessError(APIError.COVER_IMAGE_REQUIRED)

        user = get_user_or_404(user_id)
        uploaded = _upload_image(cover_image_file, "Cover image upload failed")

        old_public_id = user.cover_image_public_id
        user.cover_image = uploaded.url
        user.cover_image_public_id = uploaded.public_id
        db.session.flush()

        if old_public_id:
            media_host.delete_from_media_host(old_public_id, 'image')

        return UserDto.from_model(user)

    @staticmethod
    @transactional_readonly
    def get_channel_profile(username: str, viewer_id: Optional[str]) -> ChannelProfileDto:
        if not username or not username.strip():
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "username is missing")

        channel = User.query.filter_by(username=username.strip().lower()).first()
        if not channel:
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        subscribers_count = Subscription.query.filter_by(channel_id=channel.user_id).count()
        subscribed_to_count = Subscription.query.filter_by(subscriber_id=channel.user_id).count()

        is_subscribed = False
        if viewer_id:
            is_subscribed = Subscription.query.filter_by(
                channel_id=channel.user_id, subscriber_id=viewer_id
            ).first() is not None

        return ChannelProfileDto(
            user_id=channel.user_id,
            username=channel.username,
            email=channel.email,
            fullname=channel.fullname,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            subscribers_count=subscribers_count,
            channels_subscribed_to_count=subscribed_to_count,
            is_subscribed=is_subscribed,
            created_at=channel.created_at
        )

    @staticmethod
    @transactional_readonly
    def get_watch_history(user_id: str) -> WatchHistoryListDto:
        repository = WatchHistoryRepository(extensions.mongo_db)
        records = repository.find_by_user_id(user_id)

        video_ids = [record.video_id for record in records]
        videos = {v.video_id: v for v in Video.query.filter(Video.video_id.in_(video_ids)).all()} if video_ids else {}

        history = []
        for record in records:
            video = videos.get(record.video_id)
            #NOTE: rows of deleted videos are skipped, not reported
            if video is None:
                continue

            duration = video.duration or 0
            if record.is_completed:
                progress = 100.0
            elif duration > 0:
                progress = round(min(record.watch_duration_seconds / duration, 1.0) * 100, 2)
            else:
                progress = 0.0

            history.append(WatchHistoryItemDto(
                video=VideoDto.from_model(video),
                watch_duration_seconds=record.watch_duration_seconds,
                is_completed=record.is_completed,
                last_watched_at=record.last_watched_at,
                progress_percent=progress
            ))

        return WatchHistoryListDto(history=history, total=len(history))

    @staticmethod
    def clear_watch_history(user_id: str) -> int:
        repository = WatchHistoryRepository(extensions.mongo_db)
        return repository.delete_by_user_id(user_id)
