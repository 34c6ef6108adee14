from flask import g, request, current_app
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import MessageResponseSchema, api_response_schema
from app.schemas.user import (
    RegisterFormSchema, RegisterFilesSchema,
    LoginRequestSchema, LoginSchema,
    RefreshTokenRequestSchema, TokenPairSchema,
    ChangePasswordRequestSchema, UpdateAccountRequestSchema,
    AvatarFilesSchema, CoverImageFilesSchema,
    UserSchema, ChannelProfileSchema, WatchHistoryListSchema
)
from app.services.user_service import UserService
from common.decorator.auth_decorators import login_required
from common.utils.cookie_utils import set_auth_cookies, clear_auth_cookies

user_blueprint = Blueprint(
    'users',
    __name__,
    url_prefix='/api/v1/users',
    description='Accounts, channels and watch history'
)


@user_blueprint.route('/register', methods=['POST'])
@user_blueprint.arguments(RegisterFormSchema, location='form')
@user_blueprint.arguments(RegisterFilesSchema, location='files')
@user_blueprint.response(201, api_response_schema(UserSchema))
def register(form, files):
    user = UserService.register(
        fullname=form['fullname'],
        email=form['email'],
        username=form['username'],
        password=form['password'],
        avatar_file=files.get('avatar'),
        cover_image_file=files.get('cover_image')
    )
    return ApiResponse(201, user, "User registered successfully")


@user_blueprint.route('/login', methods=['POST'])
@user_blueprint.arguments(LoginRequestSchema)
@user_blueprint.response(200, api_response_schema(LoginSchema))
def login(data):
    result = UserService.login(
        password=data['password'],
        username=data.get('username'),
        email=data.get('email')
    )
    set_auth_cookies(result.access_token, result.refresh_token)

    return ApiResponse(200, result, "User logged in successfully")


@user_blueprint.route('/logout', methods=['POST'])
@login_required
@user_blueprint.response(200, MessageResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def logout():
    UserService.logout(g.user_id, g.access_token)
    clear_auth_cookies()

    return ApiResponse(200, {}, "User logged out")


@user_blueprint.route('/refresh-token', methods=['POST'])
@user_blueprint.arguments(RefreshTokenRequestSchema, required=False)
@user_blueprint.response(200, api_response_schema(TokenPairSchema))
def refresh_token(data):
    cookie_name = current_app.config.get('REFRESH_TOKEN_COOKIE', 'refreshToken')
    incoming = (data or {}).get('refresh_token') or request.cookies.get(cookie_name)

    tokens = UserService.refresh_tokens(incoming)
    set_auth_cookies(tokens.access_token, tokens.refresh_token)

    return ApiResponse(200, tokens, "Access token refreshed")


@user_blueprint.route('/change-password', methods=['POST'])
@login_required
@user_blueprint.arguments(ChangePasswordRequestSchema)
@user_blueprint.response(200, MessageResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def change_password(data):
    UserService.change_password(g.user_id, data['old_password'], data['new_password'])

    return ApiResponse(200, {}, "Password changed successfully")


@user_blueprint.route('/current-user', methods=['GET'])
@login_required
@user_blueprint.response(200, api_response_schema(UserSchema))
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_current_user():
    return ApiResponse(200, UserService.get_current_user(g.user_id), "User fetched successfully")


@user_blueprint.route('/update-account', methods=['PATCH'])
@login_required
@user_blueprint.arguments(UpdateAccountRequestSchema)
@user_blueprint.response(200, api_response_schema(UserSchema))
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_account(data):
    user = UserService.update_account(g.user_id, data['fullname'], data['email'])

    return ApiResponse(200, user, "Account details updated successfully")


@user_blueprint.route('/avatar', methods=['PATCH'])
@login_required
@user_blueprint.arguments(AvatarFilesSchema, location='files')
@user_blueprint.response(200, api_response_schema(UserSchema))
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_avatar(files):
    user = UserService.update_avatar(g.user_id, files.get('avatar'))

    return ApiResponse(200, user, "Avatar updated successfully")


@user_blueprint.route('/cover-image', methods=['PATCH'])
@login_required
@user_blueprint.arguments(CoverImageFilesSchema, location='files')
@user_blueprint.response(200, api_response_schema(UserSchema))
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_cover_image(files):
    user = UserService.update_cover_image(g.user_id, files.get('cover_image'))

    return ApiResponse(200, user, "Cover image updated successfully")


@user_blueprint.route('/c/<username>', methods=['GET'])
@login_required
@user_blueprint.response(200, api_response_schema(ChannelProfileSchema))
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_profile(username):
    channel = UserService.get_channel_profile(username, g.user_id)

    return ApiResponse(200, channel, "User channel fetched successfully")


@user_blueprint.route('/history', methods=['GET'])
@login_required
@user_blueprint.response(200, api_response_schema(WatchHistoryListSchema))
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_watch_history():
    return ApiResponse(200, UserService.get_watch_history(g.user_id), "Watch history fetched successfully")


@user_blueprint.route('/history', methods=['DELETE'])
@login_required
@user_blueprint.response(200, MessageResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def clear_watch_history():
    deleted = UserService.clear_watch_history(g.user_id)

    return ApiResponse(200, {'deleted_count': deleted}, "Watch history cleared")
