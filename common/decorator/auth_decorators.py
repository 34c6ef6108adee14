from functools import wraps
from flask import request, g, current_app

import common.extensions as extensions
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.jwt_utils import decode_token

BLACKLIST_KEY = "yourtube:blacklist:{token}"


def get_request_token():
    cookie_name = current_app.config.get('ACCESS_TOKEN_COOKIE', 'accessToken')
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get('Authorization')
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None

    return None


def is_token_blacklisted(token):
    redis_client = extensions.redis_client
    return bool(redis_client and redis_client.exists(BLACKLIST_KEY.format(token=token)))


def _authenticate(token):
    #NOTE: local import, app.models imports from common at module load
    from app.models.user import User

    if is_token_blacklisted(token):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    payload = decode_token(token)

    if payload.get('type') != 'access':
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    user = extensions.db.session.get(User, payload.get('sub'))
    if not user:
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    return user


def _set_guest():
    g.user_id = None
    g.user = None
    g.is_guest = True


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_request_token()
        if not token:
            raise BusinessError(APIError.AUTH_UNAUTHORIZED)

        user = _authenticate(token)

        g.user_id = user.user_id
        g.user = user
        g.access_token = token
        g.is_guest = False

        return f(*args, **kwargs)
    return decorated_function


def login_optional(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_request_token()
        if not token:
            _set_guest()
            return f(*args, **kwargs)

        try:
            user = _authenticate(token)
        except BusinessError:
            _set_guest()
            return f(*args, **kwargs)

        g.user_id = user.user_id
        g.user = user
        g.access_token = token
        g.is_guest = False

        return f(*args, **kwargs)
    return decorated_function
