import uuid
import jwt
import datetime
from flask import current_app
from jwt.exceptions import ExpiredSignatureError, DecodeError, InvalidTokenError

from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError

def get_jwt_config():
    try:
        secret_key = current_app.config.get('JWT_SECRET_KEY')
        algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')

        if not secret_key:
            raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "JWT secret key is not configured")

        return secret_key, algorithm
    except RuntimeError:
        raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "Application Context Error")

def encode_token(user_id, expires_delta, token_type, claims=None):
    secret_key, algorithm = get_jwt_config()

    current_time = datetime.datetime.now(datetime.timezone.utc)

    payload = {
        "sub": user_id,
        "iat": current_time,
        "exp": current_time + expires_delta,
        "type": token_type,
        #NOTE: two tokens issued in the same second must still differ
        "jti": uuid.uuid4().hex,
    }
    if claims:
        payload.update(claims)

    encoded_token = jwt.encode(payload, secret_key, algorithm=algorithm)
    return encoded_token

def decode_token(encoded_token):
    secret_key, algorithm = get_jwt_config()

    try:
        payload = jwt.decode(encoded_token, secret_key, algorithms=[algorithm])
        return payload

    except ExpiredSignatureError:
        raise BusinessError(APIError.AUTH_TOKEN_EXPIRED)

    except (DecodeError, InvalidTokenError):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

def create_access_token(user):
    expires = current_app.config.get('JWT_ACCESS_TOKEN_EXPIRES', datetime.timedelta(days=1))
    claims = {
        "email": user.email,
        "username": user.username,
        "fullname": user.fullname,
    }
    return encode_token(user.user_id, expires, 'access', claims)

def create_refresh_token(user):
    expires = current_app.config.get('JWT_REFRESH_TOKEN_EXPIRES', datetime.timedelta(days=10))
    return encode_token(user.user_id, expires, 'refresh')
