"""
Utils package

- jwt_utils: token issuing and verification
- tag_rec_alg: tag-overlap recommendation scoring
- tag_utils: tag normalization and hashtag extraction
- media_host: remote media storage client
- upload_utils: temporary storage of multipart uploads
- cookie_utils: auth cookie helpers
- validators: path parameter checks
"""

from common.utils.jwt_utils import (
    decode_token,
    create_access_token,
    create_refresh_token
)

__all__ = [
    'decode_token',
    'create_access_token',
    'create_refresh_token'
]
