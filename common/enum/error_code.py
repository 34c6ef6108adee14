from enum import Enum

class APIError(Enum):
    # 1. Common
    INTERNAL_SERVER_ERROR = ("C001", "Something went wrong", 500)
    INVALID_INPUT_VALUE  = ("C002", "Invalid input value", 400)
    DB_ERROR = ("C003", "Database operation failed", 500)
    INVALID_ID = ("C004", "Invalid id", 400)
    DUPLICATE_RESOURCE = ("C005", "Resource already exists", 409)
    NOT_FOUND = ("C006", "Resource not found", 404)

    # 2. Auth
    AUTH_TOKEN_EXPIRED   = ("A001", "Token has expired", 401)
    AUTH_INVALID_TOKEN   = ("A002", "Invalid access token", 401)
    AUTH_UNAUTHORIZED    = ("A003", "Unauthorized request", 401)
    AUTH_INVALID_PASSWORD = ("A004", "Password incorrect", 401)
    AUTH_DUPLICATE_USER = ("A005", "User with email or username already exists", 409)
    AUTH_REFRESH_TOKEN_REUSED = ("A006", "Refresh token is expired or used", 401)
    AUTH_INVALID_OLD_PASSWORD = ("A007", "Invalid old password", 400)
    AUTH_DUPLICATE_EMAIL = ("A008", "Email is already in use", 409)

    # 3. User / Channel
    USER_NOT_FOUND       = ("U001", "User doesn't exist", 404)
    CHANNEL_NOT_FOUND    = ("U002", "Channel does not exist", 404)
    AVATAR_REQUIRED      = ("U003", "Avatar file is required", 400)
    COVER_IMAGE_REQUIRED = ("U004", "Cover image file is missing", 400)

    # 4. Video
    VIDEO_NOT_FOUND      = ("V001", "Video not found", 404)
    VIDEO_FORBIDDEN      = ("V002", "You are not authorized to modify this video", 403)
    VIDEO_FILE_REQUIRED  = ("V003", "Video file is required", 400)
    THUMBNAIL_REQUIRED   = ("V004", "Thumbnail is required", 400)

    # 5. Comment
    COMMENT_NOT_FOUND    = ("M001", "Comment not found", 404)
    COMMENT_FORBIDDEN    = ("M002", "You are not authorized to modify this comment", 403)

    # 6. Tweet
    TWEET_NOT_FOUND      = ("T001", "Tweet not found", 404)
    TWEET_FORBIDDEN      = ("T002", "You are not authorized to modify this tweet", 403)

    # 7. Subscription
    SELF_SUBSCRIPTION    = ("S001", "You cannot subscribe to your own channel", 400)

    # 8. Playlist
    PLAYLIST_NOT_FOUND   = ("P001", "Playlist not found", 404)
    PLAYLIST_FORBIDDEN   = ("P002", "You are not authorized to modify this playlist", 403)
    PLAYLIST_VIDEO_DUPLICATE = ("P003", "Video is already in the playlist", 400)
    PLAYLIST_VIDEO_MISSING = ("P004", "Video is not in the playlist", 400)

    # 9. Media host
    MEDIA_UPLOAD_FAIL    = ("F001", "Error while uploading file", 500)

    # 10. Recommendation
    INVALID_PREFERENCE_TAGS = ("R001", "Please select at least one valid tag", 400)

    def __init__(self, code, message, status):
        self.code = code
        self.message = message
        self.status = status
