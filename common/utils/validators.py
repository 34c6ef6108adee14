import uuid

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def is_valid_id(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


def ensure_valid_id(value, label='id'):
    if not is_valid_id(value):
        raise BusinessError(APIError.INVALID_ID, f"Invalid {label}")
    return value


def ensure_not_blank(**fields):
    blank = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if blank:
        raise BusinessError(
            APIError.INVALID_INPUT_VALUE,
            "All fields are required",
            [{"location": "body", "field": name, "messages": ["Must not be blank"]} for name in blank]
        )
