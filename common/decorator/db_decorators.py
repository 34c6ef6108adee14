from functools import wraps

from common.extensions import db
from common.utils.logging_utils import get_logger

logger = get_logger('db_decorators')


def transactional(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)

            db.session.commit()

            return result

        except Exception as e:
            logger.debug(f"Rolling back {func.__qualname__}: {e}")
            db.session.rollback()
            raise

    return wrapper


def transactional_readonly(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)

        except Exception:
            db.session.rollback()
            raise

    return wrapper
