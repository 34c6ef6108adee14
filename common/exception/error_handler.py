from flask import jsonify
from pymongo.errors import DuplicateKeyError, PyMongoError
from sqlalchemy.exc import IntegrityError, DataError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('error_handler')


def error_body(status, message, code, errors=None):
    return {
        "statusCode": status,
        "data": None,
        "message": message,
        "success": False,
        "errors": errors or [],
        "code": code
    }


def _validation_errors(messages):
    errors = []
    for location, field_messages in (messages or {}).items():
        if not isinstance(field_messages, dict):
            errors.append({"location": location, "field": None, "messages": field_messages})
            continue
        for field_name, msgs in field_messages.items():
            errors.append({"location": location, "field": field_name, "messages": msgs})
    return errors


def register_error_handlers(app):
    @app.errorhandler(BusinessError)
    def handle_business_error(e):
        return jsonify(error_body(
            e.status_code, e.message, e.error_enum.code, e.errors
        )), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        data = getattr(e, 'data', None) or {}
        messages = data.get('messages')

        #NOTE: webargs reports schema failures as 422, the API contract uses 400
        if messages is not None:
            return jsonify(error_body(
                400,
                APIError.INVALID_INPUT_VALUE.message,
                APIError.INVALID_INPUT_VALUE.code,
                _validation_errors(messages)
            )), 400

        return jsonify(error_body(
            e.code, e.description or e.name, f"H{e.code}"
        )), e.code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        logger.warning(f"Integrity error: {e.orig}")
        return jsonify(error_body(
            409,
            "Duplicate data or a broken reference",
            APIError.DUPLICATE_RESOURCE.code
        )), 409

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key_error(e):
        logger.warning(f"Duplicate key error: {e}")
        return jsonify(error_body(
            409,
            APIError.DUPLICATE_RESOURCE.message,
            APIError.DUPLICATE_RESOURCE.code
        )), 409

    @app.errorhandler(DataError)
    def handle_data_error(e):
        return jsonify(error_body(
            400,
            "Malformed data",
            APIError.INVALID_INPUT_VALUE.code
        )), 400

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        logger.error(f"Database error: {e}")
        return jsonify(error_body(
            500,
            APIError.DB_ERROR.message,
            APIError.DB_ERROR.code
        )), 500

    @app.errorhandler(PyMongoError)
    def handle_mongo_error(e):
        logger.error(f"MongoDB error: {e}")
        return jsonify(error_body(
            500,
            APIError.DB_ERROR.message,
            APIError.DB_ERROR.code
        )), 500

    @app.errorhandler(Exception)
    def handle_internal_error(e):
        logger.exception(f"Unhandled error: {e}")
        return jsonify(error_body(
            500,
            APIError.INTERNAL_SERVER_ERROR.message,
            APIError.INTERNAL_SERVER_ERROR.code
        )), 500
