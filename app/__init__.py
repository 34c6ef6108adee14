"""
YourTube Application
Flask based video sharing REST backend
"""

from flask import Flask
from flask_cors import CORS
from pymongo import MongoClient
from sqlalchemy.engine import URL
import redis
import logging
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.redis import RedisIntegration
from common.extensions import db, api
import common.extensions as extensions
from common.utils.logging_utils import setup_logger


def _init_mongo(app, logger, mongo_client=None):
    if mongo_client is None:
        mongo_host = app.config.get('MONGO_HOST', 'localhost')
        mongo_port = app.config.get('MONGO_PORT', 27017)
        mongo_username = app.config.get('MONGO_USERNAME')
        mongo_password = app.config.get('MONGO_PASSWORD')

        if mongo_username and mongo_password:
            from urllib.parse import quote_plus
            mongo_uri = f"mongodb://{quote_plus(mongo_username)}:{quote_plus(mongo_password)}@{mongo_host}:{mongo_port}/"
        else:
            mongo_uri = f"mongodb://{mongo_host}:{mongo_port}/"

        logger.info(f"Connecting to MongoDB: {mongo_host}:{mongo_port}")

        try:
            mongo_client = MongoClient(
                mongo_uri,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000
            )
            mongo_client.admin.command('ping')
            logger.info(f"MongoDB connected: {mongo_host}:{mongo_port}")

        except Exception as e:
            logger.error(f"MongoDB connection failed: {e}")
            logger.error(f"MongoDB URI (masked): mongodb://{mongo_host}:{mongo_port}/")
            raise

    extensions.mongo_client = mongo_client
    extensions.mongo_db = mongo_client[app.config['MONGO_DB_NAME']]
    app.mongo = extensions.mongo_db


def _init_redis(app, logger):
    if not app.config.get('REDIS_ENABLED', True):
        extensions.redis_client = None
        return

    try:
        if app.config.get('REDIS_URL'):
            logger.info("Connecting to Redis via REDIS_URL")
            extensions.redis_client = redis.from_url(
                app.config['REDIS_URL'],
                decode_responses=True,
                socket_connect_timeout=5
            )
        else:
            redis_host = app.config.get('REDIS_HOST', 'localhost')
            redis_port = app.config.get('REDIS_PORT', 6379)
            redis_db = app.config.get('REDIS_DB', 0)
            redis_password = app.config.get('REDIS_PASSWORD')

            if redis_password == "":
                redis_password = None

            logger.info(f"Connecting to Redis: {redis_host}:{redis_port} (db={redis_db}, auth={'set' if redis_password else 'none'})")

            extensions.redis_client = redis.Redis(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                password=redis_password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )

        extensions.redis_client.ping()
        logger.info("Redis connected")

    except redis.AuthenticationError as e:
        logger.warning(f"Redis authentication failed: {e}")
        logger.warning("Check REDIS_PASSWORD, token blacklist is disabled")
        extensions.redis_client = None
    except redis.ConnectionError as e:
        logger.warning(f"Redis connection failed: {e}")
        logger.warning("Token blacklist is disabled")
        extensions.redis_client = None
    except Exception as e:
        logger.warning(f"Unexpected error while initializing Redis: {e}")
        logger.exception("Details:")
        extensions.redis_client = None


def create_app(config_name='default', mongo_client=None):
    """
    Application Factory Pattern
    """
    app = Flask(__name__)

    from common.config.config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)

    app.json.ensure_ascii = False

    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
                RedisIntegration(),
            ],
            environment=app.config.get('SENTRY_ENVIRONMENT', 'development'),
            traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 1.0),
            send_default_pii=False,
            attach_stacktrace=True,
        )

    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    logger = setup_logger(app, log_level, log_to_file=app.config.get('LOG_TO_FILE', True))

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        required = [
            'DB_USERNAME', 'DB_PASSWORD',
            'DB_HOST', 'DB_PORT', 'DB_NAME'
        ]
        missing = [k for k in required if not app.config.get(k)]
        if missing:
            raise RuntimeError(f"Missing database settings: {missing}")

        app.config['SQLALCHEMY_DATABASE_URI'] = URL.create(
            drivername='mysql+pymysql',
            username=app.config['DB_USERNAME'],
            password=app.config['DB_PASSWORD'],
            host=app.config['DB_HOST'],
            port=app.config['DB_PORT'],
            database=app.config['DB_NAME'],
            query={'charset': 'utf8mb4'},
        )

    if not app.config.get('JWT_SECRET_KEY'):
        raise RuntimeError("JWT_SECRET_KEY is not configured")

    app.config['API_TITLE'] = 'YourTube API'
    app.config['API_VERSION'] = 'v1'
    app.config['OPENAPI_VERSION'] = '3.0.3'
    app.config['OPENAPI_URL_PREFIX'] = '/'
    app.config['OPENAPI_SWAGGER_UI_PATH'] = '/swagger'
    app.config['OPENAPI_SWAGGER_UI_URL'] = 'https://cdn.jsdelivr.net/npm/swagger-ui-dist/'
    app.config['OPENAPI_REDOC_PATH'] = '/redoc'
    app.config['OPENAPI_REDOC_URL'] = 'https://cdn.jsdelivr.net/npm/redoc@latest/bundles/redoc.standalone.js'

    # Bearer scheme for the access token, the accessToken cookie is accepted too
    app.config['API_SPEC_OPTIONS'] = {
        'components': {
            'securitySchemes': {
                'BearerAuth': {
                    'type': 'http',
                    'scheme': 'bearer',
                    'bearerFormat': 'JWT',
                    'description': 'Access token (without the Bearer prefix)'
                }
            }
        }
    }

    db.init_app(app)
    CORS(app,
         supports_credentials=True,
         origins=app.config.get('CORS_ORIGINS', []),
         allow_headers=["Content-Type", "Authorization", "Accept", "X-Requested-With"],
         expose_headers=["Authorization", "Content-Type"],
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         max_age=3600)

    api.init_app(app)

    _init_mongo(app, logger, mongo_client)
    _init_redis(app, logger)

    from app.routes import (
        base_blueprint,
        user_blueprint,
        video_blueprint,
        comment_blueprint,
        like_blueprint,
        subscription_blueprint,
        playlist_blueprint,
        tweet_blueprint,
        dashboard_blueprint,
        recommendation_blueprint
    )

    api.register_blueprint(base_blueprint)
    api.register_blueprint(user_blueprint)
    api.register_blueprint(video_blueprint)
    api.register_blueprint(comment_blueprint)
    api.register_blueprint(like_blueprint)
    api.register_blueprint(subscription_blueprint)
    api.register_blueprint(playlist_blueprint)
    api.register_blueprint(tweet_blueprint)
    api.register_blueprint(dashboard_blueprint)
    api.register_blueprint(recommendation_blueprint)

    from common.exception.error_handler import register_error_handlers
    register_error_handlers(app)

    #NOTE: every model is imported through the blueprints above
    if app.config.get('DB_AUTO_CREATE') or app.config.get('TESTING'):
        with app.app_context():
            db.create_all()

    return app
