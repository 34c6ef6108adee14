import os
from datetime import timedelta


def _split_csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY')

    DB_USERNAME = os.getenv('DB_USERNAME')
    DB_PASSWORD = os.getenv('DB_PASSWORD')
    DB_HOST = os.getenv('DB_HOST', 'localhost')
    DB_PORT = int(os.getenv('DB_PORT', 3306))
    DB_NAME = os.getenv('DB_NAME')
    DB_AUTO_CREATE = os.getenv('DB_AUTO_CREATE', 'true').lower() == 'true'

    SQLALCHEMY_DATABASE_URI = None
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    MONGO_USERNAME = os.getenv('MONGO_USERNAME')
    MONGO_PASSWORD = os.getenv('MONGO_PASSWORD')
    MONGO_HOST = os.getenv('MONGO_HOST', 'localhost')
    MONGO_PORT = int(os.getenv('MONGO_PORT', 27017))
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'yourtube')

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=10)

    ACCESS_TOKEN_COOKIE = 'accessToken'
    REFRESH_TOKEN_COOKIE = 'refreshToken'
    COOKIE_SECURE = False
    COOKIE_SAMESITE = 'Lax'

    REDIS_ENABLED = True
    REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
    REDIS_PORT = int(os.getenv('REDIS_PORT', 6379))
    REDIS_DB = int(os.getenv('REDIS_DB', 0))
    REDIS_PASSWORD = os.getenv('REDIS_PASSWORD')
    REDIS_URL = os.getenv('REDIS_URL')

    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET')
    CLOUDINARY_FOLDER = os.getenv('CLOUDINARY_FOLDER', 'yourtube')
    MEDIA_HOST_TIMEOUT = int(os.getenv('MEDIA_HOST_TIMEOUT', 120))

    CORS_ORIGINS = _split_csv(os.getenv(
        'CORS_ORIGINS',
        'http://localhost:5173,https://yourtube-frontend.vercel.app'
    ))

    MAX_CONTENT_LENGTH = 512 * 1024 * 1024
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'public', 'temp'))

    RECOMMENDATION_HISTORY_LIMIT = int(os.getenv('RECOMMENDATION_HISTORY_LIMIT', 100))
    TRENDING_WINDOW_HOURS = int(os.getenv('TRENDING_WINDOW_HOURS', 48))

    SENTRY_DSN = os.getenv('SENTRY_DSN')
    SENTRY_ENVIRONMENT = os.getenv('SENTRY_ENVIRONMENT', 'development')
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', 1.0))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_TO_FILE = True


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_ECHO = True
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    DEBUG = False
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = 'WARNING'

    #NOTE: frontend is served from another origin, cookies must be cross-site
    COOKIE_SECURE = True
    COOKIE_SAMESITE = 'None'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    MONGO_DB_NAME = 'yourtube_test'
    JWT_SECRET_KEY = 'yourtube-test-secret'
    REDIS_ENABLED = False
    SENTRY_DSN = None
    LOG_TO_FILE = False
    LOG_LEVEL = 'WARNING'
    CLOUDINARY_CLOUD_NAME = 'test-cloud'
    CLOUDINARY_API_KEY = 'test-key'
    CLOUDINARY_API_SECRET = 'test-secret'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
