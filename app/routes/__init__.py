"""
Routes package
Flask Blueprints, one per resource
"""

from app.routes.base import base_blueprint
from app.routes.user import user_blueprint
from app.routes.video import video_blueprint
from app.routes.comment import comment_blueprint
from app.routes.like import like_blueprint
from app.routes.subscription import subscription_blueprint
from app.routes.playlist import playlist_blueprint
from app.routes.tweet import tweet_blueprint
from app.routes.dashboard import dashboard_blueprint
from app.routes.recommendation import recommendation_blueprint

__all__ = [
    'base_blueprint',
    'user_blueprint',
    'video_blueprint',
    'comment_blueprint',
    'like_blueprint',
    'subscription_blueprint',
    'playlist_blueprint',
    'tweet_blueprint',
    'dashboard_blueprint',
    'recommendation_blueprint'
]
