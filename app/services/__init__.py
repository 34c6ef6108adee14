"""
Services package
Business logic, one service class per resource

- user_service: accounts, tokens, channel profile, watch history
- video_service: upload, playback, watch progress
- comment_service / like_service / tweet_service
- subscription_service / playlist_service
- dashboard_service: channel statistics
- recommendation_service: tag based feed, onboarding tags, trending
"""

__all__ = []
