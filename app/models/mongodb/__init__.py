"""
MongoDB Collections Models
"""

from .watch_history import WatchHistory, WatchHistoryRepository

__all__ = [
    'WatchHistory',
    'WatchHistoryRepository'
]
