"""
Tag-overlap recommendation scoring.

Pure functions over plain dicts so the ranking can be tested without Flask or a
database. A watch-history record looks like::

    {'tags': [...], 'watch_duration_seconds': 42.0, 'duration': 120.0, 'is_completed': False}

and a candidate video like::

    {'video_id': '...', 'tags': [...], 'view_count': 10, 'created_at': datetime}

Candidates are never mutated; ranked results are shallow copies carrying a
``recommendation_score`` key.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

COMPLETED_WEIGHT = 2.0
MIN_PARTIAL_WEIGHT = 0.5
MAX_PARTIAL_WEIGHT = 1.0
TRENDING_WINDOW = timedelta(hours=48)

FEED_POPULAR = 'popular'
FEED_CONTENT_BASED = 'content_based'
FEED_PREFERENCE_BASED = 'preference_based'
FEED_TRENDING_POPULAR = 'trending_popular'


def _views(video: Dict) -> int:
    return video.get('view_count') or 0


def _as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def calculate_watch_weight(record: Dict) -> float:
    if record.get('is_completed'):
        return COMPLETED_WEIGHT

    duration = record.get('duration') or 1
    watched = record.get('watch_duration_seconds') or 0
    ratio = min(watched / duration, MAX_PARTIAL_WEIGHT)
    return max(MIN_PARTIAL_WEIGHT, ratio)


def calculate_tag_affinity(watch_history: List[Dict]) -> Dict[str, float]:
    affinity: Dict[str, float] = {}
    for record in watch_history:
        tags = record.get('tags') or []
        if not tags:
            continue

        weight = calculate_watch_weight(record)
        for tag in tags:
            affinity[tag] = affinity.get(tag, 0.0) + weight

    return affinity


def calculate_video_score(video: Dict, affinity: Dict[str, float]) -> float:
    return sum(affinity.get(tag, 0.0) for tag in video.get('tags') or [])


def calculate_preference_score(video: Dict, preference_tags: List[str]) -> int:
    preferred = set(preference_tags)
    return sum(1 for tag in video.get('tags') or [] if tag in preferred)


def _with_score(video: Dict, score: float) -> Dict:
    scored = video.copy()
    scored['recommendation_score'] = score
    return scored


def _sort_by_score_then_views(videos: List[Dict]) -> List[Dict]:
    #NOTE: list.sort is stable, equal (score, views) pairs keep their input order
    return sorted(videos, key=lambda v: (-v['recommendation_score'], -_views(v)))


def rank_by_popularity(candidate_videos: List[Dict]) -> List[Dict]:
    return sorted(
        (_with_score(video, 0) for video in candidate_videos),
        key=lambda v: -_views(v)
    )


def rank_trending_then_popular(candidate_videos: List[Dict], now: datetime,
                               window: timedelta = TRENDING_WINDOW) -> List[Dict]:
    cutoff = _as_naive_utc(now) - window

    recent, older = [], []
    for video in candidate_videos:
        created_at = _as_naive_utc(video.get('created_at'))
        if created_at is not None and created_at >= cutoff:
            recent.append(_with_score(video, 0))
        else:
            older.append(_with_score(video, 0))

    recent.sort(key=lambda v: -_views(v))
    older.sort(key=lambda v: -_views(v))
    return recent + older


def rank_videos_with_policy(watch_history: List[Dict], candidate_videos: List[Dict],
                            preference_tags: Optional[List[str]], now: datetime,
                            window: timedelta = TRENDING_WINDOW) -> Tuple[List[Dict], str, Dict[str, float]]:
    if watch_history:
        affinity = calculate_tag_affinity(watch_history)
        scored = [_with_score(v, calculate_video_score(v, affinity)) for v in candidate_videos]
        return _sort_by_score_then_views(scored), FEED_CONTENT_BASED, affinity

    if preference_tags:
        scored = [_with_score(v, calculate_preference_score(v, preference_tags)) for v in candidate_videos]
        return _sort_by_score_then_views(scored), FEED_PREFERENCE_BASED, {}

    return rank_trending_then_popular(candidate_videos, now, window), FEED_TRENDING_POPULAR, {}


def rank_videos(watch_history: List[Dict], candidate_videos: List[Dict],
                preference_tags: Optional[List[str]] = None,
                now: Optional[datetime] = None) -> List[Dict]:
    if now is None:
        now = datetime.utcnow()

    ranked, _, _ = rank_videos_with_policy(watch_history, candidate_videos, preference_tags, now)
    return ranked


def get_top_tags(affinity: Dict[str, float], limit: int = 5) -> List[Dict]:
    top = sorted(affinity.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [{'tag': tag, 'score': score} for tag, score in top]


def paginate(items: List, page: int, limit: int) -> List:
    start_idx = (page - 1) * limit
    end_idx = page * limit
    return items[start_idx:end_idx]
