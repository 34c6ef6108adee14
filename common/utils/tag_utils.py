import re
from typing import Iterable, List, Optional

from common.enum.content_tag import ContentTagEnum

HASHTAG_PATTERN = re.compile(r'#(\w+)')
MAX_TAG_LENGTH = 50


def normalize_tags(raw_tags) -> List[str]:
    """
    Accepts a list of strings or a single comma separated string and returns
    lowercase, trimmed, de-duplicated tags in first-seen order. A leading '#'
    is stripped.
    """
    if raw_tags is None:
        return []

    if isinstance(raw_tags, str):
        raw_tags = raw_tags.split(',')

    tags = []
    for raw in raw_tags:
        if not isinstance(raw, str):
            continue
        tag = raw.strip().lstrip('#').strip().lower()
        if not tag or len(tag) > MAX_TAG_LENGTH:
            continue
        if tag not in tags:
            tags.append(tag)
    return tags


def extract_hashtags(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return normalize_tags(HASHTAG_PATTERN.findall(text))


def filter_catalog_tags(selected: Iterable[str]) -> List[str]:
    return [tag for tag in normalize_tags(list(selected or [])) if ContentTagEnum.is_valid(tag)]
