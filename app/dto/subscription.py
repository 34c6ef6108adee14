from dataclasses import dataclass
from datetime import datetime
from typing import List

from app.dto.common import OwnerDto


@dataclass
class SubscriptionToggleDto:
    is_subscribed: bool
    subscribers_count: int


@dataclass
class SubscriptionStatusDto:
    is_subscribed: bool


@dataclass
class SubscriberDto:
    subscriber: OwnerDto
    subscribed_at: datetime
    subscribers_count: int
    is_subscribed_back: bool


@dataclass
class SubscriberListDto:
    subscribers: List[SubscriberDto]
    total: int


@dataclass
class SubscribedChannelDto:
    channel: OwnerDto
    subscribed_at: datetime
    subscribers_count: int


@dataclass
class SubscribedChannelListDto:
    channels: List[SubscribedChannelDto]
    total: int
