"""Process-wide change feed instance."""

from functools import lru_cache

from peakflow.application.services.change_feed import ChangeFeed
from peakflow.config import get_settings


@lru_cache
def get_change_feed() -> ChangeFeed:
    return ChangeFeed(max_queue_size=get_settings().change_feed_queue_size)
