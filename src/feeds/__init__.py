"""Document change feeds."""

from src.feeds.base import ChangeFeed, InMemoryChangeFeed
from src.feeds.redis_feed import RedisChangeFeed

__all__ = ["ChangeFeed", "InMemoryChangeFeed", "RedisChangeFeed"]
