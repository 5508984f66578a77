"""Change feed backed by Redis pub/sub.

Each watched collection maps to a channel ``{prefix}:{collection}``. Messages
are JSON envelopes::

    {"change_type": "update", "document_id": "...", "before": {...}, "after": {...}}
"""

import json
from collections import defaultdict
from typing import Any, Optional

import redis.asyncio as redis
import structlog

from src.core.exceptions import ChangeFeedException
from src.core.logging import get_logger
from src.feeds.base import ChangeCallback
from src.notifications.models import ChangeEvent, ChangeType

logger = get_logger(__name__)


def decode_change_event(collection: str, data: str | bytes) -> ChangeEvent:
    """Decode a pub/sub payload into a change event.

    Args:
        collection: Collection the channel belongs to
        data: JSON envelope

    Returns:
        Decoded change event

    Raises:
        ChangeFeedException: Payload is not a valid envelope
    """
    try:
        envelope = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ChangeFeedException("Invalid JSON in change message", {"collection": collection}) from e

    if not isinstance(envelope, dict):
        raise ChangeFeedException("Change message must be a JSON object", {"collection": collection})

    try:
        change_type = ChangeType(envelope.get("change_type"))
    except ValueError as e:
        raise ChangeFeedException(
            "Unknown change type",
            {"collection": collection, "change_type": envelope.get("change_type")},
        ) from e

    before = envelope.get("before")
    after = envelope.get("after")
    for name, snapshot in (("before", before), ("after", after)):
        if snapshot is not None and not isinstance(snapshot, dict):
            raise ChangeFeedException(
                f"Snapshot '{name}' must be an object or null",
                {"collection": collection},
            )

    return ChangeEvent(
        collection=collection,
        change_type=change_type,
        document_id=envelope.get("document_id"),
        before=before,
        after=after,
    )


class RedisChangeFeed:
    """Dispatches change events received over Redis pub/sub."""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        channel_prefix: str = "changes",
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize Redis change feed.

        Args:
            redis_url: Redis connection URL (ignored when ``client`` is given)
            channel_prefix: Prefix of per-collection channels
            client: Pre-configured Redis client (optional)
        """
        if client is None and not redis_url:
            raise ChangeFeedException("Either redis_url or client is required")
        self.redis_url = redis_url
        self.channel_prefix = channel_prefix
        self._client = client
        self._callbacks: dict[str, dict[ChangeType, list[ChangeCallback]]] = defaultdict(
            lambda: defaultdict(list)
        )

    def channel_for(self, collection: str) -> str:
        return f"{self.channel_prefix}:{collection}"

    def collection_for(self, channel: str) -> str:
        return channel[len(self.channel_prefix) + 1 :]

    def subscribe(self, collection: str, change_type: ChangeType, callback: ChangeCallback) -> None:
        self._callbacks[collection][change_type].append(callback)

    async def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self.redis_url,  # type: ignore[arg-type]
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def dispatch(self, event: ChangeEvent) -> None:
        """Run every callback subscribed to the event.

        A failing callback is recorded once, with its traceback, and does not
        stop the others.
        """
        callbacks = self._callbacks.get(event.collection, {}).get(event.change_type, [])
        with structlog.contextvars.bound_contextvars(**event.log_context()):
            for callback in callbacks:
                try:
                    await callback(event)
                except Exception:
                    logger.error("change_event_failed", exc_info=True)

    async def handle_message(self, message: dict[str, Any]) -> None:
        """Decode and dispatch one pub/sub message."""
        if message.get("type") != "message":
            return

        channel = message["channel"]
        if isinstance(channel, bytes):
            channel = channel.decode("utf-8")
        collection = self.collection_for(channel)

        try:
            event = decode_change_event(collection, message["data"])
        except ChangeFeedException as e:
            logger.warning("change_message_rejected", channel=channel, error=e.message, **e.details)
            return

        await self.dispatch(event)

    async def listen(self) -> None:
        """Subscribe to all watched collections and process messages until cancelled."""
        channels = [self.channel_for(collection) for collection in self._callbacks]
        if not channels:
            raise ChangeFeedException("No collections subscribed")

        client = await self._get_client()
        pubsub = client.pubsub()
        await pubsub.subscribe(*channels)
        logger.info("change_feed_listening", channels=channels)

        try:
            async for message in pubsub.listen():
                await self.handle_message(message)
        finally:
            await pubsub.unsubscribe(*channels)
            await pubsub.aclose()
