"""Change feed interface and in-process implementation."""

from collections import defaultdict
from typing import Awaitable, Callable, Protocol

from src.core.logging import get_logger
from src.notifications.models import ChangeEvent, ChangeType

logger = get_logger(__name__)

ChangeCallback = Callable[[ChangeEvent], Awaitable[None]]


class ChangeFeed(Protocol):
    """Source of document change events."""

    def subscribe(self, collection: str, change_type: ChangeType, callback: ChangeCallback) -> None:
        """Invoke ``callback`` for every matching change."""
        ...


class InMemoryChangeFeed:
    """Change feed driven by explicit :meth:`publish` calls."""

    def __init__(self) -> None:
        self._callbacks: dict[tuple[str, ChangeType], list[ChangeCallback]] = defaultdict(list)

    def subscribe(self, collection: str, change_type: ChangeType, callback: ChangeCallback) -> None:
        self._callbacks[(collection, change_type)].append(callback)

    def collections(self) -> set[str]:
        """Collections with at least one subscriber."""
        return {collection for collection, _ in self._callbacks}

    async def publish(self, event: ChangeEvent) -> int:
        """Deliver an event to its subscribers in registration order.

        Args:
            event: Change event

        Returns:
            Number of callbacks invoked
        """
        callbacks = self._callbacks.get((event.collection, event.change_type), [])
        logger.debug(
            "publishing_change_event",
            collection=event.collection,
            change_type=event.change_type.value,
            subscribers=len(callbacks),
        )
        for callback in callbacks:
            await callback(event)
        return len(callbacks)
