"""Routing of document change events to notification handlers."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

import structlog

from src.core.logging import get_logger
from src.notifications.handlers import (
    SendMessage,
    handle_howto_published,
    handle_pin_published,
    handle_question_published,
    handle_research_update_published,
)
from src.notifications.models import ChangeEvent, ChangeType, NotifierConfig

if TYPE_CHECKING:
    from src.core.config import Settings
    from src.feeds.base import ChangeFeed

logger = get_logger(__name__)

EventHandler = Callable[[ChangeEvent], Awaitable[None]]


@dataclass(frozen=True)
class Subscription:
    """Binding of a collection and change type to a handler."""

    collection: str
    change_type: ChangeType
    handler: EventHandler


class NotificationDispatcher:
    """Subscribes notification handlers to the watched collections."""

    def __init__(
        self,
        config: NotifierConfig,
        send_message: SendMessage,
        pins_collection: str = "v3_mappins",
        howtos_collection: str = "v3_howtos",
        research_collection: str = "research_rev20201020",
        questions_collection: str = "questions_rev20230926",
    ) -> None:
        """Initialize dispatcher.

        Args:
            config: Handler configuration (webhook and site URLs)
            send_message: Coroutine function delivering a rendered message
            pins_collection: Map pins collection name
            howtos_collection: How-to guides collection name
            research_collection: Research articles collection name
            questions_collection: Questions collection name
        """
        self.config = config
        self.send_message = send_message
        self._subscriptions = [
            Subscription(pins_collection, ChangeType.UPDATE, self.on_pin_updated),
            Subscription(howtos_collection, ChangeType.UPDATE, self.on_howto_updated),
            Subscription(research_collection, ChangeType.UPDATE, self.on_research_updated),
            Subscription(questions_collection, ChangeType.CREATE, self.on_question_created),
        ]

    @classmethod
    def from_settings(cls, settings: "Settings", send_message: SendMessage) -> "NotificationDispatcher":
        """Build a dispatcher from application settings."""
        return cls(
            settings.notifier_config(),
            send_message,
            pins_collection=settings.pins_collection,
            howtos_collection=settings.howtos_collection,
            research_collection=settings.research_collection,
            questions_collection=settings.questions_collection,
        )

    def subscriptions(self) -> list[Subscription]:
        """List the handler bindings."""
        return list(self._subscriptions)

    def register(self, feed: "ChangeFeed") -> None:
        """Subscribe every handler on a change feed.

        Args:
            feed: Change feed to subscribe on
        """
        for subscription in self._subscriptions:
            feed.subscribe(subscription.collection, subscription.change_type, self.handle)
            logger.info(
                "notification_handler_registered",
                collection=subscription.collection,
                change_type=subscription.change_type.value,
            )

    def find_handler(self, collection: str, change_type: ChangeType) -> Optional[EventHandler]:
        for subscription in self._subscriptions:
            if subscription.collection == collection and subscription.change_type == change_type:
                return subscription.handler
        return None

    async def handle(self, event: ChangeEvent) -> None:
        """Route a change event to the matching handler.

        The event's collection, change type and document id are bound to the
        log context for the duration of the handler. Events with no matching
        subscription are ignored.
        """
        with structlog.contextvars.bound_contextvars(**event.log_context()):
            handler = self.find_handler(event.collection, event.change_type)
            if handler is None:
                logger.debug("change_event_ignored")
                return

            await handler(event)

    async def on_pin_updated(self, event: ChangeEvent) -> None:
        await handle_pin_published(
            self.config,
            event.before,
            event.after,
            self.send_message,
            document_id=event.document_id,
        )

    async def on_howto_updated(self, event: ChangeEvent) -> None:
        await handle_howto_published(
            self.config,
            event.before,
            event.after,
            self.send_message,
            document_id=event.document_id,
        )

    async def on_research_updated(self, event: ChangeEvent) -> None:
        await handle_research_update_published(
            self.config.webhook_url,
            self.config.site_url,
            event.before,
            event.after,
            self.send_message,
            document_id=event.document_id,
        )

    async def on_question_created(self, event: ChangeEvent) -> None:
        await handle_question_published(self.config, event, self.send_message)
