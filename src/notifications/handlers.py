"""Notification handlers, one per watched content category.

Handlers receive the message sender as a parameter so that the decision and
formatting logic can run without a live webhook.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

from pydantic import ValidationError

from src.core.exceptions import DocumentValidationException
from src.core.logging import get_logger
from src.notifications.formatters import (
    format_howto_published,
    format_pin_published,
    format_question_published,
    format_research_update_published,
)
from src.notifications.models import (
    ChangeEvent,
    DocumentModel,
    DocumentSnapshot,
    Howto,
    MapPin,
    NotifierConfig,
    Question,
    ResearchArticle,
    ResearchUpdate,
)
from src.notifications.predicates import (
    latest_update_index,
    should_notify_howto_published,
    should_notify_pin_published,
    should_notify_question_published,
    should_notify_research_update_published,
)

logger = get_logger(__name__)

SendMessage = Callable[[str], Awaitable[Any]]

ModelT = TypeVar("ModelT", bound=DocumentModel)


def load_document(
    model: type[ModelT],
    snapshot: DocumentSnapshot,
    document_id: Optional[str] = None,
) -> ModelT:
    """Validate a raw snapshot against its typed view.

    Raises:
        DocumentValidationException: Required fields are missing or invalid
    """
    try:
        return model.model_validate(snapshot)
    except ValidationError as e:
        raise DocumentValidationException(
            model.__name__,
            document_id,
            errors=e.errors(include_url=False),
        ) from e


async def deliver(send_message: SendMessage, content: str, category: str) -> Any:
    """Send a message, logging the outcome and re-raising failures.

    Transport details are logged by the sender; this records which
    notification was lost.
    """
    try:
        response = await send_message(content)
    except Exception as e:
        logger.error("notification_delivery_failed", category=category, error_type=type(e).__name__)
        raise

    logger.info("notification_delivered", category=category)
    return response


async def handle_pin_published(
    config: NotifierConfig,
    before: Optional[DocumentSnapshot],
    after: Optional[DocumentSnapshot],
    send_message: SendMessage,
    document_id: Optional[str] = None,
) -> None:
    """Announce a map pin that has just been accepted."""
    if not should_notify_pin_published(before, after):
        logger.info("pin_not_newly_accepted")
        return

    pin = load_document(MapPin, after, document_id)  # type: ignore[arg-type]
    await deliver(send_message, format_pin_published(pin, config.site_url), category="pin")


async def handle_howto_published(
    config: NotifierConfig,
    before: Optional[DocumentSnapshot],
    after: Optional[DocumentSnapshot],
    send_message: SendMessage,
    document_id: Optional[str] = None,
) -> None:
    """Announce a how-to guide that has just been accepted."""
    if not should_notify_howto_published(before, after):
        logger.info("howto_not_newly_accepted")
        return

    howto = load_document(Howto, after, document_id)  # type: ignore[arg-type]
    await deliver(send_message, format_howto_published(howto, config.site_url), category="howto")


async def handle_research_update_published(
    webhook_url: Optional[str],
    site_url: str,
    previous_content: Optional[DocumentSnapshot],
    updated_content: Optional[DocumentSnapshot],
    send_message: SendMessage,
    document_id: Optional[str] = None,
) -> None:
    """Announce the newest update appended to a research article.

    Only the article slug and the newest update are validated; earlier
    updates are never read.

    Args:
        webhook_url: Configured webhook; empty or None disables the handler
        site_url: Public site base URL used for the article link
        previous_content: Article before the change
        updated_content: Article after the change
        send_message: Coroutine function delivering the rendered message
        document_id: Article identifier, reported on validation errors

    Raises:
        DocumentValidationException: Slug or newest update is malformed
        Exception: Whatever ``send_message`` raised, after it is logged
    """
    if not webhook_url:
        logger.info("webhook_not_configured")
        return

    if not should_notify_research_update_published(previous_content, updated_content):
        logger.info("no_new_research_update")
        return

    article = load_document(ResearchArticle, updated_content, document_id)  # type: ignore[arg-type]
    new_update_index = latest_update_index(updated_content)  # type: ignore[arg-type]
    new_update = load_document(ResearchUpdate, article.updates[new_update_index], document_id)

    await deliver(
        send_message,
        format_research_update_published(article, new_update, site_url),
        category="research_update",
    )


async def handle_question_published(
    config: NotifierConfig,
    event: ChangeEvent,
    send_message: SendMessage,
) -> None:
    """Announce a newly created question."""
    if not should_notify_question_published(event):
        logger.info("question_not_created")
        return

    question = load_document(Question, event.after, event.document_id)  # type: ignore[arg-type]
    await deliver(send_message, format_question_published(question, config.site_url), category="question")
