"""Predicates deciding whether a document change should be announced.

Every predicate is a pure function of the snapshots it receives. Missing
documents or fields never raise; they simply do not match.
"""

from typing import Any, Optional

from src.notifications.models import ChangeEvent, ChangeType, DocumentSnapshot, ModerationStatus


def _field(snapshot: Optional[DocumentSnapshot], name: str) -> Any:
    if snapshot is None:
        return None
    return snapshot.get(name)


def _updates(snapshot: Optional[DocumentSnapshot]) -> list:
    return list(_field(snapshot, "updates") or [])


def is_accepted(snapshot: Optional[DocumentSnapshot]) -> bool:
    """Check whether a moderated document is in the accepted state."""
    return _field(snapshot, "moderation") == ModerationStatus.ACCEPTED.value


def became_accepted(
    before: Optional[DocumentSnapshot],
    after: Optional[DocumentSnapshot],
) -> bool:
    """Check whether a document transitioned into the accepted state."""
    return is_accepted(after) and not is_accepted(before)


def should_notify_pin_published(
    before: Optional[DocumentSnapshot],
    after: Optional[DocumentSnapshot],
) -> bool:
    """Map pin was accepted by a moderator."""
    return became_accepted(before, after)


def should_notify_howto_published(
    before: Optional[DocumentSnapshot],
    after: Optional[DocumentSnapshot],
) -> bool:
    """How-to guide was accepted by a moderator."""
    return became_accepted(before, after)


def should_notify_research_update_published(
    before: Optional[DocumentSnapshot],
    after: Optional[DocumentSnapshot],
) -> bool:
    """Research article received at least one new update."""
    if after is None:
        return False
    return len(_updates(after)) > len(_updates(before))


def should_notify_question_published(event: ChangeEvent) -> bool:
    """Questions are published without review, so every creation counts."""
    return event.change_type == ChangeType.CREATE and event.after is not None


def latest_update_index(article: DocumentSnapshot) -> int:
    """Index of the most recent update, assuming updates are only appended."""
    return len(_updates(article)) - 1
