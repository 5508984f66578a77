"""Tests for publication predicates."""

import pytest

from src.notifications.models import ChangeEvent, ChangeType, ModerationStatus
from src.notifications.predicates import (
    latest_update_index,
    should_notify_howto_published,
    should_notify_pin_published,
    should_notify_question_published,
    should_notify_research_update_published,
)

ACCEPTED = ModerationStatus.ACCEPTED.value
STATES = [status.value for status in ModerationStatus] + [None]


@pytest.mark.parametrize(
    "predicate",
    [should_notify_pin_published, should_notify_howto_published],
)
@pytest.mark.parametrize("before_state", STATES)
@pytest.mark.parametrize("after_state", STATES)
def test_moderation_transition_law(predicate, before_state, after_state) -> None:
    """Test notification fires only on a transition into accepted."""
    before = {"moderation": before_state}
    after = {"moderation": after_state}

    expected = after_state == ACCEPTED and before_state != ACCEPTED
    assert predicate(before, after) is expected


@pytest.mark.parametrize(
    "predicate",
    [should_notify_pin_published, should_notify_howto_published],
)
def test_missing_before_counts_as_not_accepted(predicate) -> None:
    """Test absent previous snapshot behaves like an unaccepted one."""
    assert predicate(None, {"moderation": ACCEPTED}) is True
    assert predicate({}, {"moderation": ACCEPTED}) is True


@pytest.mark.parametrize(
    "predicate",
    [
        should_notify_pin_published,
        should_notify_howto_published,
        should_notify_research_update_published,
    ],
)
def test_deleted_document_never_notifies(predicate) -> None:
    """Test a missing after snapshot never triggers a notification."""
    assert predicate({"moderation": "draft", "updates": []}, None) is False


def test_missing_moderation_field_does_not_raise() -> None:
    """Test documents without moderation simply do not match."""
    assert should_notify_pin_published({"_id": "a"}, {"_id": "a"}) is False


@pytest.mark.parametrize(
    "before_count, after_count, expected",
    [
        (0, 0, False),
        (1, 1, False),
        (2, 1, False),
        (1, 2, True),
        (0, 3, True),
    ],
)
def test_research_update_count(before_count, after_count, expected) -> None:
    """Test research predicate compares update counts."""
    before = {"updates": [{"_id": str(i)} for i in range(before_count)]}
    after = {"updates": [{"_id": str(i)} for i in range(after_count)]}

    assert should_notify_research_update_published(before, after) is expected


def test_research_update_missing_lists() -> None:
    """Test absent or null update lists count as empty."""
    assert should_notify_research_update_published({}, {"updates": None}) is False
    assert should_notify_research_update_published(None, {"updates": [{"_id": "a"}]}) is True


def test_question_creation_always_notifies() -> None:
    """Test every question creation is announced."""
    event = ChangeEvent(
        collection="questions_rev20230926",
        change_type=ChangeType.CREATE,
        after={"title": "Anything"},
    )
    assert should_notify_question_published(event) is True


@pytest.mark.parametrize("change_type", [ChangeType.UPDATE, ChangeType.DELETE])
def test_question_other_changes_ignored(change_type) -> None:
    """Test updates and deletions of questions are not announced."""
    event = ChangeEvent(
        collection="questions_rev20230926",
        change_type=change_type,
        before={"title": "Anything"},
        after={"title": "Anything"} if change_type == ChangeType.UPDATE else None,
    )
    assert should_notify_question_published(event) is False


def test_latest_update_index() -> None:
    """Test the newest update is the last element."""
    assert latest_update_index({"updates": [{}, {}, {}]}) == 2
    assert latest_update_index({"updates": []}) == -1
