"""Tests for notification message templates."""

from src.notifications.formatters import (
    format_howto_published,
    format_pin_published,
    format_question_published,
    format_research_update_published,
    research_update_author,
)
from src.notifications.models import Howto, MapPin, Question, ResearchArticle, ResearchUpdate

SITE_URL = "https://community.preciousplastic.com"


def test_format_pin_published() -> None:
    """Test pin message links to the map."""
    pin = MapPin.model_validate({"_id": "workshop-42", "type": "workspace", "moderation": "accepted"})

    assert format_pin_published(pin, SITE_URL) == (
        "📍 *New workspace* pin from workshop-42. \n"
        " Location here <https://community.preciousplastic.com/map/#workshop-42>"
    )


def test_format_howto_published() -> None:
    """Test the how-to message, including the continuation indent."""
    howto = Howto.model_validate(
        {"_createdBy": "alice", "title": "Make a bench", "slug": "make-a-bench"}
    )

    assert format_howto_published(howto, SITE_URL) == (
        "📓 Yeah! New How To **Make a bench** by *alice*\n"
        "            check it out: <https://community.preciousplastic.com/how-to/make-a-bench>"
    )


def test_format_research_update_published() -> None:
    """Test research message anchors the update in the article link."""
    article = ResearchArticle.model_validate(
        {
            "slug": "my-project",
            "updates": [{"_id": "abc", "title": "Progress", "collaborators": ["Alice"]}],
        }
    )

    update = ResearchUpdate.model_validate(article.updates[0])

    assert format_research_update_published(article, update, SITE_URL) == (
        "📝 New update from Alice in their research: Progress\n"
        "Learn about it here: <https://community.preciousplastic.com/research/my-project#update_abc>"
    )


def test_research_update_author_fallback() -> None:
    """Test author placeholder for missing collaborators."""
    assert research_update_author(ResearchUpdate(_id="a", title="t")) == "unknown"
    assert research_update_author(ResearchUpdate(_id="a", title="t", collaborators=[])) == "unknown"
    assert research_update_author(ResearchUpdate(_id="a", title="t", collaborators=[""])) == "unknown"
    assert research_update_author(ResearchUpdate(_id="a", title="t", collaborators=["Bo", "Cy"])) == "Bo"


def test_research_update_author_non_string_entries() -> None:
    """Test null or structured first collaborators fall back to the placeholder."""
    assert research_update_author(ResearchUpdate(_id="a", title="t", collaborators=[None])) == "unknown"
    assert (
        research_update_author(ResearchUpdate(_id="a", title="t", collaborators=[{"userName": "x"}]))
        == "unknown"
    )


def test_format_question_published() -> None:
    """Test question message."""
    question = Question.model_validate(
        {"_createdBy": "bob", "title": "How do I mold PET?", "slug": "how-do-i-mold-pet"}
    )

    assert format_question_published(question, SITE_URL) == (
        "❓ bob has a new question: How do I mold PET?\n"
        "Help them out and answer here: <https://community.preciousplastic.com/questions/how-do-i-mold-pet>"
    )
