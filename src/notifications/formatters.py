"""Message templates for the chat webhook."""

from src.notifications.models import Howto, MapPin, Question, ResearchArticle, ResearchUpdate

UNKNOWN_AUTHOR = "unknown"


def research_update_author(update: ResearchUpdate) -> str:
    """First collaborator of an update, or a placeholder when none is listed."""
    collaborators = update.collaborators or []
    if collaborators and isinstance(collaborators[0], str) and collaborators[0]:
        return collaborators[0]
    return UNKNOWN_AUTHOR


def format_pin_published(pin: MapPin, site_url: str) -> str:
    return (
        f"📍 *New {pin.type}* pin from {pin.id}. \n"
        f" Location here <{site_url}/map/#{pin.id}>"
    )


def format_howto_published(howto: Howto, site_url: str) -> str:
    return (
        f"📓 Yeah! New How To **{howto.title}** by *{howto.created_by}*\n"
        f"            check it out: <{site_url}/how-to/{howto.slug}>"
    )


def format_research_update_published(
    article: ResearchArticle,
    update: ResearchUpdate,
    site_url: str,
) -> str:
    """Announce a research update.

    Individual sections cannot be deep-linked, so the link points at the
    article with an anchor for the update.
    """
    author = research_update_author(update)
    return (
        f"📝 New update from {author} in their research: {update.title}\n"
        f"Learn about it here: <{site_url}/research/{article.slug}#update_{update.id}>"
    )


def format_question_published(question: Question, site_url: str) -> str:
    return (
        f"❓ {question.created_by} has a new question: {question.title}\n"
        f"Help them out and answer here: <{site_url}/questions/{question.slug}>"
    )
