"""Models for document change events and notification content."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

DocumentSnapshot = Mapping[str, Any]


class ModerationStatus(str, Enum):
    """Moderation states of user-submitted content."""

    DRAFT = "draft"
    AWAITING_MODERATION = "awaiting-moderation"
    IMPROVEMENTS_NEEDED = "improvements-needed"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class ChangeType(str, Enum):
    """Kinds of document change delivered by a change feed."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    """A single document change.

    ``before`` is None for creations, ``after`` is None for deletions.
    """

    collection: str
    change_type: ChangeType
    document_id: Optional[str] = None
    before: Optional[DocumentSnapshot] = None
    after: Optional[DocumentSnapshot] = None

    def log_context(self) -> dict[str, Any]:
        """Fields bound to every log entry emitted while handling the event."""
        return {
            "collection": self.collection,
            "change_type": self.change_type.value,
            "document_id": self.document_id,
        }


@dataclass(frozen=True)
class NotifierConfig:
    """Configuration shared by all notification handlers."""

    webhook_url: Optional[str]
    site_url: str


class DocumentModel(BaseModel):
    """Base for typed views over raw document snapshots."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class MapPin(DocumentModel):
    """Map pin document."""

    id: str = Field(alias="_id")
    type: str
    moderation: Optional[ModerationStatus] = None


class Howto(DocumentModel):
    """How-to guide document."""

    created_by: str = Field(alias="_createdBy")
    title: str
    slug: str
    moderation: Optional[ModerationStatus] = None


class ResearchUpdate(DocumentModel):
    """Single update entry of a research article."""

    id: str = Field(alias="_id")
    title: str
    # Expected to hold a single person, but stored as a list
    collaborators: Optional[list[Any]] = None


class ResearchArticle(DocumentModel):
    """Research article with its append-only list of updates.

    Updates stay raw; only the one being announced is validated.
    """

    slug: str
    updates: list[Any] = Field(default_factory=list)


class Question(DocumentModel):
    """Question document."""

    created_by: str = Field(alias="_createdBy")
    title: str
    slug: str
