"""Per-user auxiliary records that point at another entity."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from intranet_core_api.models.base import IntranetRecord


class EntityType(StrEnum):
    """Closed set of entity kinds a reference can point at."""

    PAGE = "Page"
    DOCUMENT_ITEM = "DocumentItem"
    ANNOUNCEMENT = "Announcement"
    SPACE = "Space"
    KNOWLEDGE_ARTICLE = "KnowledgeArticle"
    EVENT = "Event"
    OTHER = "Other"


class ActionType(StrEnum):
    """Activity log verbs."""

    CREATED = "Created"
    UPDATED = "Updated"
    DELETED = "Deleted"
    PUBLISHED = "Published"
    UNPUBLISHED = "Unpublished"
    PINNED = "Pinned"
    UNPINNED = "Unpinned"


class EntityRef(BaseModel):
    """Typed reference to another record."""

    model_config = ConfigDict(frozen=True)

    entity_type: EntityType
    entity_id: str | None = None

    @classmethod
    def page(cls, page_id: str) -> "EntityRef":
        return cls(entity_type=EntityType.PAGE, entity_id=page_id)

    @classmethod
    def document(cls, document_id: str) -> "EntityRef":
        return cls(entity_type=EntityType.DOCUMENT_ITEM, entity_id=document_id)

    @classmethod
    def announcement(cls, announcement_id: str) -> "EntityRef":
        return cls(entity_type=EntityType.ANNOUNCEMENT, entity_id=announcement_id)

    @classmethod
    def space(cls, space_id: str) -> "EntityRef":
        return cls(entity_type=EntityType.SPACE, entity_id=space_id)

    @classmethod
    def event(cls, event_id: str) -> "EntityRef":
        return cls(entity_type=EntityType.EVENT, entity_id=event_id)

    @classmethod
    def knowledge_article(cls, article_id: str) -> "EntityRef":
        return cls(entity_type=EntityType.KNOWLEDGE_ARTICLE, entity_id=article_id)


class _ReferencingRecord(IntranetRecord):
    entity_type: EntityType
    entity_id: str | None = None

    @property
    def ref(self) -> EntityRef:
        """Return the typed reference this record points at."""
        return EntityRef(entity_type=self.entity_type, entity_id=self.entity_id)

    def points_at(self, ref: EntityRef) -> bool:
        """Return whether the record references the given entity."""
        return self.entity_type == ref.entity_type and self.entity_id == ref.entity_id


class ActivityLog(_ReferencingRecord):
    """Audit entry describing a change to an entity."""

    company_id: str
    user_id: str
    action_type: ActionType
    description: str | None = None
    created_on: datetime


class Notification(_ReferencingRecord):
    """Message addressed to one user."""

    company_id: str
    user_id: str
    title: str
    message: str
    is_read: bool = False
    created_on: datetime


class FavoriteItem(_ReferencingRecord):
    """Bookmark; toggled by flipping ``is_active``."""

    company_id: str
    user_id: str
    created_on: datetime
    is_active: bool = True


class ReadAcknowledgement(_ReferencingRecord):
    """Confirmation that a user has read an announcement or document."""

    company_id: str
    user_id: str
    acknowledged_on: datetime
