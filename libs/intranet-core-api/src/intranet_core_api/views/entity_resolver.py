"""Resolution of polymorphic references, including ones that no longer resolve."""

from __future__ import annotations

from pydantic import BaseModel

from intranet_core_api.models.base import IntranetRecord
from intranet_core_api.models.engagement import EntityRef, EntityType
from intranet_core_api.models.user import User
from intranet_core_api.repositories.base import Repository
from intranet_core_api.repositories.registry import Repositories

UNKNOWN_LABEL = "Unknown"
UNKNOWN_USER_LABEL = "Unknown User"

_LABEL_FIELDS = ("page_title", "space_name", "title", "full_name", "name")


class ResolvedEntity(BaseModel):
    """A reference together with its record; ``record`` is None when it dangles."""

    ref: EntityRef
    record: IntranetRecord | None = None
    label: str = UNKNOWN_LABEL

    @property
    def is_dangling(self) -> bool:
        return self.record is None


class EntityResolver:
    """Looks up the target of an ``EntityRef``; missing targets get the "Unknown" label."""

    def __init__(self, repositories: Repositories):
        self._repositories = repositories
        self._by_type: dict[EntityType, Repository] = {
            EntityType.PAGE: repositories.pages,
            EntityType.DOCUMENT_ITEM: repositories.documents,
            EntityType.ANNOUNCEMENT: repositories.announcements,
            EntityType.SPACE: repositories.spaces,
            EntityType.KNOWLEDGE_ARTICLE: repositories.knowledge_articles,
            EntityType.EVENT: repositories.events,
        }

    @staticmethod
    def label_of(record: IntranetRecord) -> str:
        for field in _LABEL_FIELDS:
            value = getattr(record, field, None)
            if value:
                return str(value)
        return record.id

    def resolve(self, ref: EntityRef) -> ResolvedEntity:
        repository = self._by_type.get(ref.entity_type)
        if repository is None or ref.entity_id is None:
            return ResolvedEntity(ref=ref)
        record = repository.get(ref.entity_id)
        if record is None:
            return ResolvedEntity(ref=ref)
        return ResolvedEntity(ref=ref, record=record, label=self.label_of(record))

    def user(self, user_id: str | None) -> User | None:
        return self._repositories.users.get(user_id) if user_id else None

    def user_name(self, user_id: str | None) -> str:
        user = self.user(user_id)
        return user.full_name if user else UNKNOWN_USER_LABEL

    def space_name(self, space_id: str | None) -> str:
        space = self._repositories.spaces.get(space_id) if space_id else None
        return space.space_name if space else UNKNOWN_LABEL
