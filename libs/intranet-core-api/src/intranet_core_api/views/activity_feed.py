"""Readable activity log."""

from __future__ import annotations

from pydantic import BaseModel

from intranet_core_api.models.engagement import ActionType, ActivityLog, EntityType
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.views.entity_resolver import EntityResolver, ResolvedEntity


class ActivityEntry(BaseModel):
    log: ActivityLog
    user_name: str
    entity: ResolvedEntity


class ActivityFeed:
    """Activity log entries joined to their actor and target."""

    def __init__(self, repositories: Repositories, resolver: EntityResolver | None = None):
        self._repositories = repositories
        self._resolver = resolver or EntityResolver(repositories)

    def entries(
        self,
        company_id: str,
        entity_type: EntityType | None = None,
        action_type: ActionType | None = None,
        entity_id: str | None = None,
        limit: int | None = None,
    ) -> list[ActivityEntry]:
        """Return entries newest first; deleted targets resolve as dangling."""
        logs = self._repositories.activity_logs.query(company_id, entity_type, entity_id, action_type)
        if limit is not None:
            logs = logs[:limit]
        return [
            ActivityEntry(
                log=log,
                user_name=self._resolver.user_name(log.user_id),
                entity=self._resolver.resolve(log.ref),
            )
            for log in logs
        ]
