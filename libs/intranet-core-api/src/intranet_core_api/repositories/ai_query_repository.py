"""Repository for AI assistant questions."""

from __future__ import annotations

from intranet_core_api.models.ai_query import AIQuery
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.storage_keys import StorageKey


class AIQueryRepository(Repository[AIQuery]):
    model = AIQuery
    storage_key = StorageKey.AI_QUERIES
    active_field = None

    def history(self, company_id: str, user_id: str | None = None) -> list[AIQuery]:
        """Return questions newest first, optionally for one user."""
        rows = [row for row in self.list(company_id) if user_id is None or row.user_id == user_id]
        return sorted(rows, key=lambda row: row.created_on, reverse=True)
