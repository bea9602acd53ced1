"""Repositories for the knowledge base."""

from __future__ import annotations

from intranet_core_api.models.knowledge import KnowledgeArticle, KnowledgeCategory
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.storage_keys import StorageKey


class KnowledgeCategoryRepository(Repository[KnowledgeCategory]):
    model = KnowledgeCategory
    storage_key = StorageKey.KNOWLEDGE_CATEGORIES


class KnowledgeArticleRepository(Repository[KnowledgeArticle]):
    model = KnowledgeArticle
    storage_key = StorageKey.KNOWLEDGE_ARTICLES

    def for_page(self, page_id: str) -> list[KnowledgeArticle]:
        """Return articles that reference a page."""
        return [article for article in self._load() if article.related_page_id == page_id]

    def for_category(self, category_id: str) -> list[KnowledgeArticle]:
        return [article for article in self._load() if article.category_id == category_id]

    def _before_update(self, row: KnowledgeArticle) -> KnowledgeArticle:
        return row.model_copy(update={"updated_on": self._clock()})
