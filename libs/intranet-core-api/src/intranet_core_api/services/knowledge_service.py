"""Knowledge base categories and articles."""

from __future__ import annotations

import logging
from typing import Any

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.models.engagement import ActionType, EntityRef
from intranet_core_api.models.knowledge import KnowledgeArticle, KnowledgeCategory
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed, pick
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

_ARTICLE_FIELDS = {
    "category_id",
    "title",
    "question",
    "answer",
    "related_space_id",
    "related_page_id",
    "tags",
    "is_active",
    "is_featured",
}


class KnowledgeBaseService:
    """FAQ style knowledge base managed by company administrators."""

    def __init__(self, repositories: Repositories, access: IntranetAccessService):
        self._repositories = repositories
        self._access = access

    def categories(self, company_id: str) -> list[KnowledgeCategory]:
        rows = [category for category in self._repositories.knowledge_categories.list(company_id) if category.is_active]
        return sorted(rows, key=lambda category: (category.display_order or 0, category.name.lower()))

    def create_category(
        self,
        principal: Principal,
        company_id: str,
        name: str,
        description: str | None = None,
        display_order: int | None = None,
    ) -> KnowledgeCategory:
        ensure_allowed(self._access.can_manage_knowledge_base(company_id, principal), principal, "manage the knowledge base")
        if not name.strip():
            raise ValidationFailedError("Category name is required.")
        return self._repositories.knowledge_categories.create(
            company_id=company_id, name=name.strip(), description=description, display_order=display_order
        )

    def deactivate_category(self, principal: Principal, category_id: str) -> KnowledgeCategory:
        category = self._repositories.knowledge_categories.require(category_id)
        ensure_allowed(
            self._access.can_manage_knowledge_base(category.company_id, principal), principal, "manage the knowledge base"
        )
        return self._repositories.knowledge_categories.soft_delete(category_id)

    def articles(self, principal: Principal, company_id: str, category_id: str | None = None, query: str = "") -> list[KnowledgeArticle]:
        """Return visible articles, optionally narrowed to a category and a text query."""
        needle = query.strip().lower()
        rows = []
        for article in self._access.visible_knowledge_articles(company_id, principal):
            if category_id and article.category_id != category_id:
                continue
            haystack = " ".join(filter(None, [article.title, article.question, article.answer, article.tags])).lower()
            if needle and needle not in haystack:
                continue
            rows.append(article)
        return rows

    def create_article(
        self,
        principal: Principal,
        company_id: str,
        category_id: str,
        title: str,
        answer: str,
        **fields: Any,
    ) -> KnowledgeArticle:
        ensure_allowed(self._access.can_manage_knowledge_base(company_id, principal), principal, "manage the knowledge base")
        category = self._repositories.knowledge_categories.require(category_id)
        if category.company_id != company_id:
            raise ValidationFailedError("Category belongs to another company.")
        if not title.strip() or not answer.strip():
            raise ValidationFailedError("Article title and answer are required.")
        fields = pick(fields, _ARTICLE_FIELDS - {"category_id", "title", "answer"})
        article = self._repositories.knowledge_articles.create(
            company_id=company_id,
            category_id=category_id,
            title=title.strip(),
            answer=answer,
            created_by=principal.subject,
            **fields,
        )
        self._repositories.activity_logs.record(
            company_id, principal.subject, EntityRef.knowledge_article(article.id), ActionType.CREATED, article.title
        )
        return article

    def update_article(self, principal: Principal, article_id: str, **changes: Any) -> KnowledgeArticle:
        article = self._repositories.knowledge_articles.require(article_id)
        ensure_allowed(
            self._access.can_manage_knowledge_base(article.company_id, principal), principal, "manage the knowledge base"
        )
        changes = pick(changes, _ARTICLE_FIELDS)
        changes["updated_by"] = principal.subject
        updated = self._repositories.knowledge_articles.update(article.model_copy(update=changes))
        self._repositories.activity_logs.record(
            article.company_id, principal.subject, EntityRef.knowledge_article(article_id), ActionType.UPDATED, updated.title
        )
        return updated

    def deactivate_article(self, principal: Principal, article_id: str) -> KnowledgeArticle:
        article = self._repositories.knowledge_articles.require(article_id)
        ensure_allowed(
            self._access.can_manage_knowledge_base(article.company_id, principal), principal, "manage the knowledge base"
        )
        return self._repositories.knowledge_articles.soft_delete(article_id)
