"""Questions to the AI assistant, scoped to a part of the intranet."""

from __future__ import annotations

import asyncio
import logging

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import Feature, PlanGate
from intranet_core_api.ai.question_answerer import QuestionAnswerer
from intranet_core_api.models.ai_query import AIQuery, AIQueryScope, AIQueryStatus
from intranet_core_api.models.content import PageStatus
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.impl.settings.gemini_settings import GeminiSettings
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

MAX_CONTEXT_CHARS = 8000
ERROR_PREFIX = "Error interacting with AI"

_SCOPE_FIELDS = {
    AIQueryScope.SPACE: "scope_space_id",
    AIQueryScope.PAGE: "scope_page_id",
    AIQueryScope.DOCUMENT: "scope_document_id",
    AIQueryScope.KNOWLEDGE_BASE: "scope_knowledge_article_id",
}


class AIAssistantService:
    """Stores questions and, when the company has a key, answers them.

    A question is saved as Pending first. Without a company API key it
    stays Pending with an empty answer. Otherwise the answerer runs under
    a timeout; failures end up as an Error status with the failure in the
    answer text instead of being raised.
    """

    def __init__(
        self,
        repositories: Repositories,
        access: IntranetAccessService,
        plan_gate: PlanGate,
        answerer: QuestionAnswerer,
        settings: GeminiSettings | None = None,
    ):
        self._repositories = repositories
        self._access = access
        self._plan_gate = plan_gate
        self._answerer = answerer
        self._settings = settings or GeminiSettings()

    @staticmethod
    def _validate_scope(scope_type: AIQueryScope, scope_ids: dict[str, str | None]) -> None:
        expected = _SCOPE_FIELDS.get(scope_type)
        stray = [name for name, value in scope_ids.items() if value and name != expected]
        if stray:
            raise ValidationFailedError(f"{', '.join(stray)} cannot be used with scope {scope_type}.")
        if expected and scope_type != AIQueryScope.KNOWLEDGE_BASE and not scope_ids.get(expected):
            raise ValidationFailedError(f"Scope {scope_type} needs {expected}.")

    def _scoped_context(self, principal: Principal, scope_type: AIQueryScope, scope_ids: dict[str, str | None]) -> str:
        """Check the principal may read the scoped entity and return its text."""
        if scope_type == AIQueryScope.SPACE:
            space = self._repositories.spaces.require(scope_ids["scope_space_id"])
            ensure_allowed(self._access.can_view_space(space, principal), principal, "ask about this space")
            pages = [
                page
                for page in self._access.visible_pages(space.company_id, principal)
                if page.space_id == space.id and page.status == PageStatus.PUBLISHED
            ]
            lines = [f"Space: {space.space_name}", space.description]
            lines += [f"- {page.page_title}: {page.summary or ''}" for page in pages]
            return "\n".join(line for line in lines if line)
        if scope_type == AIQueryScope.PAGE:
            page = self._repositories.pages.require(scope_ids["scope_page_id"])
            ensure_allowed(self._access.can_view_page(page, principal), principal, "ask about this page")
            return "\n".join(filter(None, [f"Page: {page.page_title}", page.summary, page.content]))
        if scope_type == AIQueryScope.DOCUMENT:
            document = self._repositories.documents.require(scope_ids["scope_document_id"])
            ensure_allowed(self._access.can_view_document(document, principal), principal, "ask about this document")
            return "\n".join(
                filter(
                    None,
                    [f"Document: {document.title}", document.description, document.tags, document.external_url or document.file_url],
                )
            )
        if scope_type == AIQueryScope.KNOWLEDGE_BASE:
            article_id = scope_ids.get("scope_knowledge_article_id")
            if article_id:
                article = self._repositories.knowledge_articles.require(article_id)
                ensure_allowed(
                    self._access.can_view_knowledge_article(article, principal), principal, "ask about this article"
                )
                articles = [article]
            else:
                articles = self._access.visible_knowledge_articles(principal.company_id, principal)
            return "\n\n".join(f"Q: {article.question or article.title}\nA: {article.answer}" for article in articles)
        return ""

    async def ask(
        self,
        principal: Principal,
        question_text: str,
        scope_type: AIQueryScope = AIQueryScope.GLOBAL,
        scope_space_id: str | None = None,
        scope_page_id: str | None = None,
        scope_document_id: str | None = None,
        scope_knowledge_article_id: str | None = None,
    ) -> AIQuery:
        """Store a question and try to answer it.

        Raises
        ------
        FeatureUnavailableError
            If the company plan does not include the AI assistant.
        AccessDeniedError
            If the principal cannot read the scoped entity.
        ValidationFailedError
            For an empty question or scope ids that do not match the scope.
        """
        company = self._repositories.companies.require(principal.company_id)
        self._plan_gate.require_feature(company, Feature.AI)
        if not question_text.strip():
            raise ValidationFailedError("Question text is required.")
        scope_ids = {
            "scope_space_id": scope_space_id,
            "scope_page_id": scope_page_id,
            "scope_document_id": scope_document_id,
            "scope_knowledge_article_id": scope_knowledge_article_id,
        }
        self._validate_scope(scope_type, scope_ids)
        context = self._scoped_context(principal, scope_type, scope_ids)[:MAX_CONTEXT_CHARS]

        query = self._repositories.ai_queries.create(
            company_id=company.id,
            user_id=principal.subject,
            scope_type=scope_type,
            question_text=question_text.strip(),
            answer_text="",
            status=AIQueryStatus.PENDING,
            **scope_ids,
        )
        if not company.gemini_api_key:
            logger.info("No AI key for company %s; question %s left pending", company.id, query.id)
            return query

        try:
            answer = await asyncio.wait_for(
                self._answerer.answer(company.gemini_api_key, query.question_text, context),
                timeout=self._settings.timeout_seconds,
            )
            status = AIQueryStatus.ANSWERED
        except asyncio.TimeoutError:
            logger.exception("AI call for question %s timed out", query.id)
            answer = f"{ERROR_PREFIX}: no response within {self._settings.timeout_seconds:g} seconds"
            status = AIQueryStatus.ERROR
        except Exception as exc:
            logger.exception("AI call for question %s failed", query.id)
            answer = f"{ERROR_PREFIX}: {str(exc) or 'Unknown error'}"
            status = AIQueryStatus.ERROR
        return self._repositories.ai_queries.patch(
            query.id,
            answer_text=answer,
            status=status,
            answered_on=self._repositories.ai_queries.now(),
        )

    def history(self, principal: Principal, all_users: bool = False) -> list[AIQuery]:
        """Return the principal's questions; administrators may ask for the whole company."""
        if all_users and self._access.can_administer_company(principal.company_id, principal):
            return self._repositories.ai_queries.history(principal.company_id)
        return self._repositories.ai_queries.history(principal.company_id, principal.subject)
