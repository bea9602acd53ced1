"""AI assistant question records."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from intranet_core_api.models.base import IntranetRecord


class AIQueryScope(StrEnum):
    """What part of the intranet a question is about."""

    GLOBAL = "Global"
    SPACE = "Space"
    PAGE = "Page"
    DOCUMENT = "Document"
    KNOWLEDGE_BASE = "KnowledgeBase"


class AIQueryStatus(StrEnum):
    """Answer lifecycle."""

    PENDING = "Pending"
    ANSWERED = "Answered"
    ERROR = "Error"


class AIQuery(IntranetRecord):
    """A question asked to the assistant and its answer."""

    company_id: str
    user_id: str
    scope_type: AIQueryScope = AIQueryScope.GLOBAL
    scope_space_id: str | None = None
    scope_page_id: str | None = None
    scope_document_id: str | None = None
    scope_knowledge_article_id: str | None = None
    question_text: str
    answer_text: str = ""
    status: AIQueryStatus = AIQueryStatus.PENDING
    created_on: datetime
    answered_on: datetime | None = None
