"""Knowledge base taxonomy."""

from __future__ import annotations

from datetime import datetime

from intranet_core_api.models.base import IntranetRecord


class KnowledgeCategory(IntranetRecord):
    """Flat FAQ category."""

    company_id: str
    name: str
    description: str | None = None
    display_order: int | None = None
    is_active: bool = True
    created_on: datetime


class KnowledgeArticle(IntranetRecord):
    """Question and answer entry, optionally pointing at a space or page."""

    company_id: str
    category_id: str
    title: str
    question: str | None = None
    answer: str
    related_space_id: str | None = None
    related_page_id: str | None = None
    tags: str | None = None
    is_active: bool = True
    is_featured: bool = False
    created_by: str
    created_on: datetime
    updated_by: str | None = None
    updated_on: datetime | None = None
