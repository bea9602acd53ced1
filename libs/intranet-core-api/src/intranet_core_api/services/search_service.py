"""Global search across visible content."""

from __future__ import annotations

from pydantic import BaseModel, Field

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.models.content import Announcement, DocumentItem, Page
from intranet_core_lib.principal import Principal

MAX_RESULTS_PER_KIND = 20


class SearchResults(BaseModel):
    """Matches grouped by kind."""

    query: str
    pages: list[Page] = Field(default_factory=list)
    documents: list[DocumentItem] = Field(default_factory=list)
    announcements: list[Announcement] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.pages) + len(self.documents) + len(self.announcements)


def _matches(needle: str, *values: str | None) -> bool:
    return any(needle in value.lower() for value in values if value)


class SearchService:
    """Case-insensitive substring search that never returns what the caller cannot see."""

    def __init__(self, access: IntranetAccessService, max_results: int = MAX_RESULTS_PER_KIND):
        self._access = access
        self._max_results = max_results

    def search(self, principal: Principal, company_id: str, query: str) -> SearchResults:
        needle = query.strip().lower()
        if not needle:
            return SearchResults(query=query)
        pages = [
            page
            for page in self._access.visible_pages(company_id, principal)
            if _matches(needle, page.page_title, page.summary, page.content)
        ]
        documents = [
            document
            for document in self._access.visible_documents(company_id, principal)
            if _matches(needle, document.title, document.description, document.tags)
        ]
        announcements = [
            announcement
            for announcement in self._access.visible_announcements(company_id, principal)
            if _matches(needle, announcement.title, announcement.message)
        ]
        return SearchResults(
            query=query,
            pages=pages[: self._max_results],
            documents=documents[: self._max_results],
            announcements=announcements[: self._max_results],
        )
