"""Repositories for space content and page helpers."""

from __future__ import annotations

from intranet_core_api.models.content import (
    Announcement,
    DocumentItem,
    Event,
    NavQuickLink,
    Page,
    PageComment,
    PageTemplate,
    PageViewLog,
    PageWidget,
)
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.storage_keys import StorageKey


class PageRepository(Repository[Page]):
    """Pages; ``updated_on`` is stamped on every write."""

    model = Page
    storage_key = StorageKey.PAGES
    active_field = None

    def create(self, **fields) -> Page:
        if fields.get("created_on") is None:
            fields["created_on"] = self._clock()
        fields.setdefault("updated_on", fields["created_on"])
        return super().create(**fields)

    def _before_update(self, row: Page) -> Page:
        return row.model_copy(update={"updated_on": self._clock()})

    def for_space(self, space_id: str) -> list[Page]:
        return [page for page in self._load() if page.space_id == space_id]


class PageCommentRepository(Repository[PageComment]):
    model = PageComment
    storage_key = StorageKey.PAGE_COMMENTS
    allow_hard_delete = True

    def for_page(self, page_id: str) -> list[PageComment]:
        return [comment for comment in self._load() if comment.page_id == page_id]

    def edit(self, comment_id: str, text: str) -> PageComment:
        """Replace the comment text and mark it edited."""
        return self.patch(comment_id, comment_text=text, is_edited=True, edited_on=self._clock())


class PageWidgetRepository(Repository[PageWidget]):
    model = PageWidget
    storage_key = StorageKey.PAGE_WIDGETS
    allow_hard_delete = True

    def for_page(self, page_id: str) -> list[PageWidget]:
        widgets = [widget for widget in self._load() if widget.page_id == page_id]
        return sorted(widgets, key=lambda widget: widget.display_order or 0)


class PageTemplateRepository(Repository[PageTemplate]):
    model = PageTemplate
    storage_key = StorageKey.PAGE_TEMPLATES
    allow_hard_delete = True


class PageViewRepository(Repository[PageViewLog]):
    model = PageViewLog
    storage_key = StorageKey.PAGE_VIEWS
    timestamp_field = "viewed_on"
    active_field = None


class DocumentRepository(Repository[DocumentItem]):
    model = DocumentItem
    storage_key = StorageKey.DOCUMENTS

    def _before_update(self, row: DocumentItem) -> DocumentItem:
        return row.model_copy(update={"updated_on": self._clock()})


class AnnouncementRepository(Repository[Announcement]):
    """Announcements are hard deleted."""

    model = Announcement
    storage_key = StorageKey.ANNOUNCEMENTS
    allow_hard_delete = True


class EventRepository(Repository[Event]):
    model = Event
    storage_key = StorageKey.EVENTS

    def _before_update(self, row: Event) -> Event:
        return row.model_copy(update={"updated_on": self._clock()})


class NavQuickLinkRepository(Repository[NavQuickLink]):
    model = NavQuickLink
    storage_key = StorageKey.NAV_QUICK_LINKS
    timestamp_field = None
    allow_hard_delete = True

    def list(self, company_id: str) -> list[NavQuickLink]:
        return sorted(super().list(company_id), key=lambda link: link.display_order or 0)
