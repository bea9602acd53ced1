"""Authoring and reading of space content."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import Feature, PlanGate
from intranet_core_api.models.base import as_utc
from intranet_core_api.models.content import (
    Announcement,
    AnnouncementAudience,
    DocumentItem,
    DocumentType,
    Event,
    Page,
    PageComment,
    PageStatus,
    PageViewLog,
    PageWidget,
)
from intranet_core_api.models.engagement import ActionType, EntityRef, EntityType, Notification, ReadAcknowledgement
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed, pick
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

_PAGE_FIELDS = {"page_title", "summary", "content", "header_image_url"}
_DOCUMENT_FIELDS = {
    "title",
    "description",
    "item_type",
    "file_url",
    "external_url",
    "page_id",
    "tags",
    "is_active",
    "is_policy",
    "expiry_date",
    "owner_user_id",
    "importance_level",
    "preview_image_url",
}
_ANNOUNCEMENT_FIELDS = {"title", "message", "is_active", "announcement_image_url"}
_EVENT_FIELDS = {
    "title",
    "description",
    "event_type",
    "start_date_time",
    "end_date_time",
    "location",
    "is_all_day",
    "is_public",
    "is_active",
    "event_banner_url",
}


class ContentService:
    """Pages, documents, announcements and events, with their engagement records.

    Every mutation checks the matching ``can_edit_*`` predicate and raises
    ``AccessDeniedError`` when it fails; successful mutations are written to
    the activity log.
    """

    def __init__(self, repositories: Repositories, access: IntranetAccessService, plan_gate: PlanGate):
        self._repositories = repositories
        self._access = access
        self._plan_gate = plan_gate

    def _log(self, principal: Principal, company_id: str, ref: EntityRef, action: ActionType, description: str | None = None):
        self._repositories.activity_logs.record(company_id, principal.subject, ref, action, description)

    def _notify_space(self, principal: Principal, space_id: str, company_id: str, title: str, message: str, ref: EntityRef):
        recipients = dict.fromkeys(
            member.user_id
            for member in self._repositories.space_members.for_space(space_id)
            if member.is_active and member.user_id != principal.subject
        )
        for user_id in recipients:
            self._repositories.notifications.create(
                company_id=company_id,
                user_id=user_id,
                title=title,
                message=message,
                entity_type=ref.entity_type,
                entity_id=ref.entity_id,
            )

    # Pages

    def create_page(
        self,
        principal: Principal,
        space_id: str,
        page_title: str = "",
        content: str = "",
        summary: str | None = None,
        status: PageStatus = PageStatus.DRAFT,
        header_image_url: str | None = None,
        template_id: str | None = None,
    ) -> Page:
        """Create a page in a space, optionally prefilled from a template."""
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_manage_space(space, principal), principal, "create pages in this space")
        if template_id:
            template = self._repositories.page_templates.require(template_id)
            page_title = page_title or f"{template.default_title_prefix or ''}{template.template_name}".strip()
            summary = summary if summary is not None else template.default_summary
            content = content or template.default_content or ""
            status = template.default_status if status == PageStatus.DRAFT else status
        if not page_title.strip():
            raise ValidationFailedError("Page title is required.")
        page = self._repositories.pages.create(
            page_title=page_title.strip(),
            summary=summary,
            content=content,
            status=status,
            space_id=space_id,
            company_id=space.company_id,
            created_by=principal.subject,
            header_image_url=header_image_url,
        )
        self._log(principal, page.company_id, EntityRef.page(page.id), ActionType.CREATED, page.page_title)
        return page

    def update_page(self, principal: Principal, page_id: str, **changes: Any) -> Page:
        page = self._repositories.pages.require(page_id)
        ensure_allowed(self._access.can_edit_page(page, principal), principal, "edit this page")
        changes = pick(changes, _PAGE_FIELDS)
        changes["updated_by"] = principal.subject
        updated = self._repositories.pages.update(page.model_copy(update=changes))
        self._log(principal, page.company_id, EntityRef.page(page_id), ActionType.UPDATED, updated.page_title)
        return updated

    def publish_page(self, principal: Principal, page_id: str) -> Page:
        """Publish a draft and notify the space's members."""
        page = self._repositories.pages.require(page_id)
        ensure_allowed(self._access.can_edit_page(page, principal), principal, "publish this page")
        if page.status == PageStatus.PUBLISHED:
            return page
        updated = self._repositories.pages.update(
            page.model_copy(update={"status": PageStatus.PUBLISHED, "updated_by": principal.subject})
        )
        self._log(principal, page.company_id, EntityRef.page(page_id), ActionType.PUBLISHED, page.page_title)
        self._notify_space(
            principal,
            page.space_id,
            page.company_id,
            "New page published",
            f"{page.page_title} is now available.",
            EntityRef.page(page_id),
        )
        return updated

    def unpublish_page(self, principal: Principal, page_id: str) -> Page:
        page = self._repositories.pages.require(page_id)
        ensure_allowed(self._access.can_edit_page(page, principal), principal, "unpublish this page")
        updated = self._repositories.pages.update(
            page.model_copy(update={"status": PageStatus.DRAFT, "updated_by": principal.subject})
        )
        self._log(principal, page.company_id, EntityRef.page(page_id), ActionType.UNPUBLISHED, page.page_title)
        return updated

    def view_page(self, principal: Principal, page_id: str) -> Page:
        """Return a page the principal may read and record the view."""
        page = self._repositories.pages.require(page_id)
        ensure_allowed(self._access.can_view_page(page, principal), principal, "view this page")
        self.record_page_view(principal, page)
        return page

    def record_page_view(self, principal: Principal, page: Page) -> PageViewLog:
        return self._repositories.page_views.create(
            company_id=page.company_id,
            page_id=page.id,
            user_id=principal.subject,
            user_role_name=str(principal.role),
        )

    # Comments and widgets

    def comments(self, principal: Principal, page_id: str) -> list[PageComment]:
        page = self._repositories.pages.require(page_id)
        if not self._access.can_view_page(page, principal):
            return []
        rows = [comment for comment in self._repositories.page_comments.for_page(page_id) if comment.is_active]
        return sorted(rows, key=lambda comment: comment.created_on)

    def add_comment(self, principal: Principal, page_id: str, text: str) -> PageComment:
        page = self._repositories.pages.require(page_id)
        ensure_allowed(self._access.can_comment_on_page(page, principal), principal, "comment on this page")
        if not text.strip():
            raise ValidationFailedError("Comment text is required.")
        return self._repositories.page_comments.create(
            page_id=page_id,
            company_id=page.company_id,
            user_id=principal.subject,
            comment_text=text.strip(),
        )

    def edit_comment(self, principal: Principal, comment_id: str, text: str) -> PageComment:
        comment = self._repositories.page_comments.require(comment_id)
        ensure_allowed(comment.user_id == principal.subject, principal, "edit this comment")
        if not text.strip():
            raise ValidationFailedError("Comment text is required.")
        return self._repositories.page_comments.edit(comment_id, text.strip())

    def delete_comment(self, principal: Principal, comment_id: str) -> None:
        """Authors and page editors may remove a comment."""
        comment = self._repositories.page_comments.require(comment_id)
        page = self._repositories.pages.get(comment.page_id)
        can_moderate = page is not None and self._access.can_edit_page(page, principal)
        ensure_allowed(comment.user_id == principal.subject or can_moderate, principal, "delete this comment")
        self._repositories.page_comments.delete(comment_id)

    def add_widget(
        self,
        principal: Principal,
        page_id: str,
        widget_title: str,
        embed_url: str,
        description: str | None = None,
    ) -> PageWidget:
        page = self._repositories.pages.require(page_id)
        ensure_allowed(self._access.can_edit_page(page, principal), principal, "edit this page")
        if not embed_url.startswith(("http://", "https://")):
            raise ValidationFailedError("Embed URL must start with http:// or https://.")
        existing = self._repositories.page_widgets.for_page(page_id)
        return self._repositories.page_widgets.create(
            page_id=page_id,
            company_id=page.company_id,
            widget_title=widget_title,
            embed_url=embed_url,
            description=description,
            display_order=len(existing),
            created_by=principal.subject,
        )

    def remove_widget(self, principal: Principal, widget_id: str) -> None:
        widget = self._repositories.page_widgets.require(widget_id)
        page = self._repositories.pages.require(widget.page_id)
        ensure_allowed(self._access.can_edit_page(page, principal), principal, "edit this page")
        self._repositories.page_widgets.delete(widget_id)

    # Documents

    def _ensure_policy_feature(self, company_id: str, is_policy: bool) -> None:
        if is_policy:
            self._plan_gate.require_feature(self._repositories.companies.get(company_id), Feature.POLICIES)

    def create_document(
        self,
        principal: Principal,
        space_id: str,
        title: str,
        item_type: DocumentType = DocumentType.FILE_LINK,
        **fields: Any,
    ) -> DocumentItem:
        """File a document in a space; policy documents need the policies feature."""
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_manage_space(space, principal), principal, "add documents to this space")
        fields = pick(fields, _DOCUMENT_FIELDS - {"title", "item_type"})
        if not title.strip():
            raise ValidationFailedError("Document title is required.")
        self._ensure_policy_feature(space.company_id, bool(fields.get("is_policy")))
        document = self._repositories.documents.create(
            title=title.strip(),
            item_type=item_type,
            space_id=space_id,
            company_id=space.company_id,
            created_by=principal.subject,
            **fields,
        )
        self._log(principal, document.company_id, EntityRef.document(document.id), ActionType.CREATED, document.title)
        return document

    def update_document(self, principal: Principal, document_id: str, **changes: Any) -> DocumentItem:
        document = self._repositories.documents.require(document_id)
        ensure_allowed(self._access.can_edit_document(document, principal), principal, "edit this document")
        changes = pick(changes, _DOCUMENT_FIELDS)
        self._ensure_policy_feature(document.company_id, bool(changes.get("is_policy")))
        changes["updated_by"] = principal.subject
        updated = self._repositories.documents.update(document.model_copy(update=changes))
        self._log(principal, document.company_id, EntityRef.document(document_id), ActionType.UPDATED, updated.title)
        return updated

    def deactivate_document(self, principal: Principal, document_id: str) -> DocumentItem:
        document = self._repositories.documents.require(document_id)
        ensure_allowed(self._access.can_edit_document(document, principal), principal, "remove this document")
        updated = self._repositories.documents.soft_delete(document_id)
        self._log(principal, document.company_id, EntityRef.document(document_id), ActionType.DELETED, document.title)
        return updated

    def policies(self, principal: Principal, company_id: str) -> list[DocumentItem]:
        """Return visible policy documents, most important first."""
        order = {"High": 0, "Medium": 1, "Low": 2}
        rows = [document for document in self._access.visible_documents(company_id, principal) if document.is_policy]
        return sorted(rows, key=lambda document: order.get(str(document.importance_level), 3))

    # Announcements

    def _can_author_in(self, principal: Principal, company_id: str, space_id: str | None) -> bool:
        if space_id:
            space = self._repositories.spaces.get(space_id)
            return space is not None and space.company_id == company_id and self._access.can_manage_space(space, principal)
        return self._access.can_administer_company(company_id, principal)

    def create_announcement(
        self,
        principal: Principal,
        company_id: str,
        title: str,
        message: str,
        space_id: str | None = None,
        is_pinned: bool = False,
        announcement_image_url: str | None = None,
    ) -> Announcement:
        """Post a company-wide (admins) or space-scoped (space managers) announcement."""
        ensure_allowed(self._can_author_in(principal, company_id, space_id), principal, "post this announcement")
        if not title.strip() or not message.strip():
            raise ValidationFailedError("Announcement title and message are required.")
        announcement = self._repositories.announcements.create(
            title=title.strip(),
            message=message,
            audience_type=AnnouncementAudience.SPACE_SPECIFIC if space_id else AnnouncementAudience.COMPANY_WIDE,
            space_id=space_id,
            company_id=company_id,
            created_by=principal.subject,
            is_pinned=is_pinned,
            is_active=True,
            announcement_image_url=announcement_image_url,
        )
        ref = EntityRef.announcement(announcement.id)
        self._log(principal, company_id, ref, ActionType.CREATED, announcement.title)
        if space_id:
            self._notify_space(principal, space_id, company_id, "New announcement", announcement.title, ref)
        return announcement

    def update_announcement(self, principal: Principal, announcement_id: str, **changes: Any) -> Announcement:
        announcement = self._repositories.announcements.require(announcement_id)
        ensure_allowed(self._access.can_edit_announcement(announcement, principal), principal, "edit this announcement")
        updated = self._repositories.announcements.update(
            announcement.model_copy(update=pick(changes, _ANNOUNCEMENT_FIELDS))
        )
        self._log(
            principal, announcement.company_id, EntityRef.announcement(announcement_id), ActionType.UPDATED, updated.title
        )
        return updated

    def set_pinned(self, principal: Principal, announcement_id: str, pinned: bool) -> Announcement:
        announcement = self._repositories.announcements.require(announcement_id)
        ensure_allowed(self._access.can_edit_announcement(announcement, principal), principal, "pin this announcement")
        updated = self._repositories.announcements.update(announcement.model_copy(update={"is_pinned": pinned}))
        self._log(
            principal,
            announcement.company_id,
            EntityRef.announcement(announcement_id),
            ActionType.PINNED if pinned else ActionType.UNPINNED,
            announcement.title,
        )
        return updated

    def delete_announcement(self, principal: Principal, announcement_id: str) -> None:
        announcement = self._repositories.announcements.require(announcement_id)
        ensure_allowed(self._access.can_edit_announcement(announcement, principal), principal, "delete this announcement")
        self._repositories.announcements.delete(announcement_id)
        self._log(
            principal,
            announcement.company_id,
            EntityRef.announcement(announcement_id),
            ActionType.DELETED,
            announcement.title,
        )

    # Events

    def create_event(
        self,
        principal: Principal,
        company_id: str,
        title: str,
        start_date_time: datetime,
        space_id: str | None = None,
        **fields: Any,
    ) -> Event:
        ensure_allowed(self._can_author_in(principal, company_id, space_id), principal, "create this event")
        fields = pick(fields, _EVENT_FIELDS - {"title", "start_date_time"})
        end = fields.get("end_date_time")
        if end is not None and end < start_date_time:
            raise ValidationFailedError("An event cannot end before it starts.")
        event = self._repositories.events.create(
            company_id=company_id,
            title=title,
            start_date_time=start_date_time,
            space_id=space_id,
            created_by=principal.subject,
            **fields,
        )
        self._log(principal, company_id, EntityRef.event(event.id), ActionType.CREATED, event.title)
        return event

    def update_event(self, principal: Principal, event_id: str, **changes: Any) -> Event:
        event = self._repositories.events.require(event_id)
        ensure_allowed(self._access.can_edit_event(event, principal), principal, "edit this event")
        candidate = self._repositories.events.revise(event, **pick(changes, _EVENT_FIELDS))
        if candidate.end_date_time is not None and candidate.end_date_time < candidate.start_date_time:
            raise ValidationFailedError("An event cannot end before it starts.")
        updated = self._repositories.events.update(candidate)
        self._log(principal, event.company_id, EntityRef.event(event_id), ActionType.UPDATED, updated.title)
        return updated

    def deactivate_event(self, principal: Principal, event_id: str) -> Event:
        event = self._repositories.events.require(event_id)
        ensure_allowed(self._access.can_edit_event(event, principal), principal, "remove this event")
        updated = self._repositories.events.soft_delete(event_id)
        self._log(principal, event.company_id, EntityRef.event(event_id), ActionType.DELETED, event.title)
        return updated

    def upcoming_events(self, principal: Principal, company_id: str, now: datetime, limit: int = 5) -> list[Event]:
        now = as_utc(now)
        return [event for event in self._access.visible_events(company_id, principal) if event.start_date_time >= now][:limit]

    # Engagement

    def _can_view_ref(self, principal: Principal, ref: EntityRef) -> bool:
        if ref.entity_id is None:
            return False
        if ref.entity_type == EntityType.PAGE:
            page = self._repositories.pages.get(ref.entity_id)
            return page is not None and self._access.can_view_page(page, principal)
        if ref.entity_type == EntityType.DOCUMENT_ITEM:
            document = self._repositories.documents.get(ref.entity_id)
            return document is not None and self._access.can_view_document(document, principal)
        if ref.entity_type == EntityType.ANNOUNCEMENT:
            announcement = self._repositories.announcements.get(ref.entity_id)
            return announcement is not None and self._access.can_view_announcement(announcement, principal)
        if ref.entity_type == EntityType.EVENT:
            event = self._repositories.events.get(ref.entity_id)
            return event is not None and self._access.can_view_event(event, principal)
        if ref.entity_type == EntityType.SPACE:
            return self._access.can_view_space(ref.entity_id, principal)
        if ref.entity_type == EntityType.KNOWLEDGE_ARTICLE:
            article = self._repositories.knowledge_articles.get(ref.entity_id)
            return article is not None and self._access.can_view_knowledge_article(article, principal)
        return False

    def toggle_favorite(self, principal: Principal, ref: EntityRef) -> bool:
        """Flip the favorite state of an entity the principal can see; return the new state."""
        ensure_allowed(self._can_view_ref(principal, ref), principal, "favorite this item")
        return self._repositories.favorites.toggle(principal.company_id, principal.subject, ref)

    def acknowledge(self, principal: Principal, ref: EntityRef) -> ReadAcknowledgement:
        """Confirm having read an announcement or document."""
        if ref.entity_type not in {EntityType.ANNOUNCEMENT, EntityType.DOCUMENT_ITEM}:
            raise ValidationFailedError("Only announcements and documents can be acknowledged.")
        ensure_allowed(self._can_view_ref(principal, ref), principal, "acknowledge this item")
        return self._repositories.acknowledgements.acknowledge(principal.company_id, principal.subject, ref)

    def notifications(self, principal: Principal) -> list[Notification]:
        return self._repositories.notifications.for_user(principal.subject)

    def mark_notification_read(self, principal: Principal, notification_id: str) -> Notification:
        notification = self._repositories.notifications.require(notification_id)
        ensure_allowed(notification.user_id == principal.subject, principal, "read this notification")
        return self._repositories.notifications.mark_read(notification_id)

    def mark_all_notifications_read(self, principal: Principal) -> int:
        return self._repositories.notifications.mark_all_read(principal.subject)
