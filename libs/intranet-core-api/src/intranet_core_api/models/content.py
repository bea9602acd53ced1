"""Space content: pages, documents, announcements, events and helpers."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import Field

from intranet_core_api.models.base import IntranetRecord


class PageStatus(StrEnum):
    """Publication state of a page."""

    DRAFT = "Draft"
    PUBLISHED = "Published"


class Page(IntranetRecord):
    """Rich content page living in a space."""

    page_title: str
    summary: str | None = None
    content: str = ""
    status: PageStatus = PageStatus.DRAFT
    space_id: str
    company_id: str
    created_by: str
    updated_by: str | None = None
    created_on: datetime
    updated_on: datetime | None = None
    header_image_url: str | None = Field(default=None, alias="headerImageURL")


class PageComment(IntranetRecord):
    """Comment left on a page."""

    page_id: str
    company_id: str
    user_id: str
    comment_text: str
    created_on: datetime
    is_edited: bool = False
    edited_on: datetime | None = None
    is_active: bool = True


class WidgetType(StrEnum):
    """Supported page widget kinds."""

    EMBED_FRAME = "EmbedFrame"


class PageWidget(IntranetRecord):
    """Embedded frame shown on a page."""

    page_id: str
    company_id: str
    widget_title: str
    widget_type: WidgetType = WidgetType.EMBED_FRAME
    embed_url: str = Field(alias="embedURL")
    description: str | None = None
    display_order: int | None = None
    is_active: bool = True
    created_by: str
    created_on: datetime
    updated_by: str | None = None
    updated_on: datetime | None = None


class PageTemplate(IntranetRecord):
    """Blueprint for new pages."""

    company_id: str
    template_name: str
    description: str | None = None
    default_title_prefix: str | None = None
    default_summary: str | None = None
    default_content: str | None = None
    default_status: PageStatus = PageStatus.DRAFT
    recommended_space_id: str | None = None
    is_active: bool = True
    created_by: str
    created_on: datetime


class PageViewLog(IntranetRecord):
    """One view of a page by a user."""

    company_id: str
    page_id: str
    user_id: str
    viewed_on: datetime
    user_role_name: str | None = None


class DocumentType(StrEnum):
    """How a document item is stored."""

    FILE_LINK = "FileLink"
    EXTERNAL_LINK = "ExternalLink"
    INTERNAL_NOTE = "InternalNote"
    EMBED = "Embed"


class DocumentImportance(StrEnum):
    """Importance used for policy documents."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DocumentItem(IntranetRecord):
    """Document or link filed in a space."""

    title: str
    description: str | None = None
    item_type: DocumentType = DocumentType.FILE_LINK
    file_url: str | None = Field(default=None, alias="fileURL")
    external_url: str | None = Field(default=None, alias="externalURL")
    space_id: str
    page_id: str | None = None
    company_id: str
    created_by: str
    created_on: datetime
    updated_by: str | None = None
    updated_on: datetime | None = None
    tags: str | None = None
    is_active: bool = True
    is_policy: bool = False
    expiry_date: date | None = None
    owner_user_id: str | None = None
    importance_level: DocumentImportance | None = None
    preview_image_url: str | None = Field(default=None, alias="previewImageURL")

    @property
    def tag_list(self) -> list[str]:
        """Return the comma separated tags as a list."""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]


class AnnouncementAudience(StrEnum):
    """Who an announcement addresses."""

    COMPANY_WIDE = "CompanyWide"
    SPACE_SPECIFIC = "SpaceSpecific"


class Announcement(IntranetRecord):
    """Company or space news item."""

    title: str
    message: str
    audience_type: AnnouncementAudience = AnnouncementAudience.COMPANY_WIDE
    space_id: str | None = None
    company_id: str
    created_by: str
    created_on: datetime
    is_pinned: bool = False
    is_active: bool = True
    announcement_image_url: str | None = Field(default=None, alias="announcementImageURL")

    @property
    def is_company_wide(self) -> bool:
        """Return whether the announcement ignores space membership."""
        return self.audience_type == AnnouncementAudience.COMPANY_WIDE or not self.space_id


class EventType(StrEnum):
    """Calendar event categories."""

    COMPANY_EVENT = "CompanyEvent"
    HOLIDAY = "Holiday"
    TRAINING = "Training"
    BIRTHDAY = "Birthday"
    OTHER = "Other"


class Event(IntranetRecord):
    """Calendar entry, optionally tied to a space."""

    company_id: str
    title: str
    description: str | None = None
    event_type: EventType = EventType.COMPANY_EVENT
    start_date_time: datetime
    end_date_time: datetime | None = None
    location: str | None = None
    space_id: str | None = None
    is_all_day: bool = False
    is_public: bool = False
    created_by: str
    created_on: datetime
    updated_on: datetime | None = None
    is_active: bool = True
    event_banner_url: str | None = Field(default=None, alias="eventBannerURL")


class NavTargetType(StrEnum):
    """Destination of a quick link."""

    EXTERNAL_URL = "ExternalURL"
    PAGE = "Page"
    SPACE = "Space"
    DOCUMENTS = "Documents"
    ANNOUNCEMENTS = "Announcements"
    OTHER = "Other"


class NavQuickLink(IntranetRecord):
    """Navigation shortcut configured by administrators."""

    company_id: str
    label: str
    target_type: NavTargetType = NavTargetType.EXTERNAL_URL
    target_url: str | None = Field(default=None, alias="targetURL")
    page_id: str | None = None
    space_id: str | None = None
    display_order: int | None = None
    is_active: bool = True
