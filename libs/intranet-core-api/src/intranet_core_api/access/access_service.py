"""Visibility and authorization decisions for intranet content."""

from __future__ import annotations

import logging
from typing import Iterable

from intranet_core_api.models.content import Announcement, DocumentItem, Event, Page, PageStatus
from intranet_core_api.models.knowledge import KnowledgeArticle
from intranet_core_api.models.space import Space, SpaceMember, SpaceRole
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.repositories.space_repository import strongest
from intranet_core_lib.principal import Principal, RoleType

logger = logging.getLogger(__name__)

SpaceRoles = dict[str, SpaceRole]


class IntranetAccessService:
    """Resolves what a principal may see or change.

    Every decision is a plain boolean or filtered list; nothing here raises
    for an unauthorized caller. Role checks run first, membership scans
    after. Company and super administrators are never gated by membership
    rows, so a missing or deleted space does not hide content from them.
    """

    def __init__(self, repositories: Repositories):
        self._repositories = repositories

    @staticmethod
    def is_company_admin(principal: Principal) -> bool:
        return principal.role == RoleType.COMPANY_ADMIN

    @staticmethod
    def is_super_admin(principal: Principal) -> bool:
        return principal.role == RoleType.SUPER_ADMIN

    @classmethod
    def _bypasses_spaces(cls, principal: Principal) -> bool:
        return cls.is_company_admin(principal) or cls.is_super_admin(principal)

    @staticmethod
    def _combine(role: RoleType, space_role: SpaceRole) -> SpaceRole:
        if role.rank >= RoleType.SPACE_MANAGER.rank:
            return SpaceRole.SPACE_MANAGER
        return space_role

    def space_roles(self, company_id: str, principal: Principal) -> SpaceRoles:
        """Return the effective role for every space of a company the principal can open."""
        if not principal.belongs_to(company_id):
            return {}
        spaces = self._repositories.spaces.list(company_id)
        if self._bypasses_spaces(principal):
            return {space.id: SpaceRole.SPACE_MANAGER for space in spaces}
        memberships: dict[str, list[SpaceMember]] = {}
        for member in self._repositories.space_members.for_user(principal.subject):
            memberships.setdefault(member.space_id, []).append(member)
        return {
            space.id: self._combine(principal.role, strongest(memberships[space.id]).role_in_space)
            for space in spaces
            if space.id in memberships
        }

    def _role_in(self, space_id: str | None, company_id: str, principal: Principal, roles: SpaceRoles) -> SpaceRole | None:
        if not principal.belongs_to(company_id):
            return None
        if self._bypasses_spaces(principal):
            return SpaceRole.SPACE_MANAGER
        if space_id is None:
            return None
        return roles.get(space_id)

    def _roles_for(self, company_id: str, principal: Principal) -> SpaceRoles:
        if self._bypasses_spaces(principal):
            return {}
        return self.space_roles(company_id, principal)

    def effective_space_role(self, space: Space | str, principal: Principal) -> SpaceRole | None:
        """Return the principal's role inside a space, or None without access."""
        if isinstance(space, str):
            resolved = self._repositories.spaces.get(space)
            if resolved is None:
                logger.debug("Space %s not found while resolving role for %s", space, principal.subject)
                return None
            space = resolved
        if not principal.belongs_to(space.company_id):
            return None
        if self._bypasses_spaces(principal):
            return SpaceRole.SPACE_MANAGER
        member = self._repositories.space_members.find(space.id, principal.subject)
        if member is None or not member.is_active:
            return None
        return self._combine(principal.role, member.role_in_space)

    def can_view_space(self, space: Space | str, principal: Principal) -> bool:
        return self.effective_space_role(space, principal) is not None

    def can_manage_space(self, space: Space | str, principal: Principal) -> bool:
        return self.effective_space_role(space, principal) == SpaceRole.SPACE_MANAGER

    def visible_spaces(self, company_id: str, principal: Principal) -> list[Space]:
        """Return the spaces of a company the principal can open, in storage order."""
        roles = self.space_roles(company_id, principal)
        return [space for space in self._repositories.spaces.list(company_id) if space.id in roles]

    def _page_visible(self, page: Page, principal: Principal, roles: SpaceRoles) -> bool:
        role = self._role_in(page.space_id, page.company_id, principal, roles)
        if role is None:
            return False
        return page.status == PageStatus.PUBLISHED or role == SpaceRole.SPACE_MANAGER

    def can_view_page(self, page: Page, principal: Principal) -> bool:
        """Published pages for anyone in the space; drafts for its managers."""
        return self._page_visible(page, principal, self._roles_for(page.company_id, principal))

    def can_edit_page(self, page: Page, principal: Principal) -> bool:
        roles = self._roles_for(page.company_id, principal)
        return self._role_in(page.space_id, page.company_id, principal, roles) == SpaceRole.SPACE_MANAGER

    def can_comment_on_page(self, page: Page, principal: Principal) -> bool:
        """Viewers read but do not comment."""
        return principal.role != RoleType.VIEWER and self.can_view_page(page, principal)

    def visible_pages(self, company_id: str, principal: Principal) -> list[Page]:
        roles = self._roles_for(company_id, principal)
        return [page for page in self._repositories.pages.list(company_id) if self._page_visible(page, principal, roles)]

    def _document_visible(self, document: DocumentItem, principal: Principal, roles: SpaceRoles) -> bool:
        role = self._role_in(document.space_id, document.company_id, principal, roles)
        if role is None:
            return False
        return document.is_active or role == SpaceRole.SPACE_MANAGER

    def can_view_document(self, document: DocumentItem, principal: Principal) -> bool:
        """Active documents for anyone in the space; inactive ones for its managers."""
        return self._document_visible(document, principal, self._roles_for(document.company_id, principal))

    def can_edit_document(self, document: DocumentItem, principal: Principal) -> bool:
        roles = self._roles_for(document.company_id, principal)
        return self._role_in(document.space_id, document.company_id, principal, roles) == SpaceRole.SPACE_MANAGER

    def visible_documents(self, company_id: str, principal: Principal) -> list[DocumentItem]:
        roles = self._roles_for(company_id, principal)
        return [
            document
            for document in self._repositories.documents.list(company_id)
            if self._document_visible(document, principal, roles)
        ]

    def _announcement_editable(self, announcement: Announcement, principal: Principal, roles: SpaceRoles) -> bool:
        if not principal.belongs_to(announcement.company_id):
            return False
        if self._bypasses_spaces(principal):
            return True
        if announcement.is_company_wide:
            return False
        return roles.get(announcement.space_id) == SpaceRole.SPACE_MANAGER

    def _announcement_visible(self, announcement: Announcement, principal: Principal, roles: SpaceRoles) -> bool:
        if not principal.belongs_to(announcement.company_id):
            return False
        if not announcement.is_active:
            return self._announcement_editable(announcement, principal, roles)
        if announcement.is_company_wide:
            return True
        return self._role_in(announcement.space_id, announcement.company_id, principal, roles) is not None

    def can_edit_announcement(self, announcement: Announcement, principal: Principal) -> bool:
        """Space managers edit their space's announcements; company-wide ones are admin only."""
        return self._announcement_editable(announcement, principal, self._roles_for(announcement.company_id, principal))

    def can_view_announcement(self, announcement: Announcement, principal: Principal) -> bool:
        return self._announcement_visible(announcement, principal, self._roles_for(announcement.company_id, principal))

    def visible_announcements(self, company_id: str, principal: Principal) -> list[Announcement]:
        """Return visible announcements, pinned first, then newest first."""
        roles = self._roles_for(company_id, principal)
        visible = [
            announcement
            for announcement in self._repositories.announcements.list(company_id)
            if self._announcement_visible(announcement, principal, roles)
        ]
        visible.sort(key=lambda announcement: announcement.created_on, reverse=True)
        visible.sort(key=lambda announcement: not announcement.is_pinned)
        return visible

    def _event_editable(self, event: Event, principal: Principal, roles: SpaceRoles) -> bool:
        if not principal.belongs_to(event.company_id):
            return False
        if self._bypasses_spaces(principal):
            return True
        return bool(event.space_id) and roles.get(event.space_id) == SpaceRole.SPACE_MANAGER

    def _event_visible(self, event: Event, principal: Principal, roles: SpaceRoles) -> bool:
        if not principal.belongs_to(event.company_id):
            return False
        if not event.is_active:
            return self._event_editable(event, principal, roles)
        if self._bypasses_spaces(principal) or event.is_public:
            return True
        return bool(event.space_id) and event.space_id in roles

    def can_edit_event(self, event: Event, principal: Principal) -> bool:
        return self._event_editable(event, principal, self._roles_for(event.company_id, principal))

    def can_view_event(self, event: Event, principal: Principal) -> bool:
        return self._event_visible(event, principal, self._roles_for(event.company_id, principal))

    def visible_events(self, company_id: str, principal: Principal) -> list[Event]:
        """Return visible events ordered by start time."""
        roles = self._roles_for(company_id, principal)
        visible = [event for event in self._repositories.events.list(company_id) if self._event_visible(event, principal, roles)]
        return sorted(visible, key=lambda event: event.start_date_time)

    def can_manage_knowledge_base(self, company_id: str, principal: Principal) -> bool:
        return principal.belongs_to(company_id) and self._bypasses_spaces(principal)

    def can_view_knowledge_article(self, article: KnowledgeArticle, principal: Principal) -> bool:
        if not principal.belongs_to(article.company_id):
            return False
        return article.is_active or self._bypasses_spaces(principal)

    def visible_knowledge_articles(self, company_id: str, principal: Principal) -> list[KnowledgeArticle]:
        """Return visible articles, featured first."""
        articles = [
            article
            for article in self._repositories.knowledge_articles.list(company_id)
            if self.can_view_knowledge_article(article, principal)
        ]
        return sorted(articles, key=lambda article: not article.is_featured)

    def can_administer_company(self, company_id: str, principal: Principal) -> bool:
        """Company settings, users, departments, templates and quick links."""
        return principal.belongs_to(company_id) and self._bypasses_spaces(principal)

    def filter_pages(self, pages: Iterable[Page], principal: Principal) -> list[Page]:
        """Filter an arbitrary page list, computing membership once per company."""
        cache: dict[str, SpaceRoles] = {}
        visible = []
        for page in pages:
            if page.company_id not in cache:
                cache[page.company_id] = self._roles_for(page.company_id, principal)
            if self._page_visible(page, principal, cache[page.company_id]):
                visible.append(page)
        return visible
