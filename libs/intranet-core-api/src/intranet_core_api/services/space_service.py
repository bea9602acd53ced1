"""Spaces and their membership."""

from __future__ import annotations

import logging
from typing import Any

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import PlanGate
from intranet_core_api.models.engagement import ActionType, EntityRef, EntityType
from intranet_core_api.models.space import Space, SpaceMember, SpaceRole
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed, pick
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

_SPACE_FIELDS = {"space_name", "description", "cover_image_url"}


class SpaceService:
    """Creates spaces and manages who may open them."""

    def __init__(self, repositories: Repositories, access: IntranetAccessService, plan_gate: PlanGate):
        self._repositories = repositories
        self._access = access
        self._plan_gate = plan_gate

    def create_space(
        self,
        principal: Principal,
        company_id: str,
        space_name: str,
        description: str = "",
        cover_image_url: str | None = None,
    ) -> Space:
        """Create a space and make its creator an active SpaceManager member."""
        ensure_allowed(self._access.can_administer_company(company_id, principal), principal, "create spaces")
        if not space_name.strip():
            raise ValidationFailedError("Space name is required.")
        company = self._repositories.companies.require(company_id)
        self._plan_gate.enforce_space_limit(company, self._repositories.spaces.count(company_id))
        space = self._repositories.spaces.create(
            space_name=space_name.strip(),
            description=description,
            company_id=company_id,
            created_by=principal.subject,
            cover_image_url=cover_image_url,
        )
        self._repositories.space_members.create(
            space_id=space.id,
            user_id=principal.subject,
            role_in_space=SpaceRole.SPACE_MANAGER,
            is_active=True,
        )
        self._repositories.activity_logs.record(
            company_id, principal.subject, EntityRef.space(space.id), ActionType.CREATED, f"Created space {space.space_name}"
        )
        logger.info("Space %s created in company %s by %s", space.id, company_id, principal.subject)
        return space

    def update_space(self, principal: Principal, space_id: str, **changes: Any) -> Space:
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_manage_space(space, principal), principal, "update this space")
        updated = self._repositories.spaces.update(space.model_copy(update=pick(changes, _SPACE_FIELDS)))
        self._repositories.activity_logs.record(
            space.company_id, principal.subject, EntityRef.space(space_id), ActionType.UPDATED
        )
        return updated

    def delete_space(self, principal: Principal, space_id: str) -> None:
        """Remove a space; content that pointed at it stays as dangling rows."""
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_administer_company(space.company_id, principal), principal, "delete spaces")
        self._repositories.spaces.delete(space_id)
        self._repositories.activity_logs.record(
            space.company_id, principal.subject, EntityRef.space(space_id), ActionType.DELETED, f"Deleted space {space.space_name}"
        )
        logger.info("Space %s deleted by %s", space_id, principal.subject)

    def members(self, principal: Principal, space_id: str, include_inactive: bool = False) -> list[SpaceMember]:
        space = self._repositories.spaces.require(space_id)
        if not self._access.can_view_space(space, principal):
            return []
        return [
            member
            for member in self._repositories.space_members.for_space(space_id)
            if include_inactive or member.is_active
        ]

    def add_member(
        self,
        principal: Principal,
        space_id: str,
        user_id: str,
        role_in_space: SpaceRole = SpaceRole.MEMBER,
    ) -> SpaceMember:
        """Grant a user access; an existing row for the pair is reactivated."""
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_manage_space(space, principal), principal, "manage space members")
        user = self._repositories.users.require(user_id)
        if user.company_id != space.company_id:
            raise ValidationFailedError("Users can only join spaces of their own company.")
        existing = self._repositories.space_members.find(space_id, user_id)
        if existing is not None:
            member = self._repositories.space_members.update(
                existing.model_copy(update={"is_active": True, "role_in_space": role_in_space})
            )
        else:
            member = self._repositories.space_members.create(
                space_id=space_id, user_id=user_id, role_in_space=role_in_space, is_active=True
            )
        self._repositories.notifications.create(
            company_id=space.company_id,
            user_id=user_id,
            title="Added to space",
            message=f"You now have access to {space.space_name}.",
            entity_type=EntityType.SPACE,
            entity_id=space_id,
        )
        logger.info("User %s added to space %s as %s by %s", user_id, space_id, role_in_space, principal.subject)
        return member

    def update_member_role(self, principal: Principal, space_id: str, user_id: str, role_in_space: SpaceRole) -> SpaceMember:
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_manage_space(space, principal), principal, "manage space members")
        member = self._repositories.space_members.find(space_id, user_id)
        if member is None:
            raise ValidationFailedError("User is not a member of this space.")
        logger.info("User %s role in space %s set to %s", user_id, space_id, role_in_space)
        return self._repositories.space_members.update(member.model_copy(update={"role_in_space": role_in_space}))

    def remove_member(self, principal: Principal, space_id: str, user_id: str) -> SpaceMember:
        """Deactivate every active row for the pair; the rows themselves are kept."""
        space = self._repositories.spaces.require(space_id)
        ensure_allowed(self._access.can_manage_space(space, principal), principal, "manage space members")
        member = self._repositories.space_members.find(space_id, user_id)
        if member is None:
            raise ValidationFailedError("User is not a member of this space.")
        for row in self._repositories.space_members.for_pair(space_id, user_id):
            if row.is_active and row.id != member.id:
                self._repositories.space_members.soft_delete(row.id)
        logger.info("User %s removed from space %s by %s", user_id, space_id, principal.subject)
        return self._repositories.space_members.soft_delete(member.id)
