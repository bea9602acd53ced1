"""Repositories for spaces and their membership rows."""

from __future__ import annotations

from intranet_core_api.models.space import Space, SpaceMember, SpaceRole
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.storage_keys import StorageKey


def strongest(members: list[SpaceMember]) -> SpaceMember | None:
    """Return the manager row if there is one, else the first row."""
    if not members:
        return None
    return next((member for member in members if member.role_in_space == SpaceRole.SPACE_MANAGER), members[0])


class SpaceRepository(Repository[Space]):
    """Spaces are removed outright when deleted."""

    model = Space
    storage_key = StorageKey.SPACES
    timestamp_field = "created_at"
    active_field = None
    allow_hard_delete = True


class SpaceMemberRepository(Repository[SpaceMember]):
    """Join rows between spaces and users; scoped through the space, not the company.

    A (space, user) pair may hold several rows when a user was added again
    instead of being reactivated. Lookups prefer active rows and, among
    those, the manager role.
    """

    model = SpaceMember
    storage_key = StorageKey.SPACE_MEMBERS
    company_field = None

    def for_space(self, space_id: str) -> list[SpaceMember]:
        """Return all membership rows of a space, active or not."""
        return [member for member in self._load() if member.space_id == space_id]

    def for_user(self, user_id: str, active_only: bool = True) -> list[SpaceMember]:
        """Return a user's membership rows."""
        return [
            member
            for member in self._load()
            if member.user_id == user_id and (member.is_active or not active_only)
        ]

    def for_pair(self, space_id: str, user_id: str) -> list[SpaceMember]:
        return [member for member in self._load() if member.space_id == space_id and member.user_id == user_id]

    def find(self, space_id: str, user_id: str) -> SpaceMember | None:
        """Return the row that decides access for a (space, user) pair.

        The strongest active row wins; without one, the strongest inactive row
        is returned so it can be reactivated.
        """
        rows = self.for_pair(space_id, user_id)
        return strongest([member for member in rows if member.is_active]) or strongest(rows)
