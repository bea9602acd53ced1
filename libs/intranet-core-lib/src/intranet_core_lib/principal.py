"""Principal model passed explicitly to every authorization call."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class RoleType(StrEnum):
    """Company-wide privilege levels, lowest first."""

    VIEWER = "Viewer"
    MEMBER = "Member"
    SPACE_MANAGER = "SpaceManager"
    COMPANY_ADMIN = "CompanyAdmin"
    SUPER_ADMIN = "SuperAdmin"

    @property
    def rank(self) -> int:
        """Return the position of the role in the privilege order."""
        return _ROLE_ORDER.index(self)


_ROLE_ORDER = [
    RoleType.VIEWER,
    RoleType.MEMBER,
    RoleType.SPACE_MANAGER,
    RoleType.COMPANY_ADMIN,
    RoleType.SUPER_ADMIN,
]


class Principal(BaseModel):
    """Resolved identity of the signed-in user."""

    subject: str
    company_id: str
    role: RoleType = RoleType.MEMBER
    email: str | None = None
    full_name: str | None = None

    @property
    def is_super_admin(self) -> bool:
        """Return whether the principal operates across companies."""
        return self.role == RoleType.SUPER_ADMIN

    @property
    def is_company_admin(self) -> bool:
        """Return whether the principal administers its own company."""
        return self.role == RoleType.COMPANY_ADMIN

    def belongs_to(self, company_id: str | None) -> bool:
        """Return whether the principal may act inside the given company."""
        return self.is_super_admin or (company_id is not None and company_id == self.company_id)
