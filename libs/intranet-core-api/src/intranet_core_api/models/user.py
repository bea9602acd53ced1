"""User and department models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from intranet_core_api.models.base import IntranetRecord
from intranet_core_lib.principal import Principal, RoleType


class UserStatus(StrEnum):
    """Account state."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ThemePreference(StrEnum):
    """Preferred colour scheme."""

    LIGHT = "Light"
    DARK = "Dark"
    SYSTEM = "System"


class User(IntranetRecord):
    """A person belonging to exactly one company."""

    full_name: str
    email: str
    password_hash: str
    designation: str = ""
    department: str = ""
    department_id: str | None = None
    status: UserStatus = UserStatus.ACTIVE
    company_id: str
    role: RoleType = RoleType.MEMBER
    theme_preference: ThemePreference | None = None
    whatsapp_number: str | None = None

    @property
    def is_active(self) -> bool:
        """Return whether the account may sign in."""
        return self.status == UserStatus.ACTIVE

    def to_principal(self) -> Principal:
        """Return the principal acting on behalf of this user."""
        return Principal(
            subject=self.id,
            company_id=self.company_id,
            role=self.role,
            email=self.email,
            full_name=self.full_name,
        )


class Department(IntranetRecord):
    """Structured department a user may belong to."""

    company_id: str
    name: str
    description: str | None = None
    is_active: bool = True
    display_order: int | None = None
    created_on: datetime
