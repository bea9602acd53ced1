"""Repositories for tenants, users and departments."""

from __future__ import annotations

from intranet_core_api.models.company import Company
from intranet_core_api.models.user import Department, User, UserStatus
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.storage_keys import StorageKey


class CompanyRepository(Repository[Company]):
    """Tenants are the root of the ownership tree and are not company scoped."""

    model = Company
    storage_key = StorageKey.COMPANIES
    company_field = None

    def get_by_invite_code(self, invite_code: str) -> Company | None:
        """Return the active company using an invite code."""
        code = invite_code.strip().upper()
        return next(
            (
                company
                for company in self._load()
                if company.is_active and company.invite_code and company.invite_code.upper() == code
            ),
            None,
        )


class UserRepository(Repository[User]):
    """Users; hard deletion is allowed for administrators."""

    model = User
    storage_key = StorageKey.USERS
    timestamp_field = None
    active_field = None
    allow_hard_delete = True

    def get_by_email(self, email: str) -> User | None:
        """Return the user with an email, compared case-insensitively across companies."""
        needle = email.strip().lower()
        return next((user for user in self._load() if user.email.lower() == needle), None)

    def count_active(self, company_id: str) -> int:
        """Return the number of active users in a company."""
        return self.count(company_id, lambda user: user.status == UserStatus.ACTIVE)

    def deactivate(self, user_id: str) -> User:
        """Mark the account inactive."""
        return self.patch(user_id, status=UserStatus.INACTIVE)


class DepartmentRepository(Repository[Department]):
    """Structured departments."""

    model = Department
    storage_key = StorageKey.DEPARTMENTS
