"""User accounts, the people directory and departments."""

from __future__ import annotations

import logging
from typing import Any

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import PlanGate
from intranet_core_api.auth.passwords import hash_password
from intranet_core_api.models.user import Department, User, UserStatus
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed, pick
from intranet_core_lib.errors import ErrorKind, ValidationFailedError
from intranet_core_lib.principal import Principal, RoleType

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {"full_name", "designation", "department", "department_id", "theme_preference", "whatsapp_number"}
_ADMIN_FIELDS = _PROFILE_FIELDS | {"email", "role", "password"}
_DEPARTMENT_FIELDS = {"name", "description", "display_order", "is_active"}


class DirectoryService:
    """Administers users and departments of a company."""

    def __init__(self, repositories: Repositories, access: IntranetAccessService, plan_gate: PlanGate):
        self._repositories = repositories
        self._access = access
        self._plan_gate = plan_gate

    def _ensure_email_free(self, email: str, user_id: str | None = None) -> None:
        existing = self._repositories.users.get_by_email(email)
        if existing is not None and existing.id != user_id:
            raise ValidationFailedError("Email already exists.", kind=ErrorKind.DUPLICATE_EMAIL)

    @staticmethod
    def _ensure_role_grantable(principal: Principal, role: RoleType) -> None:
        ensure_allowed(
            role != RoleType.SUPER_ADMIN or principal.is_super_admin,
            principal,
            "grant the SuperAdmin role",
        )

    def add_user(
        self,
        principal: Principal,
        company_id: str,
        full_name: str,
        email: str,
        password: str,
        role: RoleType = RoleType.MEMBER,
        designation: str = "",
        department: str = "",
        department_id: str | None = None,
    ) -> User:
        """Create an active user inside the company's seat allowance.

        Raises
        ------
        AccessDeniedError
            If the principal does not administer the company.
        ValidationFailedError
            With kind ``DUPLICATE_EMAIL`` when the email is taken.
        PlanLimitExceededError
            With kind ``SEAT_LIMIT_EXCEEDED`` when the plan is full.
        """
        ensure_allowed(self._access.can_administer_company(company_id, principal), principal, "add users")
        self._ensure_role_grantable(principal, role)
        if not email.strip() or not password:
            raise ValidationFailedError("Email and password are required.")
        self._ensure_email_free(email)
        company = self._repositories.companies.require(company_id)
        self._plan_gate.enforce_seat_limit(company, self._repositories.users.count_active(company_id))
        user = self._repositories.users.create(
            full_name=full_name,
            email=email.strip(),
            password_hash=hash_password(password),
            designation=designation,
            department=department,
            department_id=department_id,
            status=UserStatus.ACTIVE,
            company_id=company_id,
            role=role,
        )
        logger.info("User %s added to company %s by %s", user.id, company_id, principal.subject)
        return user

    def update_user(self, principal: Principal, user_id: str, **changes: Any) -> User:
        """Update a user; people may edit their own profile fields, admins everything."""
        user = self._repositories.users.require(user_id)
        is_admin = self._access.can_administer_company(user.company_id, principal)
        ensure_allowed(is_admin or principal.subject == user_id, principal, "update this user")
        changes = pick(changes, _ADMIN_FIELDS if is_admin else _PROFILE_FIELDS)
        if "email" in changes:
            self._ensure_email_free(changes["email"], user_id)
        if "role" in changes:
            changes["role"] = RoleType(changes["role"])
            self._ensure_role_grantable(principal, changes["role"])
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))
        return self._repositories.users.update(user.model_copy(update=changes))

    def deactivate_user(self, principal: Principal, user_id: str) -> User:
        user = self._repositories.users.require(user_id)
        ensure_allowed(self._access.can_administer_company(user.company_id, principal), principal, "deactivate users")
        if user_id == principal.subject:
            raise ValidationFailedError("You cannot deactivate your own account.")
        logger.info("User %s deactivated by %s", user_id, principal.subject)
        return self._repositories.users.deactivate(user_id)

    def reactivate_user(self, principal: Principal, user_id: str) -> User:
        """Reactivate a user; the seat counts against the plan again."""
        user = self._repositories.users.require(user_id)
        ensure_allowed(self._access.can_administer_company(user.company_id, principal), principal, "reactivate users")
        if user.is_active:
            return user
        company = self._repositories.companies.require(user.company_id)
        self._plan_gate.enforce_seat_limit(company, self._repositories.users.count_active(user.company_id))
        logger.info("User %s reactivated by %s", user_id, principal.subject)
        return self._repositories.users.patch(user_id, status=UserStatus.ACTIVE)

    def delete_user(self, principal: Principal, user_id: str) -> None:
        user = self._repositories.users.require(user_id)
        ensure_allowed(self._access.can_administer_company(user.company_id, principal), principal, "delete users")
        if user_id == principal.subject:
            raise ValidationFailedError("You cannot delete your own account.")
        self._repositories.users.delete(user_id)
        logger.info("User %s deleted by %s", user_id, principal.subject)

    def directory(
        self,
        principal: Principal,
        company_id: str,
        query: str = "",
        department_id: str | None = None,
    ) -> list[User]:
        """Return active colleagues matching the query, sorted by name."""
        if not principal.belongs_to(company_id):
            return []
        needle = query.strip().lower()
        people = []
        for user in self._repositories.users.list(company_id):
            if not user.is_active:
                continue
            if department_id and user.department_id != department_id:
                continue
            haystack = " ".join([user.full_name, user.email, user.designation, user.department]).lower()
            if needle and needle not in haystack:
                continue
            people.append(user)
        return sorted(people, key=lambda user: user.full_name.lower())

    def departments(self, company_id: str, include_inactive: bool = False) -> list[Department]:
        rows = [
            department
            for department in self._repositories.departments.list(company_id)
            if include_inactive or department.is_active
        ]
        return sorted(rows, key=lambda department: (department.display_order or 0, department.name.lower()))

    def create_department(
        self,
        principal: Principal,
        company_id: str,
        name: str,
        description: str | None = None,
        display_order: int | None = None,
    ) -> Department:
        ensure_allowed(self._access.can_administer_company(company_id, principal), principal, "manage departments")
        if not name.strip():
            raise ValidationFailedError("Department name is required.")
        duplicate = any(
            department.name.lower() == name.strip().lower()
            for department in self._repositories.departments.list(company_id)
            if department.is_active
        )
        if duplicate:
            raise ValidationFailedError(f"Department '{name.strip()}' already exists.")
        return self._repositories.departments.create(
            company_id=company_id,
            name=name.strip(),
            description=description,
            display_order=display_order,
            is_active=True,
        )

    def update_department(self, principal: Principal, department_id: str, **changes: Any) -> Department:
        department = self._repositories.departments.require(department_id)
        ensure_allowed(
            self._access.can_administer_company(department.company_id, principal), principal, "manage departments"
        )
        return self._repositories.departments.update(department.model_copy(update=pick(changes, _DEPARTMENT_FIELDS)))

    def deactivate_department(self, principal: Principal, department_id: str) -> Department:
        department = self._repositories.departments.require(department_id)
        ensure_allowed(
            self._access.can_administer_company(department.company_id, principal), principal, "manage departments"
        )
        return self._repositories.departments.soft_delete(department_id)
