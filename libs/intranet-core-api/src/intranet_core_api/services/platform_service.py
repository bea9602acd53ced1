"""Platform console: tenants as seen by super administrators."""

from __future__ import annotations

import logging
from typing import Any

from intranet_core_api.auth.auth_service import AuthService
from intranet_core_api.models.company import Company, PlanType
from intranet_core_api.models.user import User
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed, pick
from intranet_core_api.views.company_stats import CompanyStats, company_stats
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

_COMPANY_CONSOLE_FIELDS = {"plan_type", "is_active", "max_users", "notes"}


class PlatformService:
    """Lists, creates and reconfigures companies across the platform.

    Plan and activity changes made here are what the plan gate and the
    inactive-company login check read, so every call requires a SuperAdmin.
    """

    def __init__(self, repositories: Repositories, auth: AuthService):
        self._repositories = repositories
        self._auth = auth

    @staticmethod
    def _ensure_operator(principal: Principal, action: str) -> None:
        ensure_allowed(principal.is_super_admin, principal, action)

    def list_companies(
        self,
        principal: Principal,
        plan_type: PlanType | None = None,
        is_active: bool | None = None,
        query: str = "",
    ) -> list[Company]:
        """Return every company, optionally filtered by plan, status and a name or email fragment."""
        self._ensure_operator(principal, "list companies")
        needle = query.strip().lower()
        return [
            company
            for company in self._repositories.companies.all()
            if (plan_type is None or company.plan_type == plan_type)
            and (is_active is None or company.is_active == is_active)
            and (not needle or needle in company.company_name.lower() or needle in company.primary_admin_email.lower())
        ]

    def create_company(
        self,
        principal: Principal,
        company_name: str,
        admin_full_name: str,
        admin_email: str,
        password: str,
        plan_type: PlanType = PlanType.BASIC,
        max_users: int = 10,
        logo_url: str = "",
    ) -> tuple[Company, User]:
        self._ensure_operator(principal, "create companies")
        if max_users < 1:
            raise ValidationFailedError("A company needs room for at least one user.")
        company, admin = self._auth.register_company(
            company_name,
            admin_full_name,
            admin_email,
            password,
            plan_type=plan_type,
            logo_url=logo_url,
            max_users=max_users,
        )
        logger.info("Company %s created on the %s plan by %s", company.id, plan_type, principal.subject)
        return company, admin

    def update_company(self, principal: Principal, company_id: str, **changes: Any) -> Company:
        """Change plan, status, seat count or notes of a company."""
        self._ensure_operator(principal, "manage companies")
        changes = pick(changes, _COMPANY_CONSOLE_FIELDS)
        if changes.get("max_users") is not None and changes["max_users"] < 1:
            raise ValidationFailedError("A company needs room for at least one user.")
        company = self._repositories.companies.require(company_id)
        updated = self._repositories.companies.update(company.model_copy(update=changes))
        logger.info("Company %s updated by %s: %s", company_id, principal.subject, ", ".join(sorted(changes)))
        return updated

    def stats(self, principal: Principal, company_id: str) -> CompanyStats:
        self._ensure_operator(principal, "view company statistics")
        self._repositories.companies.require(company_id)
        return company_stats(self._repositories, company_id)
