"""Sign-in, company registration and invite based joining."""

from __future__ import annotations

import logging
from datetime import timedelta

from intranet_core_api.access.plan_gate import PlanGate
from intranet_core_api.auth.passwords import hash_password, verify_password
from intranet_core_api.auth.session_store import SessionStore
from intranet_core_api.models.company import Company, PlanType, RenewalStatus
from intranet_core_api.models.user import User, UserStatus
from intranet_core_api.repositories.registry import Repositories
from intranet_core_lib.errors import AuthenticationError, ErrorKind, ValidationFailedError
from intranet_core_lib.ids import generate_invite_code
from intranet_core_lib.impl.settings.plan_settings import PlanSettings
from intranet_core_lib.principal import Principal, RoleType

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_COLOR = "#dc2626"
DEFAULT_SECONDARY_COLOR = "#f9fafb"
DEFAULT_ACCENT_COLOR = "#b91c1c"


class AuthService:
    """Identity operations over the users and companies collections."""

    def __init__(
        self,
        repositories: Repositories,
        plan_gate: PlanGate,
        session_store: SessionStore,
        settings: PlanSettings | None = None,
    ):
        self._repositories = repositories
        self._plan_gate = plan_gate
        self._session_store = session_store
        self._settings = settings or PlanSettings()

    def login(self, email: str, password: str) -> Principal:
        """Check credentials, persist the session record and return the principal.

        Raises
        ------
        AuthenticationError
            With kind ``INVALID_CREDENTIALS`` for an unknown email or wrong
            password, ``ACCOUNT_INACTIVE`` for a deactivated user or company.
        """
        user = self._repositories.users.get_by_email(email)
        if user is None or not verify_password(user.password_hash, password):
            logger.info("Rejected sign-in for %s", email)
            raise AuthenticationError("Invalid email or password.")
        if not user.is_active:
            raise AuthenticationError("This account has been deactivated.", kind=ErrorKind.ACCOUNT_INACTIVE)
        company = self._repositories.companies.get(user.company_id)
        if company is not None and not company.is_active and user.role != RoleType.SUPER_ADMIN:
            raise AuthenticationError("This company account is inactive.", kind=ErrorKind.ACCOUNT_INACTIVE)
        principal = self._session_store.save(user)
        logger.info("User %s signed in to company %s", user.id, user.company_id)
        return principal

    def current_session(self) -> Principal | None:
        return self._session_store.load()

    def logout(self) -> None:
        principal = self._session_store.load()
        self._session_store.clear()
        if principal is not None:
            logger.info("User %s signed out", principal.subject)

    def _ensure_email_free(self, email: str) -> None:
        if self._repositories.users.get_by_email(email) is not None:
            raise ValidationFailedError("Email already exists.", kind=ErrorKind.DUPLICATE_EMAIL)

    def _unique_invite_code(self) -> str:
        code = generate_invite_code()
        while self._repositories.companies.get_by_invite_code(code) is not None:
            code = generate_invite_code()
        return code

    def register_company(
        self,
        company_name: str,
        admin_full_name: str,
        admin_email: str,
        password: str,
        plan_type: PlanType = PlanType.BASIC,
        logo_url: str = "",
        max_users: int | None = None,
    ) -> tuple[Company, User]:
        """Create a tenant with a subscription window and its first CompanyAdmin."""
        if not company_name.strip():
            raise ValidationFailedError("Company name is required.")
        if not password:
            raise ValidationFailedError("Password is required.")
        email = admin_email.strip()
        self._ensure_email_free(email)

        now = self._plan_gate.now()
        company = self._repositories.companies.create(
            company_name=company_name.strip(),
            logo_url=logo_url,
            primary_admin_email=email,
            created_on=now,
            invite_code=self._unique_invite_code(),
            primary_color=DEFAULT_PRIMARY_COLOR,
            secondary_color=DEFAULT_SECONDARY_COLOR,
            accent_color=DEFAULT_ACCENT_COLOR,
            home_title=f"Welcome to {company_name.strip()}",
            show_logo_in_header=True,
            plan_type=plan_type,
            is_active=True,
            max_users=self._settings.default_max_users if max_users is None else max_users,
            subscription_start_date=now,
            subscription_end_date=now + timedelta(days=self._settings.trial_days),
            is_subscription_active=True,
            renewal_status=RenewalStatus.ACTIVE,
        )
        admin = self._repositories.users.create(
            full_name=admin_full_name,
            email=email,
            password_hash=hash_password(password),
            designation="Administrator",
            department="Management",
            status=UserStatus.ACTIVE,
            company_id=company.id,
            role=RoleType.COMPANY_ADMIN,
        )
        logger.info("Registered company %s (%s) with admin %s", company.id, company.company_name, admin.id)
        return company, admin

    def verify_invite_code(self, invite_code: str) -> Company | None:
        """Return the active company using the code, if any."""
        if not invite_code or not invite_code.strip():
            return None
        return self._repositories.companies.get_by_invite_code(invite_code)

    def join_company(
        self,
        invite_code: str,
        full_name: str,
        email: str,
        password: str,
        designation: str = "",
        department: str = "",
    ) -> User:
        """Add a Member to the company behind an invite code, within the seat limit."""
        company = self.verify_invite_code(invite_code)
        if company is None:
            raise ValidationFailedError("Invalid invite code.")
        self._ensure_email_free(email)
        self._plan_gate.enforce_seat_limit(company, self._repositories.users.count_active(company.id))
        user = self._repositories.users.create(
            full_name=full_name,
            email=email.strip(),
            password_hash=hash_password(password),
            designation=designation,
            department=department,
            status=UserStatus.ACTIVE,
            company_id=company.id,
            role=RoleType.MEMBER,
        )
        logger.info("User %s joined company %s by invite", user.id, company.id)
        return user
