"""Custom host names and their (simulated) DNS verification."""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime
from typing import Callable

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.models.base import utc_now
from intranet_core_api.models.billing import CustomDomain
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.impl.settings.domain_settings import DomainSettings
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

_DOMAIN_PATTERN = re.compile(r"^(?!-)[a-z0-9-]+(\.[a-z0-9-]+)+$")


class CustomDomainService:
    """Adds, verifies and removes a company's custom domains."""

    def __init__(
        self,
        repositories: Repositories,
        access: IntranetAccessService,
        settings: DomainSettings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repositories = repositories
        self._access = access
        self._settings = settings or DomainSettings()
        self._clock = clock

    def domains(self, principal: Principal, company_id: str) -> list[CustomDomain]:
        if not self._access.can_administer_company(company_id, principal):
            return []
        return self._repositories.custom_domains.list(company_id)

    def add_domain(self, principal: Principal, company_id: str, domain_name: str) -> CustomDomain:
        """Register a host name and issue its verification token."""
        ensure_allowed(self._access.can_administer_company(company_id, principal), principal, "manage custom domains")
        name = domain_name.strip().lower()
        if "." not in name or not _DOMAIN_PATTERN.match(name):
            raise ValidationFailedError(f"'{domain_name}' is not a valid domain name.")
        if self._repositories.custom_domains.get_by_name(name) is not None:
            raise ValidationFailedError(f"Domain '{name}' is already registered.")
        now = self._clock()
        domain = self._repositories.custom_domains.create(
            company_id=company_id,
            domain_name=name,
            dns_verification_token=f"{self._settings.token_prefix}-{company_id}-{int(now.timestamp() * 1000)}",
            is_verified=False,
            created_on=now,
        )
        logger.info("Custom domain %s added for company %s", name, company_id)
        return domain

    async def verify_domain(self, principal: Principal, domain_id: str) -> CustomDomain:
        """Run the DNS check and record its outcome."""
        domain = self._repositories.custom_domains.require(domain_id)
        ensure_allowed(
            self._access.can_administer_company(domain.company_id, principal), principal, "manage custom domains"
        )
        await asyncio.sleep(self._settings.verification_delay_seconds)
        now = self._clock()
        verified = self._repositories.custom_domains.patch(domain_id, is_verified=True, verified_on=now, last_check=now)
        logger.info("Custom domain %s verified", verified.domain_name)
        return verified

    def delete_domain(self, principal: Principal, domain_id: str) -> None:
        domain = self._repositories.custom_domains.require(domain_id)
        ensure_allowed(
            self._access.can_administer_company(domain.company_id, principal), principal, "manage custom domains"
        )
        self._repositories.custom_domains.delete(domain_id)
        logger.info("Custom domain %s removed", domain.domain_name)
