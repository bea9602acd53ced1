from datetime import datetime, timezone

import pytest

from intranet_core_api.services.custom_domain_service import CustomDomainService
from intranet_core_lib.errors import AccessDeniedError, ValidationFailedError
from intranet_core_lib.impl.settings.domain_settings import DomainSettings
from mocks.tenant import Tenant, make_intranet

FIXED = datetime(2026, 5, 4, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def tenant() -> Tenant:
    return Tenant(make_intranet())


@pytest.fixture
def service(tenant) -> CustomDomainService:
    return CustomDomainService(
        tenant.repositories,
        tenant.intranet.access,
        DomainSettings(verification_delay_seconds=0),
        clock=lambda: FIXED,
    )


def test_add_domain_issues_token(tenant, service):
    domain = service.add_domain(tenant.principal(tenant.admin), tenant.id, "  Intranet.Acme.COM ")
    assert domain.domain_name == "intranet.acme.com"
    assert domain.dns_verification_token == f"companyhub-verification-{tenant.id}-{int(FIXED.timestamp() * 1000)}"
    assert not domain.is_verified
    assert service.domains(tenant.principal(tenant.admin), tenant.id) == [domain]


@pytest.mark.parametrize("name", ["localhost", "-bad.example.com", "spaces in.com", "under_score.com"])
def test_add_domain_rejects_malformed_names(tenant, service, name):
    with pytest.raises(ValidationFailedError):
        service.add_domain(tenant.principal(tenant.admin), tenant.id, name)


def test_add_domain_rejects_duplicates_across_companies(tenant, service):
    service.add_domain(tenant.principal(tenant.admin), tenant.id, "intranet.acme.com")
    other = Tenant(tenant.intranet, "Globex")
    with pytest.raises(ValidationFailedError):
        service.add_domain(other.principal(other.admin), other.id, "intranet.acme.com")


def test_members_cannot_manage_domains(tenant, service):
    member = tenant.principal(tenant.user("Mia"))
    with pytest.raises(AccessDeniedError):
        service.add_domain(member, tenant.id, "intranet.acme.com")
    assert service.domains(member, tenant.id) == []


@pytest.mark.asyncio
async def test_verify_domain_records_outcome(tenant, service):
    admin = tenant.principal(tenant.admin)
    domain = service.add_domain(admin, tenant.id, "intranet.acme.com")
    verified = await service.verify_domain(admin, domain.id)
    assert verified.is_verified
    assert verified.verified_on == FIXED
    assert verified.last_check == FIXED


def test_delete_domain(tenant, service):
    admin = tenant.principal(tenant.admin)
    domain = service.add_domain(admin, tenant.id, "intranet.acme.com")
    service.delete_domain(admin, domain.id)
    assert service.domains(admin, tenant.id) == []
