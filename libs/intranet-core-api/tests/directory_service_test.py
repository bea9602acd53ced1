import pytest

from intranet_core_lib.errors import AccessDeniedError, ErrorKind, PlanLimitExceededError, ValidationFailedError
from intranet_core_lib.principal import RoleType
from intranet_core_api.models import UserStatus
from mocks.tenant import Tenant, make_intranet


@pytest.fixture
def tenant() -> Tenant:
    return Tenant(make_intranet())


def test_admin_adds_user_and_member_cannot(tenant):
    directory = tenant.intranet.directory
    member = tenant.principal(tenant.user("Mia"))
    added = directory.add_user(tenant.principal(tenant.admin), tenant.id, "Ned", "ned@acme.test", "pw", designation="QA")
    assert added.designation == "QA"
    with pytest.raises(AccessDeniedError) as info:
        directory.add_user(member, tenant.id, "Zed", "zed@acme.test", "pw")
    assert info.value.kind == ErrorKind.ACCESS_DENIED


def test_add_user_rejects_duplicate_email(tenant):
    tenant.user("Mia")
    with pytest.raises(ValidationFailedError) as info:
        tenant.intranet.directory.add_user(tenant.principal(tenant.admin), tenant.id, "Mia 2", "MIA@acme.test", "pw")
    assert info.value.kind == ErrorKind.DUPLICATE_EMAIL


def test_only_super_admin_grants_super_admin(tenant):
    with pytest.raises(AccessDeniedError):
        tenant.intranet.directory.add_user(
            tenant.principal(tenant.admin), tenant.id, "Root", "root@acme.test", "pw", role=RoleType.SUPER_ADMIN
        )


def test_profile_self_edit_is_limited_to_profile_fields(tenant):
    directory = tenant.intranet.directory
    mia = tenant.user("Mia")
    updated = directory.update_user(tenant.principal(mia), mia.id, designation="Lead", whatsapp_number="+100")
    assert updated.designation == "Lead"
    with pytest.raises(ValidationFailedError):
        directory.update_user(tenant.principal(mia), mia.id, role=RoleType.COMPANY_ADMIN)
    with pytest.raises(AccessDeniedError):
        directory.update_user(tenant.principal(tenant.user("Olga")), mia.id, designation="Intern")


def test_admin_changes_role_and_email(tenant):
    mia = tenant.user("Mia")
    updated = tenant.intranet.directory.update_user(
        tenant.principal(tenant.admin), mia.id, role="SpaceManager", email="mia.new@acme.test"
    )
    assert updated.role == RoleType.SPACE_MANAGER
    assert tenant.repositories.users.get_by_email("mia.new@acme.test").id == mia.id


def test_deactivate_and_reactivate(tenant):
    directory = tenant.intranet.directory
    admin = tenant.principal(tenant.admin)
    mia = tenant.user("Mia")
    assert directory.deactivate_user(admin, mia.id).status == UserStatus.INACTIVE
    assert directory.directory(admin, tenant.id) == [tenant.admin]
    assert directory.reactivate_user(admin, mia.id).status == UserStatus.ACTIVE
    with pytest.raises(ValidationFailedError):
        directory.deactivate_user(admin, tenant.admin.id)


def test_reactivation_respects_seat_limit(tenant):
    directory = tenant.intranet.directory
    admin = tenant.principal(tenant.admin)
    dormant = tenant.user("Dormant", status=UserStatus.INACTIVE)
    tenant.users(49)
    with pytest.raises(PlanLimitExceededError):
        directory.reactivate_user(admin, dormant.id)


def test_delete_user_removes_row(tenant):
    mia = tenant.user("Mia")
    tenant.intranet.directory.delete_user(tenant.principal(tenant.admin), mia.id)
    assert tenant.repositories.users.get(mia.id) is None


def test_directory_search_and_department_filter(tenant):
    directory = tenant.intranet.directory
    admin = tenant.principal(tenant.admin)
    it = directory.create_department(admin, tenant.id, "IT")
    zoe = tenant.intranet.directory.add_user(admin, tenant.id, "Zoe", "zoe@acme.test", "pw", department_id=it.id)
    tenant.user("Bob")
    assert [user.full_name for user in directory.directory(admin, tenant.id)] == ["Admin", "Bob", "Zoe"]
    assert directory.directory(admin, tenant.id, query="zoe@") == [zoe]
    assert directory.directory(admin, tenant.id, department_id=it.id) == [zoe]

    outsider = Tenant(tenant.intranet, "Globex")
    assert directory.directory(outsider.principal(outsider.admin), tenant.id) == []


def test_departments_lifecycle(tenant):
    directory = tenant.intranet.directory
    admin = tenant.principal(tenant.admin)
    sales = directory.create_department(admin, tenant.id, "Sales", display_order=2)
    hr = directory.create_department(admin, tenant.id, "HR", display_order=1)
    assert directory.departments(tenant.id) == [hr, sales]
    with pytest.raises(ValidationFailedError):
        directory.create_department(admin, tenant.id, "sales")

    directory.update_department(admin, sales.id, description="Revenue")
    directory.deactivate_department(admin, hr.id)
    assert [department.name for department in directory.departments(tenant.id)] == ["Sales"]
    assert len(directory.departments(tenant.id, include_inactive=True)) == 2
    with pytest.raises(AccessDeniedError):
        directory.create_department(tenant.principal(tenant.user("Mia")), tenant.id, "Ops")
