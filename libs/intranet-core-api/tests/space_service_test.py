import pytest

from intranet_core_api.models import ActionType, EntityType, PlanType, SpaceRole
from intranet_core_lib.errors import AccessDeniedError, ErrorKind, PlanLimitExceededError, ValidationFailedError
from mocks.tenant import Tenant, make_intranet


@pytest.fixture
def tenant() -> Tenant:
    return Tenant(make_intranet())


def test_create_space_makes_creator_manager_and_logs(tenant):
    admin = tenant.principal(tenant.admin)
    space = tenant.intranet.spaces.create_space(admin, tenant.id, "  Engineering ", "Builders")

    assert space.space_name == "Engineering"
    members = tenant.intranet.spaces.members(admin, space.id)
    assert [(member.user_id, member.role_in_space) for member in members] == [
        (tenant.admin.id, SpaceRole.SPACE_MANAGER)
    ]
    log = tenant.repositories.activity_logs.query(tenant.id, entity_type=EntityType.SPACE)[0]
    assert log.entity_id == space.id
    assert log.action_type == ActionType.CREATED


def test_members_cannot_create_spaces(tenant):
    with pytest.raises(AccessDeniedError):
        tenant.intranet.spaces.create_space(tenant.principal(tenant.user("Mia")), tenant.id, "Rogue")


def test_basic_plan_caps_spaces_at_five(tenant):
    admin = tenant.principal(tenant.admin)
    for index in range(5):
        tenant.intranet.spaces.create_space(admin, tenant.id, f"Space {index}")
    with pytest.raises(PlanLimitExceededError) as info:
        tenant.intranet.spaces.create_space(admin, tenant.id, "One too many")
    assert info.value.kind == ErrorKind.SPACE_LIMIT_EXCEEDED
    assert len(tenant.repositories.spaces.list(tenant.id)) == 5


def test_pro_plan_has_no_space_cap():
    tenant = Tenant(make_intranet(), plan_type=PlanType.PRO)
    admin = tenant.principal(tenant.admin)
    for index in range(6):
        tenant.intranet.spaces.create_space(admin, tenant.id, f"Space {index}")
    assert len(tenant.repositories.spaces.list(tenant.id)) == 6


def test_add_member_notifies_and_reactivates_existing_row(tenant):
    spaces = tenant.intranet.spaces
    admin = tenant.principal(tenant.admin)
    space = tenant.space("Finance")
    mia = tenant.user("Mia")

    spaces.add_member(admin, space.id, mia.id)
    spaces.remove_member(admin, space.id, mia.id)
    assert not tenant.intranet.access.can_view_space(space, tenant.principal(mia))
    spaces.add_member(admin, space.id, mia.id, SpaceRole.SPACE_MANAGER)

    rows = tenant.repositories.space_members.for_space(space.id)
    assert len(rows) == 1
    assert rows[0].is_active and rows[0].role_in_space == SpaceRole.SPACE_MANAGER
    notifications = tenant.repositories.notifications.for_user(mia.id)
    assert len(notifications) == 2
    assert notifications[0].entity_type == EntityType.SPACE
    assert notifications[0].entity_id == space.id


def test_space_manager_manages_members_but_plain_member_cannot(tenant):
    spaces = tenant.intranet.spaces
    space = tenant.space()
    manager, member, newcomer = tenant.user("Max"), tenant.user("Mia"), tenant.user("Ned")
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    tenant.member(space, member)

    spaces.add_member(tenant.principal(manager), space.id, newcomer.id)
    spaces.update_member_role(tenant.principal(manager), space.id, newcomer.id, SpaceRole.SPACE_MANAGER)
    with pytest.raises(AccessDeniedError):
        spaces.remove_member(tenant.principal(member), space.id, newcomer.id)
    with pytest.raises(ValidationFailedError):
        spaces.update_member_role(tenant.principal(manager), space.id, tenant.admin.id, SpaceRole.MEMBER)


def test_cannot_add_user_from_other_company(tenant):
    other = Tenant(tenant.intranet, "Globex")
    with pytest.raises(ValidationFailedError):
        tenant.intranet.spaces.add_member(tenant.principal(tenant.admin), tenant.space().id, other.admin.id)


def test_update_and_delete_space(tenant):
    spaces = tenant.intranet.spaces
    admin = tenant.principal(tenant.admin)
    space = spaces.create_space(admin, tenant.id, "Ops")
    page = tenant.page(space)

    assert spaces.update_space(admin, space.id, description="Runbooks").description == "Runbooks"
    with pytest.raises(ValidationFailedError):
        spaces.update_space(admin, space.id, company_id="elsewhere")

    spaces.delete_space(admin, space.id)
    assert tenant.repositories.spaces.get(space.id) is None
    assert tenant.repositories.pages.get(page.id) is not None
    actions = [log.action_type for log in tenant.repositories.activity_logs.query(tenant.id, entity_id=space.id)]
    assert ActionType.DELETED in actions


def test_duplicate_membership_rows_are_removed_together(tenant):
    spaces = tenant.intranet.spaces
    admin = tenant.principal(tenant.admin)
    space = tenant.space("Finance")
    mia = tenant.user("Mia")
    tenant.member(space, mia, is_active=False)
    tenant.member(space, mia)
    tenant.member(space, mia, SpaceRole.SPACE_MANAGER)
    assert tenant.intranet.access.can_manage_space(space, tenant.principal(mia))

    spaces.remove_member(admin, space.id, mia.id)

    assert not any(row.is_active for row in tenant.repositories.space_members.for_pair(space.id, mia.id))
    assert not tenant.intranet.access.can_view_space(space, tenant.principal(mia))
    assert tenant.intranet.access.visible_spaces(tenant.id, tenant.principal(mia)) == []


def test_duplicate_membership_rows_notify_once(tenant):
    admin = tenant.principal(tenant.admin)
    space = tenant.space("Finance")
    mia = tenant.user("Mia")
    tenant.member(space, mia)
    tenant.member(space, mia)
    draft = tenant.intranet.content.create_page(admin, space.id, "Budget", "Numbers")

    tenant.intranet.content.publish_page(admin, draft.id)

    assert len(tenant.repositories.notifications.for_user(mia.id)) == 1
