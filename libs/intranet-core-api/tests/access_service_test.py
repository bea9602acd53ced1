import pytest

from intranet_core_api.models import AnnouncementAudience, PageStatus, SpaceRole
from intranet_core_lib.principal import RoleType
from intranet_core_lib.store.storage_keys import StorageKey
from mocks.tenant import Tenant, make_intranet


@pytest.fixture
def tenant() -> Tenant:
    return Tenant(make_intranet())


def test_company_admin_manages_every_space_without_membership(tenant):
    access = tenant.intranet.access
    spaces = [tenant.space("Finance"), tenant.space("HR")]
    admin = tenant.principal(tenant.admin)
    assert all(access.effective_space_role(space, admin) == SpaceRole.SPACE_MANAGER for space in spaces)
    assert access.effective_space_role(spaces[0].id, admin) == SpaceRole.SPACE_MANAGER


def test_effective_role_follows_active_membership(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member, manager, outsider = tenant.user("Mia"), tenant.user("Max"), tenant.user("Olga")
    tenant.member(space, member)
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    assert access.effective_space_role(space, tenant.principal(member)) == SpaceRole.MEMBER
    assert access.effective_space_role(space, tenant.principal(manager)) == SpaceRole.SPACE_MANAGER
    assert access.effective_space_role(space, tenant.principal(outsider)) is None


def test_global_space_manager_role_lifts_plain_membership(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    lead = tenant.user("Lea", RoleType.SPACE_MANAGER)
    assert access.effective_space_role(space, tenant.principal(lead)) is None
    tenant.member(space, lead)
    assert access.effective_space_role(space, tenant.principal(lead)) == SpaceRole.SPACE_MANAGER


def test_inactive_membership_is_excluded_from_visible_spaces(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    former = tenant.user("Fred")
    tenant.member(space, former, is_active=False)
    assert access.visible_spaces(tenant.id, tenant.principal(former)) == []
    assert not access.can_view_space(space, tenant.principal(former))
    assert access.visible_spaces(tenant.id, tenant.principal(tenant.admin)) == [space]


def test_draft_page_hidden_from_members_but_not_managers(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member, manager = tenant.user("Mia"), tenant.user("Max")
    tenant.member(space, member)
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    draft = tenant.page(space, "Plan", status=PageStatus.DRAFT)
    published = tenant.page(space, "Guide")

    assert not access.can_view_page(draft, tenant.principal(member))
    assert access.can_view_page(draft, tenant.principal(manager))
    assert access.can_view_page(draft, tenant.principal(tenant.admin))
    assert access.can_view_page(published, tenant.principal(member))
    assert access.visible_pages(tenant.id, tenant.principal(member)) == [published]


def test_edit_rights_require_manager_role(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member, manager = tenant.user("Mia"), tenant.user("Max")
    tenant.member(space, member)
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    page = tenant.page(space)
    document = tenant.document(space)
    assert not access.can_edit_page(page, tenant.principal(member))
    assert access.can_edit_page(page, tenant.principal(manager))
    assert not access.can_edit_document(document, tenant.principal(member))
    assert access.can_edit_document(document, tenant.principal(manager))


def test_viewer_reads_but_cannot_comment(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    viewer, member = tenant.user("Vic", RoleType.VIEWER), tenant.user("Mia")
    tenant.member(space, viewer)
    tenant.member(space, member)
    page = tenant.page(space)
    assert access.can_view_page(page, tenant.principal(viewer))
    assert not access.can_comment_on_page(page, tenant.principal(viewer))
    assert access.can_comment_on_page(page, tenant.principal(member))


def test_inactive_documents_visible_to_managers_only(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member, manager = tenant.user("Mia"), tenant.user("Max")
    tenant.member(space, member)
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    archived = tenant.document(space, "Old", is_active=False)
    current = tenant.document(space, "New")
    assert access.visible_documents(tenant.id, tenant.principal(member)) == [current]
    assert access.visible_documents(tenant.id, tenant.principal(manager)) == [archived, current]


def test_finance_space_visible_to_admin_and_members_only(tenant):
    intranet = tenant.intranet
    admin = tenant.principal(tenant.admin)
    finance = intranet.spaces.create_space(admin, tenant.id, "Finance")
    other = tenant.space("Marketing")
    accountant, marketer = tenant.user("Ann"), tenant.user("Mark")
    intranet.spaces.add_member(admin, finance.id, accountant.id)
    tenant.member(other, marketer)

    assert finance.cover_image_url is None
    assert finance in intranet.access.visible_spaces(tenant.id, admin)
    assert finance in intranet.access.visible_spaces(tenant.id, tenant.principal(accountant))
    assert finance not in intranet.access.visible_spaces(tenant.id, tenant.principal(marketer))


def test_company_wide_announcement_visible_to_everyone(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    announcement = tenant.announcement("Holiday")
    scoped = tenant.announcement("Space news", space=space)
    loner = tenant.user("Lonely")
    assert access.can_view_announcement(announcement, tenant.principal(loner))
    assert not access.can_view_announcement(scoped, tenant.principal(loner))
    assert access.visible_announcements(tenant.id, tenant.principal(loner)) == [announcement]


def test_inactive_announcement_visible_to_its_editors(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member, manager = tenant.user("Mia"), tenant.user("Max")
    tenant.member(space, member)
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    scoped = tenant.announcement("Retired", space=space, is_active=False)
    company_wide = tenant.announcement("Old news", is_active=False)

    assert not access.can_view_announcement(scoped, tenant.principal(member))
    assert access.can_view_announcement(scoped, tenant.principal(manager))
    assert not access.can_view_announcement(company_wide, tenant.principal(manager))
    assert access.can_view_announcement(company_wide, tenant.principal(tenant.admin))


def test_pinned_announcements_come_first(tenant):
    access = tenant.intranet.access
    first = tenant.announcement("First")
    pinned = tenant.announcement("Pinned", is_pinned=True)
    latest = tenant.announcement("Latest")
    ordered = access.visible_announcements(tenant.id, tenant.principal(tenant.admin))
    assert ordered[0].id == pinned.id
    assert {announcement.id for announcement in ordered} == {first.id, pinned.id, latest.id}


def test_event_visibility(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member, outsider = tenant.user("Mia"), tenant.user("Olga")
    tenant.member(space, member)
    public = tenant.event("Party", is_public=True)
    team = tenant.event("Standup", space=space)
    private = tenant.event("Board meeting")
    cancelled = tenant.event("Cancelled", space=space, is_active=False)

    assert access.visible_events(tenant.id, tenant.principal(member)) == sorted(
        [public, team], key=lambda event: event.start_date_time
    )
    assert access.visible_events(tenant.id, tenant.principal(outsider)) == [public]
    assert {event.id for event in access.visible_events(tenant.id, tenant.principal(tenant.admin))} == {
        public.id,
        team.id,
        private.id,
        cancelled.id,
    }


def test_knowledge_articles_inactive_for_admins_only(tenant):
    repositories = tenant.repositories
    access = tenant.intranet.access
    category = repositories.knowledge_categories.create(company_id=tenant.id, name="IT")
    active = repositories.knowledge_articles.create(
        company_id=tenant.id, category_id=category.id, title="VPN", answer="Use the client", created_by=tenant.admin.id
    )
    hidden = repositories.knowledge_articles.create(
        company_id=tenant.id,
        category_id=category.id,
        title="Fax",
        answer="Gone",
        created_by=tenant.admin.id,
        is_active=False,
    )
    member = tenant.principal(tenant.user("Mia"))
    assert access.can_view_knowledge_article(active, member)
    assert not access.can_view_knowledge_article(hidden, member)
    assert access.can_view_knowledge_article(hidden, tenant.principal(tenant.admin))
    assert not access.can_manage_knowledge_base(tenant.id, member)


def test_other_company_is_invisible_to_company_admin():
    intranet = make_intranet()
    acme, globex = Tenant(intranet, "Acme"), Tenant(intranet, "Globex")
    space = globex.space()
    page = globex.page(space)
    announcement = globex.announcement()
    acme_admin = acme.principal(acme.admin)
    assert intranet.access.effective_space_role(space, acme_admin) is None
    assert not intranet.access.can_view_page(page, acme_admin)
    assert not intranet.access.can_view_announcement(announcement, acme_admin)
    assert intranet.access.visible_spaces(globex.id, acme_admin) == []


def test_super_admin_operates_across_companies():
    intranet = make_intranet()
    platform, acme = Tenant(intranet, "Platform"), Tenant(intranet, "Acme")
    operator = platform.principal(platform.user("Root", RoleType.SUPER_ADMIN))
    space = acme.space()
    draft = acme.page(space, status=PageStatus.DRAFT)
    assert intranet.access.effective_space_role(space, operator) == SpaceRole.SPACE_MANAGER
    assert intranet.access.can_view_page(draft, operator)


def test_page_in_deleted_space_stays_visible_to_admin_only(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    member = tenant.user("Mia")
    tenant.member(space, member)
    page = tenant.page(space)
    tenant.repositories.spaces.delete(space.id)
    assert access.can_view_page(page, tenant.principal(tenant.admin))
    assert not access.can_view_page(page, tenant.principal(member))
    assert access.effective_space_role(space.id, tenant.principal(member)) is None


def test_spaces_stored_without_timestamps_resolve_access(tenant):
    store = tenant.intranet.store
    access = tenant.intranet.access
    member = tenant.user("Mia")
    store.write_collection(
        StorageKey.SPACES,
        [{"id": "legacy", "spaceName": "Legacy", "description": "", "companyId": tenant.id, "createdBy": tenant.admin.id}],
    )
    store.write_collection(
        StorageKey.SPACE_MEMBERS,
        [{"id": "m1", "spaceId": "legacy", "userId": member.id, "roleInSpace": "Member", "isActive": True}],
    )
    page = tenant.page("legacy")

    assert [space.id for space in access.visible_spaces(tenant.id, tenant.principal(member))] == ["legacy"]
    assert access.can_view_space("legacy", tenant.principal(member))
    assert access.can_view_page(page, tenant.principal(member))


@pytest.mark.parametrize(
    "rows, expected",
    [
        ([(SpaceRole.MEMBER, False), (SpaceRole.MEMBER, True)], SpaceRole.MEMBER),
        ([(SpaceRole.SPACE_MANAGER, True), (SpaceRole.MEMBER, True)], SpaceRole.SPACE_MANAGER),
        ([(SpaceRole.MEMBER, True), (SpaceRole.SPACE_MANAGER, True)], SpaceRole.SPACE_MANAGER),
        ([(SpaceRole.SPACE_MANAGER, False), (SpaceRole.MEMBER, True)], SpaceRole.MEMBER),
        ([(SpaceRole.MEMBER, True), (SpaceRole.MEMBER, False)], SpaceRole.MEMBER),
    ],
)
def test_duplicate_membership_rows_resolve_the_same_everywhere(tenant, rows, expected):
    access = tenant.intranet.access
    space = tenant.space()
    user = tenant.user("Mia")
    for role, is_active in rows:
        tenant.member(space, user, role, is_active=is_active)
    principal = tenant.principal(user)

    assert access.effective_space_role(space, principal) == expected
    assert access.space_roles(tenant.id, principal) == {space.id: expected}
    assert access.visible_spaces(tenant.id, principal) == [space]
    assert access.can_view_space(space, principal)
    assert access.can_manage_space(space, principal) == (expected == SpaceRole.SPACE_MANAGER)


def test_company_wide_announcement_with_space_is_admin_only(tenant):
    access = tenant.intranet.access
    space = tenant.space()
    manager = tenant.user("Max")
    tenant.member(space, manager, SpaceRole.SPACE_MANAGER)
    announcement = tenant.repositories.announcements.create(
        title="All hands",
        message="Friday at noon",
        audience_type=AnnouncementAudience.COMPANY_WIDE,
        space_id=space.id,
        company_id=tenant.id,
        created_by=tenant.admin.id,
    )

    assert announcement.is_company_wide
    assert access.can_view_announcement(announcement, tenant.principal(tenant.user("Lonely")))
    assert not access.can_edit_announcement(announcement, tenant.principal(manager))
    assert access.can_edit_announcement(announcement, tenant.principal(tenant.admin))
