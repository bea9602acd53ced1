from datetime import timedelta

import pytest

from intranet_core_api.models import ActionType, EntityRef, EntityType, PageStatus, PlanType, SpaceRole, utc_now
from intranet_core_api.views import company_stats
from intranet_core_api.views.entity_resolver import UNKNOWN_LABEL, UNKNOWN_USER_LABEL
from intranet_core_lib.errors import AccessDeniedError, FeatureUnavailableError
from intranet_core_lib.principal import RoleType
from mocks.tenant import Tenant, make_intranet


@pytest.fixture
def tenant() -> Tenant:
    return Tenant(make_intranet())


def test_analytics_summary_ranks_pages_users_and_roles(tenant):
    content = tenant.intranet.content
    space = tenant.space("Engineering")
    mia, vic = tenant.user("Mia"), tenant.user("Vic", RoleType.VIEWER)
    tenant.member(space, mia)
    tenant.member(space, vic)
    popular, quiet = tenant.page(space, "Popular"), tenant.page(space, "Quiet")
    for principal in (tenant.principal(mia), tenant.principal(mia), tenant.principal(vic)):
        content.view_page(principal, popular.id)
    content.view_page(tenant.principal(vic), quiet.id)

    summary = tenant.intranet.analytics.summary(tenant.id)

    assert summary.total_page_views == 4
    assert summary.unique_pages_viewed == 2
    assert summary.unique_users == 2
    assert summary.top_pages[0].page_title == "Popular"
    assert summary.top_pages[0].space_name == "Engineering"
    assert summary.top_pages[0].view_count == 3
    assert {user.user_name: user.view_count for user in summary.active_users} == {"Mia": 2, "Vic": 2}
    assert {role.role_name: role.view_count for role in summary.views_by_role} == {"Member": 2, "Viewer": 2}
    assert summary.model_dump(by_alias=True)["totalPageViews"] == 4


def test_analytics_window_and_deleted_entities(tenant):
    space = tenant.space()
    page = tenant.page(space)
    ghost = tenant.user("Ghost")
    tenant.repositories.page_views.create(company_id=tenant.id, page_id=page.id, user_id=ghost.id)
    tenant.repositories.page_views.create(
        company_id=tenant.id, page_id=page.id, user_id=ghost.id, viewed_on=utc_now() - timedelta(days=60)
    )
    tenant.repositories.users.delete(ghost.id)
    tenant.repositories.spaces.delete(space.id)

    summary = tenant.intranet.analytics.summary(tenant.id, start=utc_now() - timedelta(days=30))

    assert summary.total_page_views == 1
    assert summary.top_pages[0].space_name == UNKNOWN_LABEL
    assert summary.active_users[0].user_name == UNKNOWN_USER_LABEL
    assert summary.active_users[0].user_email == "-"
    assert summary.views_by_role[0].role_name == UNKNOWN_LABEL


def test_empty_analytics(tenant):
    summary = tenant.intranet.analytics.summary(tenant.id)
    assert summary.total_page_views == 0
    assert summary.top_pages == []


def test_analytics_requires_admin_and_feature(tenant):
    intranet = tenant.intranet
    with pytest.raises(FeatureUnavailableError):
        intranet.analytics.summary_for(tenant.principal(tenant.admin), intranet.access, intranet.plan_gate, tenant.id)

    pro = Tenant(intranet, "Globex", plan_type=PlanType.PRO)
    with pytest.raises(AccessDeniedError):
        intranet.analytics.summary_for(pro.principal(pro.user("Mia")), intranet.access, intranet.plan_gate, pro.id)
    summary = intranet.analytics.summary_for(pro.principal(pro.admin), intranet.access, intranet.plan_gate, pro.id)
    assert summary.total_page_views == 0


def test_acknowledgement_report_with_fallbacks(tenant):
    repositories = tenant.repositories
    announcement = tenant.announcement("Policy")
    ref = EntityRef.announcement(announcement.id)
    it = repositories.departments.create(company_id=tenant.id, name="IT")
    structured = repositories.users.patch(tenant.user("Sam").id, department_id=it.id, department="Legacy")
    legacy = repositories.users.patch(tenant.user("Lee").id, department="Sales")
    blank = tenant.user("Bo")
    departed = tenant.user("Gone")
    waiting = tenant.user("Wait")
    for user in (structured, legacy, blank, departed):
        repositories.acknowledgements.acknowledge(tenant.id, user.id, ref)
    repositories.users.delete(departed.id)

    rows = {row.user_id: row for row in tenant.intranet.acknowledgement_report.rows(ref, tenant.id)}

    assert rows[structured.id].department == "IT"
    assert rows[legacy.id].department == "Sales"
    assert rows[blank.id].department == UNKNOWN_LABEL
    assert rows[departed.id].user_name == UNKNOWN_USER_LABEL
    assert rows[departed.id].user_email == "-"
    pending = {user.id for user in tenant.intranet.acknowledgement_report.pending_users(ref, tenant.id)}
    assert pending == {tenant.admin.id, waiting.id}


def test_activity_feed_resolves_dangling_targets(tenant):
    admin = tenant.principal(tenant.admin)
    space = tenant.intranet.spaces.create_space(admin, tenant.id, "Temp")
    page = tenant.intranet.content.create_page(admin, space.id, "Kept")
    tenant.intranet.spaces.delete_space(admin, space.id)

    entries = tenant.intranet.activity_feed.entries(tenant.id)

    by_type = {}
    for entry in entries:
        by_type.setdefault(entry.log.entity_type, []).append(entry)
    assert all(entry.entity.is_dangling for entry in by_type[EntityType.SPACE])
    assert all(entry.entity.label == UNKNOWN_LABEL for entry in by_type[EntityType.SPACE])
    assert by_type[EntityType.PAGE][0].entity.label == page.page_title
    assert all(entry.user_name == "Admin" for entry in entries)
    assert len(tenant.intranet.activity_feed.entries(tenant.id, action_type=ActionType.DELETED)) == 1
    assert len(tenant.intranet.activity_feed.entries(tenant.id, limit=1)) == 1


def test_company_stats(tenant):
    space = tenant.space()
    tenant.page(space)
    tenant.page(space, "Draft", status=PageStatus.DRAFT)
    tenant.document(space)
    tenant.user("Gone", status="inactive")
    stats = company_stats(tenant.repositories, tenant.id)
    assert (stats.user_count, stats.active_user_count) == (2, 1)
    assert (stats.space_count, stats.page_count, stats.published_page_count, stats.document_count) == (1, 2, 1, 1)
    assert [admin.id for admin in stats.admins] == [tenant.admin.id]


def test_search_matches_visible_content_only(tenant):
    search = tenant.intranet.search
    space, secret = tenant.space("Engineering"), tenant.space("Secret")
    mia = tenant.user("Mia")
    tenant.member(space, mia)
    tenant.page(space, "Deploy guide")
    tenant.page(secret, "Deploy secrets")
    tenant.page(space, "Deploy draft", status=PageStatus.DRAFT)
    tenant.document(space, "Deploy checklist")
    tenant.announcement("Deploy freeze")

    results = search.search(tenant.principal(mia), tenant.id, "DEPLOY")

    assert [page.page_title for page in results.pages] == ["Deploy guide"]
    assert [document.title for document in results.documents] == ["Deploy checklist"]
    assert [announcement.title for announcement in results.announcements] == ["Deploy freeze"]
    assert results.total == 3
    assert search.search(tenant.principal(mia), tenant.id, "  ").total == 0


def test_search_caps_each_kind_at_twenty(tenant):
    space = tenant.space()
    for index in range(25):
        tenant.page(space, f"Report {index}")
    results = tenant.intranet.search.search(tenant.principal(tenant.admin), tenant.id, "report")
    assert len(results.pages) == 20


def test_space_manager_sees_own_drafts_in_search(tenant):
    space = tenant.space()
    lead = tenant.user("Lead")
    tenant.member(space, lead, SpaceRole.SPACE_MANAGER)
    tenant.page(space, "Roadmap draft", status=PageStatus.DRAFT)
    assert len(tenant.intranet.search.search(tenant.principal(lead), tenant.id, "roadmap").pages) == 1
