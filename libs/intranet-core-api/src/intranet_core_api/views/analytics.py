"""Page view analytics."""

from __future__ import annotations

from collections import Counter
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import Feature, PlanGate
from intranet_core_api.models.content import PageViewLog
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed
from intranet_core_api.views.entity_resolver import UNKNOWN_LABEL, UNKNOWN_USER_LABEL
from intranet_core_lib.principal import Principal

TOP_N = 10


class _View(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TopPage(_View):
    page_id: str
    page_title: str
    space_name: str
    view_count: int


class ActiveUser(_View):
    user_id: str
    user_name: str
    user_email: str
    role_name: str
    view_count: int


class RoleViews(_View):
    role_name: str
    view_count: int


class AnalyticsSummary(_View):
    total_page_views: int = 0
    unique_pages_viewed: int = 0
    unique_users: int = 0
    top_pages: list[TopPage] = Field(default_factory=list)
    active_users: list[ActiveUser] = Field(default_factory=list)
    views_by_role: list[RoleViews] = Field(default_factory=list)


class AnalyticsView:
    """Aggregates page views of a company over a time window."""

    def __init__(self, repositories: Repositories):
        self._repositories = repositories

    def _views(self, company_id: str, start: datetime | None, end: datetime | None) -> list[PageViewLog]:
        return [
            view
            for view in self._repositories.page_views.list(company_id)
            if (start is None or view.viewed_on >= start) and (end is None or view.viewed_on <= end)
        ]

    def summary(self, company_id: str, start: datetime | None = None, end: datetime | None = None) -> AnalyticsSummary:
        """Count views, unique pages and users, and rank pages, users and roles."""
        views = self._views(company_id, start, end)
        if not views:
            return AnalyticsSummary()
        pages = {page.id: page for page in self._repositories.pages.list(company_id)}
        spaces = {space.id: space for space in self._repositories.spaces.list(company_id)}
        users = {user.id: user for user in self._repositories.users.list(company_id)}

        page_counts = Counter(view.page_id for view in views)
        user_counts = Counter(view.user_id for view in views)
        role_counts = Counter(view.user_role_name or UNKNOWN_LABEL for view in views)

        top_pages = []
        for page_id, count in page_counts.most_common(TOP_N):
            page = pages.get(page_id)
            space = spaces.get(page.space_id) if page else None
            top_pages.append(
                TopPage(
                    page_id=page_id,
                    page_title=page.page_title if page else UNKNOWN_LABEL,
                    space_name=space.space_name if space else UNKNOWN_LABEL,
                    view_count=count,
                )
            )

        active_users = []
        for user_id, count in user_counts.most_common(TOP_N):
            user = users.get(user_id)
            active_users.append(
                ActiveUser(
                    user_id=user_id,
                    user_name=user.full_name if user else UNKNOWN_USER_LABEL,
                    user_email=user.email if user else "-",
                    role_name=str(user.role) if user else UNKNOWN_LABEL,
                    view_count=count,
                )
            )

        return AnalyticsSummary(
            total_page_views=len(views),
            unique_pages_viewed=len(page_counts),
            unique_users=len(user_counts),
            top_pages=top_pages,
            active_users=active_users,
            views_by_role=[RoleViews(role_name=role, view_count=count) for role, count in role_counts.most_common()],
        )

    def summary_for(
        self,
        principal: Principal,
        access: IntranetAccessService,
        plan_gate: PlanGate,
        company_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> AnalyticsSummary:
        """Return the summary for an administrator of a company with the analytics feature."""
        ensure_allowed(access.can_administer_company(company_id, principal), principal, "view analytics")
        plan_gate.require_feature(self._repositories.companies.get(company_id), Feature.ANALYTICS)
        return self.summary(company_id, start, end)
