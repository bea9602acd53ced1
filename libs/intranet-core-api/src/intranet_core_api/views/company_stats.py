"""Headline counts for a company."""

from __future__ import annotations

from pydantic import BaseModel, Field

from intranet_core_api.models.content import PageStatus
from intranet_core_api.models.user import User
from intranet_core_api.repositories.registry import Repositories
from intranet_core_lib.principal import RoleType


class CompanyStats(BaseModel):
    user_count: int
    active_user_count: int
    space_count: int
    page_count: int
    published_page_count: int
    document_count: int
    admins: list[User] = Field(default_factory=list)


def company_stats(repositories: Repositories, company_id: str) -> CompanyStats:
    users = repositories.users.list(company_id)
    pages = repositories.pages.list(company_id)
    return CompanyStats(
        user_count=len(users),
        active_user_count=sum(1 for user in users if user.is_active),
        space_count=repositories.spaces.count(company_id),
        page_count=len(pages),
        published_page_count=sum(1 for page in pages if page.status == PageStatus.PUBLISHED),
        document_count=repositories.documents.count(company_id),
        admins=[user for user in users if user.role == RoleType.COMPANY_ADMIN],
    )
