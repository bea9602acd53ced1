"""Company settings: branding, quick links, page templates and the AI key."""

from __future__ import annotations

import logging
from typing import Any

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import Feature, PlanGate
from intranet_core_api.models.company import Company
from intranet_core_api.models.content import NavQuickLink, NavTargetType, PageStatus, PageTemplate
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.guards import ensure_allowed, pick
from intranet_core_lib.errors import ValidationFailedError
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)

_BASIC_BRANDING_FIELDS = {"company_name", "logo_url", "primary_color", "home_title"}
_ADVANCED_BRANDING_FIELDS = {
    "favicon_url",
    "secondary_color",
    "accent_color",
    "show_logo_in_header",
    "heading_font_family",
    "body_font_family",
}
_QUICK_LINK_FIELDS = {"label", "target_type", "target_url", "page_id", "space_id", "display_order", "is_active"}
_TEMPLATE_FIELDS = {
    "template_name",
    "description",
    "default_title_prefix",
    "default_summary",
    "default_content",
    "default_status",
    "recommended_space_id",
    "is_active",
}


class CompanyService:
    """Administrative settings of one company."""

    def __init__(self, repositories: Repositories, access: IntranetAccessService, plan_gate: PlanGate):
        self._repositories = repositories
        self._access = access
        self._plan_gate = plan_gate

    def _administered(self, principal: Principal, company_id: str, action: str) -> Company:
        ensure_allowed(self._access.can_administer_company(company_id, principal), principal, action)
        return self._repositories.companies.require(company_id)

    def update_branding(self, principal: Principal, company_id: str, **changes: Any) -> Company:
        """Update branding; fonts, favicon and extra colours need advanced branding."""
        company = self._administered(principal, company_id, "change branding")
        changes = pick(changes, _BASIC_BRANDING_FIELDS | _ADVANCED_BRANDING_FIELDS)
        if set(changes) & _ADVANCED_BRANDING_FIELDS:
            self._plan_gate.require_feature(company, Feature.ADVANCED_BRANDING)
        logger.info("Branding of company %s updated by %s", company_id, principal.subject)
        return self._repositories.companies.update(company.model_copy(update=changes))

    def set_gemini_api_key(self, principal: Principal, company_id: str, api_key: str | None) -> Company:
        company = self._administered(principal, company_id, "configure the AI assistant")
        self._plan_gate.require_feature(company, Feature.AI)
        logger.info("AI key %s for company %s", "set" if api_key else "cleared", company_id)
        return self._repositories.companies.patch(company_id, gemini_api_key=api_key or None)

    def refresh_renewal_status(self, company_id: str) -> Company:
        """Store the renewal status computed from the subscription window."""
        company = self._repositories.companies.require(company_id)
        status = self._plan_gate.renewal_status(company)
        if company.renewal_status == status:
            return company
        return self._repositories.companies.patch(company_id, renewal_status=status)

    def quick_links(self, company_id: str, include_inactive: bool = False) -> list[NavQuickLink]:
        return [link for link in self._repositories.nav_links.list(company_id) if include_inactive or link.is_active]

    def add_quick_link(
        self,
        principal: Principal,
        company_id: str,
        label: str,
        target_type: NavTargetType = NavTargetType.EXTERNAL_URL,
        **fields: Any,
    ) -> NavQuickLink:
        self._administered(principal, company_id, "manage quick links")
        fields = pick(fields, _QUICK_LINK_FIELDS - {"label", "target_type"})
        if target_type == NavTargetType.EXTERNAL_URL and not fields.get("target_url"):
            raise ValidationFailedError("External links need a target URL.")
        if target_type == NavTargetType.PAGE and not fields.get("page_id"):
            raise ValidationFailedError("Page links need a page.")
        if target_type == NavTargetType.SPACE and not fields.get("space_id"):
            raise ValidationFailedError("Space links need a space.")
        fields.setdefault("display_order", len(self._repositories.nav_links.list(company_id)))
        return self._repositories.nav_links.create(company_id=company_id, label=label, target_type=target_type, **fields)

    def update_quick_link(self, principal: Principal, link_id: str, **changes: Any) -> NavQuickLink:
        link = self._repositories.nav_links.require(link_id)
        self._administered(principal, link.company_id, "manage quick links")
        return self._repositories.nav_links.update(link.model_copy(update=pick(changes, _QUICK_LINK_FIELDS)))

    def delete_quick_link(self, principal: Principal, link_id: str) -> None:
        link = self._repositories.nav_links.require(link_id)
        self._administered(principal, link.company_id, "manage quick links")
        self._repositories.nav_links.delete(link_id)

    def templates(self, company_id: str) -> list[PageTemplate]:
        return [template for template in self._repositories.page_templates.list(company_id) if template.is_active]

    def add_template(
        self,
        principal: Principal,
        company_id: str,
        template_name: str,
        default_status: PageStatus = PageStatus.DRAFT,
        **fields: Any,
    ) -> PageTemplate:
        self._administered(principal, company_id, "manage page templates")
        if not template_name.strip():
            raise ValidationFailedError("Template name is required.")
        fields = pick(fields, _TEMPLATE_FIELDS - {"template_name", "default_status"})
        return self._repositories.page_templates.create(
            company_id=company_id,
            template_name=template_name.strip(),
            default_status=default_status,
            created_by=principal.subject,
            **fields,
        )

    def update_template(self, principal: Principal, template_id: str, **changes: Any) -> PageTemplate:
        template = self._repositories.page_templates.require(template_id)
        self._administered(principal, template.company_id, "manage page templates")
        return self._repositories.page_templates.update(template.model_copy(update=pick(changes, _TEMPLATE_FIELDS)))

    def delete_template(self, principal: Principal, template_id: str) -> None:
        template = self._repositories.page_templates.require(template_id)
        self._administered(principal, template.company_id, "manage page templates")
        self._repositories.page_templates.delete(template_id)
