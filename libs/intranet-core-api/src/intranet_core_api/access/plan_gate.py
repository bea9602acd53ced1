"""Plan based feature flags and entity-count limits."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Callable

from intranet_core_api.models.base import utc_now
from intranet_core_api.models.company import Company, PlanType, RenewalStatus
from intranet_core_lib.errors import ErrorKind, FeatureUnavailableError, PlanLimitExceededError
from intranet_core_lib.impl.settings.plan_settings import PlanSettings

logger = logging.getLogger(__name__)


class Feature(StrEnum):
    """Feature keys gated by plan."""

    AI = "ai"
    ANALYTICS = "analytics"
    POLICIES = "policies"
    ADVANCED_BRANDING = "advanced_branding"


class PlanGate:
    """Decides which features and how many users/spaces a company's plan allows.

    A Pro company whose subscription has lapsed is treated as Basic.
    """

    def __init__(self, settings: PlanSettings, clock: Callable[[], datetime] = utc_now):
        self._settings = settings
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def has_active_subscription(self, company: Company) -> bool:
        if not company.is_subscription_active:
            return False
        end = company.subscription_end_date
        return end is None or end > self._clock()

    def effective_plan(self, company: Company) -> PlanType:
        if company.plan_type == PlanType.PRO and self.has_active_subscription(company):
            return PlanType.PRO
        return PlanType.BASIC

    def renewal_status(self, company: Company) -> RenewalStatus:
        """Return Active, ExpiringSoon or Expired for the subscription window."""
        if not self.has_active_subscription(company):
            return RenewalStatus.EXPIRED
        end = company.subscription_end_date
        if end is not None and end - self._clock() <= timedelta(days=self._settings.expiring_soon_days):
            return RenewalStatus.EXPIRING_SOON
        return RenewalStatus.ACTIVE

    def can_access_feature(self, company: Company | None, feature: Feature | str) -> bool:
        """Return whether the company plan includes a feature; unknown keys are not gated."""
        if company is None or not company.is_active:
            return False
        if self.effective_plan(company) == PlanType.PRO:
            return True
        return str(feature) not in self._settings.basic_restricted_features

    def require_feature(self, company: Company | None, feature: Feature | str) -> None:
        if not self.can_access_feature(company, feature):
            logger.info("Feature %s blocked for company %s", feature, company.id if company else None)
            raise FeatureUnavailableError(str(feature))

    def enforce_seat_limit(self, company: Company, current_user_count: int) -> None:
        """Fail once a Basic company has used all of its seats."""
        limit = self._settings.basic_max_users
        if self.effective_plan(company) == PlanType.BASIC and current_user_count >= limit:
            raise PlanLimitExceededError(
                f"Your plan allows up to {limit} users. Upgrade to Pro for unlimited users.",
                ErrorKind.SEAT_LIMIT_EXCEEDED,
                limit,
            )

    def enforce_space_limit(self, company: Company, current_space_count: int) -> None:
        """Fail once a Basic company has created all of its spaces."""
        limit = self._settings.basic_max_spaces
        if self.effective_plan(company) == PlanType.BASIC and current_space_count >= limit:
            raise PlanLimitExceededError(
                f"Your plan allows up to {limit} Spaces. Upgrade to Pro for unlimited Spaces.",
                ErrorKind.SPACE_LIMIT_EXCEEDED,
                limit,
            )
