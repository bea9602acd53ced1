"""Read-only projections joining several collections."""

from intranet_core_api.views.acknowledgement_report import AcknowledgementReport, AcknowledgementRow
from intranet_core_api.views.activity_feed import ActivityEntry, ActivityFeed
from intranet_core_api.views.analytics import AnalyticsSummary, AnalyticsView
from intranet_core_api.views.company_stats import CompanyStats, company_stats
from intranet_core_api.views.entity_resolver import EntityResolver, ResolvedEntity

__all__ = [
    "AcknowledgementReport",
    "AcknowledgementRow",
    "ActivityEntry",
    "ActivityFeed",
    "AnalyticsSummary",
    "AnalyticsView",
    "CompanyStats",
    "EntityResolver",
    "ResolvedEntity",
    "company_stats",
]
