"""Persisted record models."""

from intranet_core_api.models.ai_query import AIQuery, AIQueryScope, AIQueryStatus
from intranet_core_api.models.base import IntranetRecord, utc_now
from intranet_core_api.models.billing import CustomDomain, PaymentOrder, PaymentStatus, RazorpayConfig
from intranet_core_api.models.company import Company, PlanType, RenewalStatus
from intranet_core_api.models.content import (
    Announcement,
    AnnouncementAudience,
    DocumentImportance,
    DocumentItem,
    DocumentType,
    Event,
    EventType,
    NavQuickLink,
    NavTargetType,
    Page,
    PageComment,
    PageStatus,
    PageTemplate,
    PageViewLog,
    PageWidget,
    WidgetType,
)
from intranet_core_api.models.engagement import (
    ActionType,
    ActivityLog,
    EntityRef,
    EntityType,
    FavoriteItem,
    Notification,
    ReadAcknowledgement,
)
from intranet_core_api.models.knowledge import KnowledgeArticle, KnowledgeCategory
from intranet_core_api.models.space import Space, SpaceMember, SpaceRole
from intranet_core_api.models.user import Department, ThemePreference, User, UserStatus
from intranet_core_lib.principal import RoleType

__all__ = [
    "AIQuery",
    "AIQueryScope",
    "AIQueryStatus",
    "ActionType",
    "ActivityLog",
    "Announcement",
    "AnnouncementAudience",
    "Company",
    "CustomDomain",
    "Department",
    "DocumentImportance",
    "DocumentItem",
    "DocumentType",
    "EntityRef",
    "EntityType",
    "Event",
    "EventType",
    "FavoriteItem",
    "IntranetRecord",
    "KnowledgeArticle",
    "KnowledgeCategory",
    "NavQuickLink",
    "NavTargetType",
    "Notification",
    "Page",
    "PageComment",
    "PageStatus",
    "PageTemplate",
    "PageViewLog",
    "PageWidget",
    "PaymentOrder",
    "PaymentStatus",
    "PlanType",
    "RazorpayConfig",
    "ReadAcknowledgement",
    "RenewalStatus",
    "RoleType",
    "Space",
    "SpaceMember",
    "SpaceRole",
    "ThemePreference",
    "User",
    "UserStatus",
    "WidgetType",
    "utc_now",
]
