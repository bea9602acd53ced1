"""Container wiring every repository to one store."""

from __future__ import annotations

from dataclasses import dataclass, field

from intranet_core_api.repositories.ai_query_repository import AIQueryRepository
from intranet_core_api.repositories.billing_repository import (
    CustomDomainRepository,
    PaymentOrderRepository,
    RazorpayConfigStore,
)
from intranet_core_api.repositories.company_repository import (
    CompanyRepository,
    DepartmentRepository,
    UserRepository,
)
from intranet_core_api.repositories.content_repository import (
    AnnouncementRepository,
    DocumentRepository,
    EventRepository,
    NavQuickLinkRepository,
    PageCommentRepository,
    PageRepository,
    PageTemplateRepository,
    PageViewRepository,
    PageWidgetRepository,
)
from intranet_core_api.repositories.engagement_repository import (
    ActivityLogRepository,
    FavoriteRepository,
    NotificationRepository,
    ReadAcknowledgementRepository,
)
from intranet_core_api.repositories.knowledge_repository import (
    KnowledgeArticleRepository,
    KnowledgeCategoryRepository,
)
from intranet_core_api.repositories.space_repository import SpaceMemberRepository, SpaceRepository
from intranet_core_lib.store.key_value_store import KeyValueStore


@dataclass
class Repositories:
    """Every collection of the intranet, bound to the same store."""

    store: KeyValueStore
    companies: CompanyRepository = field(init=False)
    users: UserRepository = field(init=False)
    departments: DepartmentRepository = field(init=False)
    spaces: SpaceRepository = field(init=False)
    space_members: SpaceMemberRepository = field(init=False)
    pages: PageRepository = field(init=False)
    page_comments: PageCommentRepository = field(init=False)
    page_widgets: PageWidgetRepository = field(init=False)
    page_templates: PageTemplateRepository = field(init=False)
    page_views: PageViewRepository = field(init=False)
    documents: DocumentRepository = field(init=False)
    announcements: AnnouncementRepository = field(init=False)
    events: EventRepository = field(init=False)
    nav_links: NavQuickLinkRepository = field(init=False)
    knowledge_categories: KnowledgeCategoryRepository = field(init=False)
    knowledge_articles: KnowledgeArticleRepository = field(init=False)
    notifications: NotificationRepository = field(init=False)
    activity_logs: ActivityLogRepository = field(init=False)
    favorites: FavoriteRepository = field(init=False)
    acknowledgements: ReadAcknowledgementRepository = field(init=False)
    ai_queries: AIQueryRepository = field(init=False)
    payment_orders: PaymentOrderRepository = field(init=False)
    custom_domains: CustomDomainRepository = field(init=False)
    razorpay_config: RazorpayConfigStore = field(init=False)

    def __post_init__(self) -> None:
        self.companies = CompanyRepository(self.store)
        self.users = UserRepository(self.store)
        self.departments = DepartmentRepository(self.store)
        self.spaces = SpaceRepository(self.store)
        self.space_members = SpaceMemberRepository(self.store)
        self.pages = PageRepository(self.store)
        self.page_comments = PageCommentRepository(self.store)
        self.page_widgets = PageWidgetRepository(self.store)
        self.page_templates = PageTemplateRepository(self.store)
        self.page_views = PageViewRepository(self.store)
        self.documents = DocumentRepository(self.store)
        self.announcements = AnnouncementRepository(self.store)
        self.events = EventRepository(self.store)
        self.nav_links = NavQuickLinkRepository(self.store)
        self.knowledge_categories = KnowledgeCategoryRepository(self.store)
        self.knowledge_articles = KnowledgeArticleRepository(self.store)
        self.notifications = NotificationRepository(self.store)
        self.activity_logs = ActivityLogRepository(self.store)
        self.favorites = FavoriteRepository(self.store)
        self.acknowledgements = ReadAcknowledgementRepository(self.store)
        self.ai_queries = AIQueryRepository(self.store)
        self.payment_orders = PaymentOrderRepository(self.store)
        self.custom_domains = CustomDomainRepository(self.store)
        self.razorpay_config = RazorpayConfigStore(self.store)
