"""Wiring of repositories, access engine and services over one store."""

from __future__ import annotations

from dataclasses import dataclass, field

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import PlanGate
from intranet_core_api.ai.ai_assistant_service import AIAssistantService
from intranet_core_api.ai.impl.gemini_question_answerer import GeminiQuestionAnswerer
from intranet_core_api.ai.question_answerer import QuestionAnswerer
from intranet_core_api.auth.auth_service import AuthService
from intranet_core_api.auth.session_store import SessionStore
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.services.company_service import CompanyService
from intranet_core_api.services.content_service import ContentService
from intranet_core_api.services.custom_domain_service import CustomDomainService
from intranet_core_api.services.directory_service import DirectoryService
from intranet_core_api.services.knowledge_service import KnowledgeBaseService
from intranet_core_api.services.platform_service import PlatformService
from intranet_core_api.services.search_service import SearchService
from intranet_core_api.services.space_service import SpaceService
from intranet_core_api.views.acknowledgement_report import AcknowledgementReport
from intranet_core_api.views.activity_feed import ActivityFeed
from intranet_core_api.views.analytics import AnalyticsView
from intranet_core_api.views.entity_resolver import EntityResolver
from intranet_core_lib.impl.settings.domain_settings import DomainSettings
from intranet_core_lib.impl.settings.gemini_settings import GeminiSettings
from intranet_core_lib.impl.settings.plan_settings import PlanSettings
from intranet_core_lib.store.key_value_store import KeyValueStore


@dataclass
class Intranet:
    """Every component of the intranet core bound to the same store."""

    store: KeyValueStore
    plan_settings: PlanSettings = field(default_factory=PlanSettings)
    gemini_settings: GeminiSettings = field(default_factory=GeminiSettings)
    domain_settings: DomainSettings = field(default_factory=DomainSettings)
    answerer: QuestionAnswerer | None = None

    def __post_init__(self) -> None:
        self.repositories = Repositories(self.store)
        self.access = IntranetAccessService(self.repositories)
        self.plan_gate = PlanGate(self.plan_settings)
        self.sessions = SessionStore(self.store)
        self.auth = AuthService(self.repositories, self.plan_gate, self.sessions, self.plan_settings)
        self.directory = DirectoryService(self.repositories, self.access, self.plan_gate)
        self.spaces = SpaceService(self.repositories, self.access, self.plan_gate)
        self.content = ContentService(self.repositories, self.access, self.plan_gate)
        self.company = CompanyService(self.repositories, self.access, self.plan_gate)
        self.platform = PlatformService(self.repositories, self.auth)
        self.knowledge = KnowledgeBaseService(self.repositories, self.access)
        self.search = SearchService(self.access)
        self.domains = CustomDomainService(self.repositories, self.access, self.domain_settings)
        self.assistant = AIAssistantService(
            self.repositories,
            self.access,
            self.plan_gate,
            self.answerer or GeminiQuestionAnswerer(self.gemini_settings),
            self.gemini_settings,
        )
        self.resolver = EntityResolver(self.repositories)
        self.analytics = AnalyticsView(self.repositories)
        self.acknowledgement_report = AcknowledgementReport(self.repositories)
        self.activity_feed = ActivityFeed(self.repositories, self.resolver)
