"""Domain services that authorize and apply mutations."""

from intranet_core_api.services.company_service import CompanyService
from intranet_core_api.services.content_service import ContentService
from intranet_core_api.services.custom_domain_service import CustomDomainService
from intranet_core_api.services.directory_service import DirectoryService
from intranet_core_api.services.knowledge_service import KnowledgeBaseService
from intranet_core_api.services.platform_service import PlatformService
from intranet_core_api.services.search_service import SearchResults, SearchService
from intranet_core_api.services.space_service import SpaceService

__all__ = [
    "CompanyService",
    "ContentService",
    "CustomDomainService",
    "DirectoryService",
    "KnowledgeBaseService",
    "PlatformService",
    "SearchResults",
    "SearchService",
    "SpaceService",
]
