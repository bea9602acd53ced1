"""Settings package exports for intranet_core_lib."""

from .domain_settings import DomainSettings
from .gemini_settings import GeminiSettings
from .logging_settings import LoggingSettings
from .plan_settings import PlanSettings
from .store_settings import StoreSettings

__all__ = [
    "DomainSettings",
    "GeminiSettings",
    "LoggingSettings",
    "PlanSettings",
    "StoreSettings",
]
