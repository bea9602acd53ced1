"""AI assistant."""

from intranet_core_api.ai.ai_assistant_service import AIAssistantService
from intranet_core_api.ai.question_answerer import QuestionAnswerer

__all__ = [
    "AIAssistantService",
    "QuestionAnswerer",
]
