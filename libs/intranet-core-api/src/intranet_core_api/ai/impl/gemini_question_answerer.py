"""Question answering through a Gemini backed langchain chain."""

from __future__ import annotations

from typing import Callable

from langchain_core.language_models.llms import LLM
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable

from intranet_core_api.ai.impl.gemini_llm import GeminiLLM
from intranet_core_api.ai.question_answerer import QuestionAnswerer
from intranet_core_lib.impl.settings.gemini_settings import GeminiSettings

ANSWER_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are the assistant of a company intranet. Answer the employee's question "
            "using the intranet content below when it is relevant. If the content does not "
            "cover the question, say so and answer from general knowledge.\n\n"
            "Intranet content:\n{context}",
        ),
        ("human", "{question}"),
    ]
)


class GeminiQuestionAnswerer(QuestionAnswerer):
    """Runs ``prompt | llm | StrOutputParser()`` with a per-company Gemini key."""

    def __init__(self, settings: GeminiSettings, llm_factory: Callable[[str], LLM] | None = None):
        self._settings = settings
        self._llm_factory = llm_factory or self._gemini_llm

    def _gemini_llm(self, api_key: str) -> LLM:
        return GeminiLLM(
            api_key=api_key,
            model=self._settings.model,
            temperature=self._settings.temperature,
            max_output_tokens=self._settings.max_output_tokens,
        )

    def _create_chain(self, api_key: str) -> Runnable:
        return ANSWER_PROMPT | self._llm_factory(api_key) | StrOutputParser()

    async def answer(self, api_key: str, question: str, context: str = "") -> str:
        return await self._create_chain(api_key).ainvoke(
            {"question": question, "context": context or "(no specific content selected)"}
        )
