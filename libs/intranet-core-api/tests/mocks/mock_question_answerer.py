"""Mock implementation of QuestionAnswerer for testing."""

import asyncio

from intranet_core_api.ai.question_answerer import QuestionAnswerer


class MockQuestionAnswerer(QuestionAnswerer):
    """Returns a canned answer, raises a configured error or sleeps past a timeout."""

    def __init__(self, answer: str = "42", error: Exception | None = None, delay_seconds: float = 0.0):
        self._answer = answer
        self._error = error
        self._delay_seconds = delay_seconds
        self.calls: list[dict[str, str]] = []

    async def answer(self, api_key: str, question: str, context: str = "") -> str:
        self.calls.append({"api_key": api_key, "question": question, "context": context})
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        if self._error is not None:
            raise self._error
        return self._answer
