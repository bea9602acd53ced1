"""Gemini model exposed as a langchain LLM."""

from __future__ import annotations

import logging
from typing import Any, Optional

import google.generativeai as genai
from langchain_core.callbacks.manager import CallbackManagerForLLMRun
from langchain_core.language_models.llms import LLM

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated from AI."


class GeminiLLM(LLM):
    """Single-shot text generation against a Gemini model."""

    api_key: str
    model: str = "gemini-2.5-flash"
    temperature: float = 0.3
    max_output_tokens: int = 1024

    @property
    def _llm_type(self) -> str:
        return "gemini"

    @property
    def _identifying_params(self) -> dict[str, Any]:
        return {"model": self.model, "temperature": self.temperature, "max_output_tokens": self.max_output_tokens}

    def _call(
        self,
        prompt: str,
        stop: Optional[list[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> str:
        genai.configure(api_key=self.api_key)
        generation_config: dict[str, Any] = {
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        if stop:
            generation_config["stop_sequences"] = stop
        response = genai.GenerativeModel(model_name=self.model).generate_content(
            prompt, generation_config=generation_config
        )
        return self._extract_text(response) or NO_RESPONSE_TEXT

    @staticmethod
    def _extract_text(response: Any) -> str:
        if not response:
            return ""
        parts = []
        for candidate in getattr(response, "candidates", []) or []:
            content = getattr(candidate, "content", None)
            if not content:
                continue
            for part in getattr(content, "parts", []) or []:
                text = getattr(part, "text", None)
                if text:
                    parts.append(text)
        return "".join(parts)
