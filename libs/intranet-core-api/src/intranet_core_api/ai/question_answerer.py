"""Base interface for the AI text service."""

from abc import ABC, abstractmethod


class QuestionAnswerer(ABC):
    """Turns a question plus intranet context into an answer."""

    @abstractmethod
    async def answer(self, api_key: str, question: str, context: str = "") -> str:
        """Return the generated answer.

        Parameters
        ----------
        api_key : str
            Company specific key for the AI provider.
        question : str
            The question as typed by the user.
        context : str
            Intranet content the question is scoped to; may be empty.

        Returns
        -------
        str
            The answer text.
        """

        raise NotImplementedError()
