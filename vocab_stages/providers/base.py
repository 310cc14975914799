from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, prompt: str, temperature: float = 0.2) -> str:
        ...

    @abstractmethod
    def name(self) -> str:
        ...


class Arbiter(ABC):
    """Semantic judge for free-text answers.

    ``arbitrate`` returns the raw ``{"isCorrect": bool, "feedback": str}``
    payload; validation and failure handling belong to the grader.
    """

    @abstractmethod
    async def arbitrate(self, term: str, reference_answer: str, user_answer: str) -> dict:
        ...

    @abstractmethod
    def name(self) -> str:
        ...
