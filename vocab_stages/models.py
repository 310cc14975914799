from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Derivative:
    word: str
    meaning: str = ""


@dataclass
class NormalizedWord:
    id: str
    term: str
    meaning: str = ""
    translation: str = ""
    example: str = ""
    derivatives: list[Derivative] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "term": self.term,
            "meaning": self.meaning,
            "translation": self.translation,
            "example": self.example,
            "derivatives": [{"word": d.word, "meaning": d.meaning} for d in self.derivatives],
            "synonyms": list(self.synonyms),
            "antonyms": list(self.antonyms),
        }


@dataclass
class SentenceData:
    english: str  # original, unmasked; never shown before answering
    masked_english: str
    masked_translation: str


@dataclass
class Question:
    id: str
    question_type: str  # multiple-choice | multi-select | sentence | fill-in-word | fill-in-meaning
    prompt: str
    options: list[str]
    correct_answer: int | str | None
    explanation: str
    word_id: str
    term: str = ""
    correct_answers: list[int] | None = None
    sentence_data: SentenceData | None = None
    number: int = 0

    def to_dict(self, include_answer: bool = True) -> dict:
        """Serialize for clients; without the answer key while a quiz is live."""
        data = {
            "id": self.id,
            "number": self.number,
            "type": self.question_type,
            "prompt": self.prompt,
            "options": list(self.options),
            "wordId": self.word_id,
        }
        if include_answer:
            data["correctAnswer"] = self.correct_answer
            data["explanation"] = self.explanation
            data["term"] = self.term
            if self.correct_answers is not None:
                data["correctAnswers"] = list(self.correct_answers)
        if self.sentence_data is not None:
            data["sentenceData"] = {
                "maskedEnglish": self.sentence_data.masked_english,
                "maskedTranslation": self.sentence_data.masked_translation,
            }
        return data


@dataclass
class StageDefinition:
    id: int
    title: str
    status: str  # locked | unlocked | current | completed
    reward_points: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "rewardPoints": self.reward_points,
        }


@dataclass
class GradingResult:
    is_correct: bool
    feedback: str
    tier: str  # exact | fuzzy | arbitrated | fallback
    similarity: float = 0.0

    def to_dict(self) -> dict:
        return {
            "isCorrect": self.is_correct,
            "feedback": self.feedback,
            "tier": self.tier,
        }
