from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "meaning_limit": 20,
    "derivative_limit": 12,
    "relation_limit": 12,
    "sentence_limit": 12,
    "all_in_one_limit": 30,
    "fill_in_limit": 10,
    "min_match_words": 5,
    "min_game_correct": 3,
    "fuzzy_accept_threshold": 0.9,
    "fallback_accept_threshold": 0.6,
    "arbiter_provider": "http",
    "arbiter_url": "http://localhost:8787/grade-fill-in-answer",
    "arbiter_timeout": 8.0,
    "llm_model": "qwen3:8b",
    "ollama_url": "http://localhost:11434",
    "random_seed": None,
}


@dataclass
class Settings:
    meaning_limit: int = DEFAULTS["meaning_limit"]
    derivative_limit: int = DEFAULTS["derivative_limit"]
    relation_limit: int = DEFAULTS["relation_limit"]
    sentence_limit: int = DEFAULTS["sentence_limit"]
    all_in_one_limit: int = DEFAULTS["all_in_one_limit"]
    fill_in_limit: int = DEFAULTS["fill_in_limit"]
    min_match_words: int = DEFAULTS["min_match_words"]
    min_game_correct: int = DEFAULTS["min_game_correct"]
    fuzzy_accept_threshold: float = DEFAULTS["fuzzy_accept_threshold"]
    fallback_accept_threshold: float = DEFAULTS["fallback_accept_threshold"]
    arbiter_provider: str = DEFAULTS["arbiter_provider"]
    arbiter_url: str = DEFAULTS["arbiter_url"]
    arbiter_timeout: float = DEFAULTS["arbiter_timeout"]
    llm_model: str = DEFAULTS["llm_model"]
    ollama_url: str = DEFAULTS["ollama_url"]
    random_seed: int | None = DEFAULTS["random_seed"]

    def question_limits(self) -> dict[str, int]:
        return {
            "meaning": self.meaning_limit,
            "derivative": self.derivative_limit,
            "relation": self.relation_limit,
            "sentence": self.sentence_limit,
            "all_in_one": self.all_in_one_limit,
        }

    def to_dict(self) -> dict:
        return {
            "meaning_limit": self.meaning_limit,
            "derivative_limit": self.derivative_limit,
            "relation_limit": self.relation_limit,
            "sentence_limit": self.sentence_limit,
            "all_in_one_limit": self.all_in_one_limit,
            "fill_in_limit": self.fill_in_limit,
            "min_match_words": self.min_match_words,
            "min_game_correct": self.min_game_correct,
            "fuzzy_accept_threshold": self.fuzzy_accept_threshold,
            "fallback_accept_threshold": self.fallback_accept_threshold,
            "arbiter_provider": self.arbiter_provider,
            "arbiter_url": self.arbiter_url,
            "arbiter_timeout": self.arbiter_timeout,
            "llm_model": self.llm_model,
            "ollama_url": self.ollama_url,
            "random_seed": self.random_seed,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
