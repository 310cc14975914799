"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from vocab_stages.parsers.word_normalizer import normalize_words


@pytest.fixture
def raw_words():
    """Raw vocabulary records in the shapes exports actually use."""
    return [
        {
            "id": "w1",
            "word": "resilience",
            "meaning": "회복력",
            "example": "Her resilience helped her recover quickly.",
            "translation": "그녀의 회복력은 빠른 회복을 도왔다.",
            "derivatives": [{"word": "resilient", "meaning": "회복력 있는"}],
            "synonyms": ["toughness", "flexibility"],
            "antonyms": ["fragility"],
        },
        {
            "id": "w2",
            "term": "abundant",
            "meaning": "풍부한",
            "example_sentence": "Water is abundant in this region.",
            "derivatives": "abundance (풍부)",
            "synonyms": "plentiful, ample",
            "antonyms": "scarce",
        },
        {
            "id": "w3",
            "word": "diligent",
            "translation": "성실한",
            "example": "The diligent student finished early.",
            "derivatives": ["diligence: 근면"],
            "synonyms": [{"word": "hardworking"}, {"word": "industrious"}],
            "antonyms": ["lazy"],
        },
        {
            "id": "w4",
            "word": "fragile",
            "meaning": "깨지기 쉬운",
            "example": "The fragile vase broke in the box.",
            "derivatives": [{"word": "fragility", "meaning": "취약성"}],
            "synonyms": ["delicate"],
            "antonyms": ["sturdy", "robust"],
        },
        {
            "id": "w5",
            "word": "candid",
            "meaning": "솔직한",
            "example": "He gave a candid answer.",
            "derivatives": [{"word": "candor", "meaning": "솔직함"}],
            "synonyms": ["frank", "honest"],
            "antonyms": ["evasive"],
        },
        {
            "id": "w6",
            "word": "obscure",
            "meaning": "모호한",
            "example": "The meaning of the poem remains obscure.",
            "derivatives": [{"word": "obscurity", "meaning": "모호함"}],
            "synonyms": ["vague", "unclear"],
            "antonyms": ["clear"],
        },
    ]


@pytest.fixture
def sample_words(raw_words):
    """The raw records above, normalized."""
    return normalize_words(raw_words)


@pytest.fixture
def plain_words():
    """Words with meanings only: no derivatives, relations or examples."""
    return normalize_words([
        {"id": "p1", "word": "happy", "meaning": "행복한"},
        {"id": "p2", "word": "sad", "meaning": "슬픈"},
        {"id": "p3", "word": "angry", "meaning": "화난"},
        {"id": "p4", "word": "calm", "meaning": "차분한"},
    ])


@pytest.fixture
def rng():
    return random.Random(1234)
