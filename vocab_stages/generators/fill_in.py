"""Open-ended recall items: type the word for a meaning, or the reverse.

``fill-in-word`` shows the meaning and expects the term.
``fill-in-meaning`` shows the term and expects the meaning; these answers
are free text and may be sent to the arbiter for grading.
"""
from __future__ import annotations

import random

from vocab_stages.generators.common import new_question_id, resolve_rng, shuffled
from vocab_stages.models import NormalizedWord, Question


def _recallable(words: list[NormalizedWord], limit: int, rng: random.Random) -> list[NormalizedWord]:
    usable = [w for w in words if w.term and w.meaning]
    return shuffled(usable, rng)[:max(limit, 0)]


def generate_fill_in_word_questions(
    words: list[NormalizedWord],
    limit: int = 10,
    rng: random.Random | None = None,
) -> list[Question]:
    rng = resolve_rng(rng)
    return [
        Question(
            id=new_question_id(),
            question_type="fill-in-word",
            prompt=word.meaning,
            options=[],
            correct_answer=word.term,
            explanation=f"Answer: {word.term}",
            word_id=word.id,
            term=word.term,
            number=i,
        )
        for i, word in enumerate(_recallable(words, limit, rng), 1)
    ]


def generate_fill_in_meaning_questions(
    words: list[NormalizedWord],
    limit: int = 10,
    rng: random.Random | None = None,
) -> list[Question]:
    rng = resolve_rng(rng)
    return [
        Question(
            id=new_question_id(),
            question_type="fill-in-meaning",
            prompt=word.term,
            options=[],
            correct_answer=word.meaning,
            explanation=f"Example answer: {word.meaning}",
            word_id=word.id,
            term=word.term,
            number=i,
        )
        for i, word in enumerate(_recallable(words, limit, rng), 1)
    ]
