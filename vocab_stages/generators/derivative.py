"""Stage 2: meaning of a derived form (e.g. 'resilient' from 'resilience')."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from vocab_stages.generators.common import (
    build_choice_options,
    new_question_id,
    pick_distractors,
    resolve_rng,
    shuffled,
)
from vocab_stages.models import NormalizedWord, Question

_log = logging.getLogger("vocab_stages.qgen")


@dataclass
class DerivativeEntry:
    word_id: str
    root: str
    derivative: str
    meaning: str


def flatten_derivatives(words: list[NormalizedWord]) -> list[DerivativeEntry]:
    """All usable (root, derivative, meaning) tuples, in input order."""
    entries = []
    for word in words:
        for d in word.derivatives:
            if word.id and d.word and d.meaning:
                entries.append(DerivativeEntry(word.id, word.term, d.word, d.meaning))
    return entries


def generate_derivative_questions(
    words: list[NormalizedWord],
    limit: int = 12,
    rng: random.Random | None = None,
) -> list[Question]:
    rng = resolve_rng(rng)
    entries = flatten_derivatives(words)
    if not entries:
        return []

    meaning_pool = [e.meaning for e in entries]
    questions: list[Question] = []

    for entry in shuffled(entries, rng):
        if len(questions) >= limit:
            break
        distractors = pick_distractors(entry.meaning, meaning_pool, rng)
        if distractors is None:
            _log.debug("Derivative: skipping '%s' (not enough distinct distractors)", entry.derivative)
            continue
        options, correct_index = build_choice_options(entry.meaning, distractors, rng)
        questions.append(Question(
            id=new_question_id(),
            question_type="multiple-choice",
            prompt=f"What does '{entry.derivative}', derived from '{entry.root}', mean?",
            options=options,
            correct_answer=correct_index,
            explanation=f"{entry.derivative} ({entry.root}): {entry.meaning}",
            word_id=entry.word_id,
            term=entry.derivative,
            number=len(questions) + 1,
        ))

    _log.info("Derivative: %d questions from %d derivatives", len(questions), len(entries))
    return questions
