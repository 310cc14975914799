"""Stage 1: pick the meaning of a word out of four glosses."""
from __future__ import annotations

import logging
import random

from vocab_stages.generators.common import (
    build_choice_options,
    new_question_id,
    pick_distractors,
    resolve_rng,
    shuffled,
)
from vocab_stages.models import NormalizedWord, Question

_log = logging.getLogger("vocab_stages.qgen")


def generate_meaning_questions(
    words: list[NormalizedWord],
    limit: int = 20,
    rng: random.Random | None = None,
) -> list[Question]:
    rng = resolve_rng(rng)
    candidates = [w for w in words if w.id and w.term and w.meaning]
    if not candidates:
        return []

    meaning_pool = [w.meaning for w in candidates]
    questions: list[Question] = []

    for word in shuffled(candidates, rng):
        if len(questions) >= limit:
            break
        distractors = pick_distractors(word.meaning, meaning_pool, rng)
        if distractors is None:
            _log.debug("Meaning: skipping '%s' (not enough distinct distractors)", word.term)
            continue
        options, correct_index = build_choice_options(word.meaning, distractors, rng)
        questions.append(Question(
            id=new_question_id(),
            question_type="multiple-choice",
            prompt=f"Which is the best meaning of '{word.term}'?",
            options=options,
            correct_answer=correct_index,
            explanation=f"{word.term}: {word.meaning}",
            word_id=word.id,
            term=word.term,
            number=len(questions) + 1,
        ))

    _log.info("Meaning: %d questions from %d candidates", len(questions), len(candidates))
    return questions
