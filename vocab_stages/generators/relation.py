"""Stage 3: select every synonym (or antonym) of a word.

Answer keys hold 1-3 entries sampled from the word's relation set; the
remaining options are distractors drawn from the vocabulary's terms and
from other words' relation lists of the same kind.
"""
from __future__ import annotations

import logging
import random

from vocab_stages.generators.common import new_question_id, resolve_rng, shuffled
from vocab_stages.models import NormalizedWord, Question

_log = logging.getLogger("vocab_stages.qgen")

MAX_OPTIONS = 8
MAX_CORRECT = 3
MIN_OPTIONS = 2


def _pick_candidates(words: list[NormalizedWord]) -> list[NormalizedWord]:
    rich = [w for w in words if w.id and (len(w.synonyms) >= 2 or len(w.antonyms) >= 2)]
    if rich:
        return rich
    return [w for w in words if w.id and (w.synonyms or w.antonyms)]


def _use_synonyms(word: NormalizedWord, rng: random.Random) -> bool:
    """Synonym mode unless only antonyms exist; a coin flip when both do."""
    if not word.synonyms:
        return False
    if not word.antonyms:
        return True
    return rng.random() < 0.5


def _relation(word: NormalizedWord, synonyms: bool) -> list[str]:
    return word.synonyms if synonyms else word.antonyms


def generate_relation_questions(
    words: list[NormalizedWord],
    limit: int = 12,
    rng: random.Random | None = None,
) -> list[Question]:
    rng = resolve_rng(rng)
    candidates = _pick_candidates(words)
    if not candidates:
        return []

    terms = [w.term for w in words if w.term]
    questions: list[Question] = []

    for word in shuffled(candidates, rng):
        if len(questions) >= limit:
            break
        synonyms = _use_synonyms(word, rng)
        pool = list(dict.fromkeys(_relation(word, synonyms)))
        if not pool:
            continue

        correct = rng.sample(pool, min(len(pool), MAX_CORRECT))

        # Unchosen members of the word's own relation set are true answers
        # too, so they may not appear as distractors.
        blocked = {p.casefold() for p in pool} | {word.term.casefold()}
        merged = terms + [r for w in words for r in _relation(w, synonyms)]
        distractors: list[str] = []
        seen: set[str] = set()
        for value in shuffled(merged, rng):
            key = value.casefold()
            if not value or key in blocked or key in seen:
                continue
            seen.add(key)
            distractors.append(value)

        option_count = min(MAX_OPTIONS, len(correct) + len(distractors))
        if option_count < MIN_OPTIONS:
            _log.debug("Relation: skipping '%s' (only %d options)", word.term, option_count)
            continue

        options = shuffled(correct + distractors[: option_count - len(correct)], rng)
        correct_set = set(correct)
        correct_indexes = [i for i, option in enumerate(options) if option in correct_set]

        kind = "synonyms" if synonyms else "antonyms"
        questions.append(Question(
            id=new_question_id(),
            question_type="multi-select",
            prompt=f"Select all {kind} of '{word.term}' ({len(correct)})",
            options=options,
            correct_answer=None,
            correct_answers=correct_indexes,
            explanation=f"{kind.capitalize()}: {', '.join(correct)}",
            word_id=word.id,
            term=word.term,
            number=len(questions) + 1,
        ))

    _log.info("Relation: %d questions from %d candidates", len(questions), len(candidates))
    return questions
