"""Assemble the five-stage question bank from a normalized vocabulary."""
from __future__ import annotations

import dataclasses
import logging
import random

from vocab_stages.config import Settings
from vocab_stages.generators.common import new_question_id, resolve_rng, shuffled
from vocab_stages.generators.derivative import generate_derivative_questions
from vocab_stages.generators.meaning import generate_meaning_questions
from vocab_stages.generators.relation import generate_relation_questions
from vocab_stages.generators.sentence import generate_sentence_questions
from vocab_stages.models import NormalizedWord, Question

_log = logging.getLogger("vocab_stages.bank")

STAGE_IDS = (1, 2, 3, 4, 5)


def clone_question(question: Question, number: int) -> Question:
    """Copy *question* under a fresh id, renumbered to *number*."""
    return dataclasses.replace(
        question,
        id=new_question_id(),
        number=number,
        options=list(question.options),
        correct_answers=list(question.correct_answers) if question.correct_answers is not None else None,
        sentence_data=dataclasses.replace(question.sentence_data) if question.sentence_data else None,
    )


def generate_all_in_one_questions(
    meaning_questions: list[Question],
    derivative_questions: list[Question],
    relation_questions: list[Question],
    sentence_questions: list[Question],
    limit: int = 30,
    rng: random.Random | None = None,
) -> list[Question]:
    """Mix every stage's questions; pad with meaning questions up to *limit*."""
    rng = resolve_rng(rng)
    pool = meaning_questions + derivative_questions + relation_questions + sentence_questions
    if not pool:
        return []

    questions = [
        clone_question(q, number)
        for number, q in enumerate(shuffled(pool, rng)[:limit], 1)
    ]
    while len(questions) < limit and meaning_questions:
        filler = meaning_questions[len(questions) % len(meaning_questions)]
        questions.append(clone_question(filler, len(questions) + 1))
    return questions


def build_question_bank(
    words: list[NormalizedWord],
    settings: Settings | None = None,
    rng: random.Random | None = None,
) -> dict[int, list[Question]] | None:
    """Build questions for stages 1-5.

    Stage 1 (meanings) is what every other stage falls back to, so an empty
    stage 1 means the vocabulary is too small: the result is None.
    """
    rng = resolve_rng(rng)
    limits = (settings or Settings()).question_limits()

    if not words:
        return None

    meaning = generate_meaning_questions(words, limits["meaning"], rng)
    if not meaning:
        _log.info("Bank: no meaning questions from %d words (insufficient vocabulary)", len(words))
        return None

    derivative = generate_derivative_questions(words, limits["derivative"], rng)
    relation = generate_relation_questions(words, limits["relation"], rng)
    sentence = generate_sentence_questions(words, limits["sentence"], rng)
    all_in_one = generate_all_in_one_questions(
        meaning, derivative, relation, sentence, limits["all_in_one"], rng,
    )

    _log.info(
        "Bank: %d words -> meaning %d, derivative %d, relation %d, sentence %d, all-in-one %d",
        len(words), len(meaning), len(derivative), len(relation), len(sentence), len(all_in_one),
    )

    return {
        1: meaning,
        2: derivative or meaning,
        3: relation or meaning,
        4: sentence or meaning,
        5: all_in_one or meaning,
    }


def shuffle_stage_questions(
    questions: list[Question], rng: random.Random | None = None,
) -> list[Question]:
    """Reshuffle a stage's questions for a new run, renumbered from 1."""
    rng = resolve_rng(rng)
    return [clone_question(q, number) for number, q in enumerate(shuffled(questions, rng), 1)]


def match_word_pool(stage_id: int, words: list[NormalizedWord]) -> list[dict]:
    """Term/meaning pairs for a stage's matching game.

    Stage 2 pairs derived forms with their meanings when any exist; every
    other stage (and a derivative-less stage 2) uses the vocabulary itself.
    """
    if stage_id == 2:
        pool = [
            {"id": f"{w.id}-derivative-{i}", "term": d.word, "meaning": d.meaning}
            for w in words
            for i, d in enumerate(w.derivatives)
            if d.word and d.meaning
        ]
        if pool:
            return pool
    return [{"id": w.id, "term": w.term, "meaning": w.meaning} for w in words if w.meaning]
