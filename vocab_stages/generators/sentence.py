"""Stage 4: cloze items built from each word's example sentence."""
from __future__ import annotations

import logging
import random

from vocab_stages.generators.common import (
    build_choice_options,
    mask_term,
    new_question_id,
    pick_distractors,
    remove_parenthetical_hints,
    resolve_rng,
    shuffled,
)
from vocab_stages.models import NormalizedWord, Question, SentenceData

_log = logging.getLogger("vocab_stages.qgen")


def build_sentence_data(word: NormalizedWord) -> SentenceData | None:
    """Mask the term in the example and its translation.

    Parenthetical glosses are masked as well since they usually spell out
    the answer.  Returns None if the example never mentions the term.
    """
    masked_english, count = mask_term(word.example, word.term)
    if count == 0:
        return None
    translation, _ = mask_term(word.translation or word.meaning, word.term)
    return SentenceData(
        english=word.example,
        masked_english=remove_parenthetical_hints(masked_english),
        masked_translation=remove_parenthetical_hints(translation),
    )


def generate_sentence_questions(
    words: list[NormalizedWord],
    limit: int = 12,
    rng: random.Random | None = None,
) -> list[Question]:
    rng = resolve_rng(rng)
    candidates = [w for w in words if w.id and w.term and w.example]
    if not candidates:
        return []

    term_pool = [w.term for w in words if w.term]
    questions: list[Question] = []

    for word in shuffled(candidates, rng):
        if len(questions) >= limit:
            break
        sentence = build_sentence_data(word)
        if sentence is None:
            _log.debug("Sentence: skipping '%s' (term not in example)", word.term)
            continue
        distractors = pick_distractors(word.term, term_pool, rng)
        if distractors is None:
            _log.debug("Sentence: skipping '%s' (not enough distinct distractors)", word.term)
            continue
        options, correct_index = build_choice_options(word.term, distractors, rng)
        questions.append(Question(
            id=new_question_id(),
            question_type="sentence",
            prompt="Choose the word that fills the blank.",
            options=options,
            correct_answer=correct_index,
            explanation=f"{word.term}: {word.meaning}",
            word_id=word.id,
            term=word.term,
            sentence_data=sentence,
            number=len(questions) + 1,
        ))

    _log.info("Sentence: %d questions from %d candidates", len(questions), len(candidates))
    return questions
