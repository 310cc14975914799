"""Shuffling, distractor sampling and masking shared by the generators."""
from __future__ import annotations

import random
import re
import uuid
from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")

MASK = "_____"
CHOICE_COUNT = 4

_PARENTHETICAL = re.compile(r"\([^)]*\)")


def resolve_rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def shuffled(items: Iterable[T], rng: random.Random) -> list[T]:
    """Return a shuffled copy; ``random.Random.shuffle`` is Fisher-Yates."""
    copy = list(items)
    rng.shuffle(copy)
    return copy


def new_question_id() -> str:
    return str(uuid.uuid4())


def pick_distractors(
    correct: str,
    pool: Iterable[str],
    rng: random.Random,
    count: int = CHOICE_COUNT - 1,
) -> list[str] | None:
    """Sample *count* distinct pool entries that differ from *correct*.

    Returns None when the pool cannot supply enough of them; callers skip
    the candidate rather than emit a short option list.
    """
    distinct = [p for p in dict.fromkeys(pool) if p and p != correct]
    if len(distinct) < count:
        return None
    return shuffled(distinct, rng)[:count]


def build_choice_options(
    correct: str, distractors: Sequence[str], rng: random.Random,
) -> tuple[list[str], int]:
    options = shuffled([correct, *distractors], rng)
    return options, options.index(correct)


def mask_term(text: str, term: str) -> tuple[str, int]:
    """Replace every case-insensitive occurrence of *term* with MASK.

    Whole-word occurrences are masked first.  Any remaining embedded
    occurrence (an inflected form such as ``adapted`` for ``adapt``) is
    masked as a substring so the term never leaks.
    """
    if not text or not term:
        return text, 0
    escaped = re.escape(term)
    whole = re.compile(rf"(?<!\w){escaped}(?!\w)", re.IGNORECASE)
    masked, count = whole.subn(MASK, text)
    masked, extra = re.subn(escaped, MASK, masked, flags=re.IGNORECASE)
    return masked, count + extra


def remove_parenthetical_hints(text: str) -> str:
    if not text:
        return text
    return _PARENTHETICAL.sub(MASK, text)
