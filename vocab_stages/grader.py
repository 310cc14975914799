"""Grade free-text fill-in answers.

Tiers, first acceptance wins:
  1. exact match against the expected answer or one of its alternatives
  2. fuzzy similarity (containment ratio or edit distance) >= 0.9
  3. semantic arbiter, for the word -> meaning direction only

If the arbiter is missing, fails, times out or answers with a malformed
payload, the answer is accepted when its best similarity reaches the
fallback threshold (0.6).  ``grade`` never raises on arbiter problems.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

from vocab_stages.models import GradingResult

if TYPE_CHECKING:
    from vocab_stages.config import Settings
    from vocab_stages.providers.base import Arbiter

_log = logging.getLogger("vocab_stages.grader")

WORD = "word"        # meaning shown, learner types the term
MEANING = "meaning"  # term shown, learner types the meaning

FEEDBACK_PERFECT = "Perfect! That is exactly right."
FEEDBACK_CLOSE = "Correct! Only a small difference in wording."
FEEDBACK_WRONG = "Not quite. Compare your answer with the expected one."
FEEDBACK_EMPTY = "No answer given."
FEEDBACK_ARBITER_DEFAULT = "Grading complete."
FEEDBACK_FALLBACK_ACCEPT = "Similar enough to the expected answer, accepted (automatic grading unavailable)."
FEEDBACK_FALLBACK_REJECT = "Automatic grading was unavailable, and your answer differs from the expected one."

_ALTERNATIVE_SPLIT = re.compile(r"[,;]")


def split_alternatives(expected: str) -> list[str]:
    return [a.strip() for a in _ALTERNATIVE_SPLIT.split(expected or "") if a.strip()]


def _squash(text: str) -> str:
    return "".join(text.lower().split())


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (single-character insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Score in [0, 1], ignoring case and whitespace.

    Containment scores shorter/longer; otherwise 1 - distance/max_length.
    """
    a, b = _squash(a), _squash(b)
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    longer, shorter = max(len(a), len(b)), min(len(a), len(b))
    if a in b or b in a:
        return shorter / longer
    return 1 - edit_distance(a, b) / longer


def _parse_verdict(payload) -> tuple[bool, str]:
    if not isinstance(payload, dict):
        raise ValueError(f"arbiter payload is {type(payload).__name__}, expected object")
    verdict = payload.get("isCorrect")
    if not isinstance(verdict, bool):
        raise ValueError(f"isCorrect must be a boolean (got {verdict!r})")
    feedback = payload.get("feedback", "")
    if not isinstance(feedback, str):
        raise ValueError(f"feedback must be a string (got {type(feedback).__name__})")
    return verdict, feedback.strip() or FEEDBACK_ARBITER_DEFAULT


class FillInGrader:
    def __init__(
        self,
        arbiter: Arbiter | None = None,
        fuzzy_threshold: float = 0.9,
        fallback_threshold: float = 0.6,
        timeout: float = 8.0,
    ):
        self.arbiter = arbiter
        self.fuzzy_threshold = fuzzy_threshold
        self.fallback_threshold = fallback_threshold
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings, arbiter: Arbiter | None = None) -> FillInGrader:
        return cls(
            arbiter=arbiter,
            fuzzy_threshold=settings.fuzzy_accept_threshold,
            fallback_threshold=settings.fallback_accept_threshold,
            timeout=settings.arbiter_timeout,
        )

    async def grade(
        self,
        term: str,
        expected: str,
        answer: str,
        direction: str = MEANING,
    ) -> GradingResult:
        answer = (answer or "").strip()
        expected = (expected or "").strip()
        if not answer:
            return GradingResult(False, FEEDBACK_EMPTY, "exact")

        alternatives = split_alternatives(expected) or [expected]

        # Tier 1: exact
        candidates = [expected, *alternatives]
        if direction == WORD:
            exact = answer in candidates
        else:
            folded = answer.casefold()
            exact = any(folded == c.casefold() for c in candidates)
        if exact:
            return GradingResult(True, FEEDBACK_PERFECT, "exact", 1.0)

        # Tier 2: fuzzy
        best = max(similarity(answer, alt) for alt in alternatives)
        if best >= self.fuzzy_threshold:
            return GradingResult(True, FEEDBACK_CLOSE, "fuzzy", best)

        if direction == WORD:
            return GradingResult(False, FEEDBACK_WRONG, "fuzzy", best)

        # Tier 3: arbiter
        if self.arbiter is None:
            return self._fallback(best)
        try:
            payload = await asyncio.wait_for(
                self.arbiter.arbitrate(term, expected, answer), timeout=self.timeout,
            )
            verdict, feedback = _parse_verdict(payload)
        except asyncio.TimeoutError:
            _log.warning("Arbiter %s timed out after %.1fs; using similarity fallback",
                         self.arbiter.name(), self.timeout)
            return self._fallback(best)
        except Exception as e:
            _log.warning("Arbiter %s failed (%s); using similarity fallback",
                         self.arbiter.name(), e)
            return self._fallback(best)

        _log.info("Arbiter %s: '%s' for '%s' -> %s", self.arbiter.name(), answer, term, verdict)
        return GradingResult(verdict, feedback, "arbitrated", best)

    def _fallback(self, best: float) -> GradingResult:
        if best >= self.fallback_threshold:
            return GradingResult(True, FEEDBACK_FALLBACK_ACCEPT, "fallback", best)
        return GradingResult(False, FEEDBACK_FALLBACK_REJECT, "fallback", best)
