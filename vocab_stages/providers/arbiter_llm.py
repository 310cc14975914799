"""Arbiter that asks an LLM to judge a free-text meaning answer."""
from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from vocab_stages.prompts import format_grading_prompt
from vocab_stages.providers.base import Arbiter

if TYPE_CHECKING:
    from vocab_stages.providers.base import LLMProvider

_log = logging.getLogger("vocab_stages.arbiter")


def _extract_json(text: str) -> dict | None:
    """Extract a JSON object from an LLM reply.

    Strips ``<think>`` blocks, tries code-fenced JSON first, then balanced
    ``{…}`` blocks, preferring the last one (models often draft before
    answering).
    """
    text = re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL).strip()

    m = re.search(r"```(?:json)?\s*\n?({.*?})\s*\n?```", text, re.DOTALL)
    if m:
        try:
            return json.loads(m.group(1))
        except json.JSONDecodeError:
            pass

    for candidate in reversed(_find_json_objects(text)):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None


def _find_json_objects(text: str) -> list[str]:
    """Find balanced top-level ``{…}`` substrings in *text*."""
    results: list[str] = []
    i = 0
    while i < len(text):
        if text[i] != "{":
            i += 1
            continue
        depth = 0
        in_str = False
        escape = False
        for j in range(i, len(text)):
            ch = text[j]
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_str = not in_str
            elif in_str:
                continue
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    results.append(text[i : j + 1])
                    i = j + 1
                    break
        else:
            # Unbalanced; skip this opening brace
            i += 1
    return results


class LLMArbiter(Arbiter):
    def __init__(self, llm: LLMProvider, temperature: float = 0.2):
        self.llm = llm
        self.temperature = temperature

    async def arbitrate(self, term: str, reference_answer: str, user_answer: str) -> dict:
        prompt = format_grading_prompt(term, reference_answer, user_answer)
        response = await self.llm.generate(prompt, temperature=self.temperature)
        data = _extract_json(response)
        if data is None:
            _log.debug("Raw arbiter reply: %.300s", response)
            raise ValueError("arbiter reply contained no JSON object")
        return data

    def name(self) -> str:
        return f"llm:{self.llm.name()}"
