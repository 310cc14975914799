from __future__ import annotations

import logging

import httpx

from vocab_stages.providers.base import Arbiter

log = logging.getLogger("vocab_stages.arbiter")


class HttpArbiter(Arbiter):
    """POSTs ``{term, referenceAnswer, userAnswer}`` to a grading service."""

    def __init__(self, url: str, timeout: float = 8.0, headers: dict | None = None):
        self.url = url
        self.timeout = timeout
        self.headers = headers or {}

    async def arbitrate(self, term: str, reference_answer: str, user_answer: str) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                self.url,
                headers=self.headers,
                json={
                    "term": term,
                    "referenceAnswer": reference_answer,
                    "userAnswer": user_answer,
                },
            )
            resp.raise_for_status()
            data = resp.json()
        log.debug("Arbiter response: %s", data)
        return data

    def name(self) -> str:
        return f"http:{self.url}"
