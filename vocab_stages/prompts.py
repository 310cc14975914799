"""Prompt templates for the LLM-backed answer arbiter."""
from __future__ import annotations

GRADING_PROMPT = """\
You are a vocabulary grading expert. Decide whether a student's answer \
correctly gives the meaning of the word below.

Word: "{term}"
Expected answer (reference): "{reference_answer}"
Student's answer: "{user_answer}"

Grading criteria:
1. If the word has SEVERAL meanings, the student only needs ONE valid meaning \
to be correct. Example: "citation" can mean "인용", "표창" or "소환장"; any of \
these is correct.
2. The answer must convey at least one core meaning of the word.
3. Minor wording differences are fine if the meaning is preserved.
4. Synonyms and alternative phrasings are acceptable.
5. Tolerate typos (e.g. "ㅎ회복력" for "회복력").
6. The expected answer is only a REFERENCE, not the only correct answer.

Examples:
- Word "citation", expected "인용, 표창, 소환장", student "인용" \
-> {{"isCorrect": true, "feedback": "'인용' is one of the meanings of 'citation'."}}
- Word "resilience", expected "회복력", student "회복능력" \
-> {{"isCorrect": true, "feedback": "'회복능력' means the same as '회복력'."}}
- Word "sophisticated", expected "세련된", student "복잡한" \
-> {{"isCorrect": false, "feedback": "'세련된' or '정교한' is closer than '복잡한'."}}

Respond in this exact JSON format only, with no other text:
{{
  "isCorrect": true,
  "feedback": "One or two sentences explaining the verdict"
}}
"""


def format_grading_prompt(term: str, reference_answer: str, user_answer: str) -> str:
    return GRADING_PROMPT.format(
        term=term,
        reference_answer=reference_answer,
        user_answer=user_answer,
    )
