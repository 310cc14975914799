"""Normalize heterogeneous raw word records into NormalizedWord objects.

Vocabulary records arrive from several sources with inconsistent shapes:
  - the headword as ``word`` or ``term``
  - the gloss as ``meaning`` or ``translation``
  - the example as ``example`` or ``example_sentence``
  - synonyms / antonyms / derivatives as a list of ``{word, meaning}``
    objects, a list of bare strings, or one delimited string

Malformed fields degrade to empty values; a record without a usable
headword is dropped.  Nothing here raises.
"""
from __future__ import annotations

import re

from vocab_stages.models import Derivative, NormalizedWord

_LIST_SPLIT = re.compile(r"[,;/]")
_DERIVATIVE_SPLIT = re.compile(r"[,;](?![^()]*\))")  # delimiters outside parentheses
# "happiness (행복)" or "happiness: 행복"
_DERIVATIVE_PAREN = re.compile(r"^(.+?)\s*\((.*)\)\s*$")
_DERIVATIVE_COLON = re.compile(r"^(.+?)\s*:\s*(.*)$")


def _text(value) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _first(raw: dict, *keys: str) -> str:
    for key in keys:
        value = _text(raw.get(key))
        if value:
            return value
    return ""


def parse_list_field(value) -> list[str]:
    """Parse a synonym/antonym field into a list of non-empty strings."""
    if not value:
        return []
    if isinstance(value, str):
        return [item.strip() for item in _LIST_SPLIT.split(value) if item.strip()]
    if isinstance(value, (list, tuple)):
        items: list[str] = []
        for entry in value:
            if isinstance(entry, dict):
                text = _text(entry.get("word")) or _text(entry.get("term"))
            else:
                text = _text(entry)
            if text:
                items.append(text)
        return items
    return []


def _parse_derivative_text(segment: str) -> Derivative | None:
    segment = segment.strip()
    if not segment:
        return None
    m = _DERIVATIVE_PAREN.match(segment) or _DERIVATIVE_COLON.match(segment)
    if m:
        word = m.group(1).strip()
        meaning = m.group(2).strip()
    else:
        word, meaning = segment, ""
    if not word:
        return None
    return Derivative(word=word, meaning=meaning)


def parse_derivative_field(value) -> list[Derivative]:
    """Parse a derivatives field into ordered Derivative entries."""
    if not value:
        return []
    if isinstance(value, str):
        parsed = [_parse_derivative_text(s) for s in _DERIVATIVE_SPLIT.split(value)]
        return [d for d in parsed if d is not None]
    if not isinstance(value, (list, tuple)):
        return []

    derivatives: list[Derivative] = []
    for entry in value:
        if isinstance(entry, Derivative):
            d = Derivative(word=_text(entry.word), meaning=_text(entry.meaning))
        elif isinstance(entry, dict):
            d = Derivative(
                word=_text(entry.get("word")) or _text(entry.get("term")),
                meaning=_text(entry.get("meaning")),
            )
        elif isinstance(entry, str):
            d = _parse_derivative_text(entry)
        else:
            d = None
        if d is not None and d.word:
            derivatives.append(d)
    return derivatives


def normalize_word(raw) -> NormalizedWord | None:
    """Normalize one raw record, or return None if it has no headword."""
    if isinstance(raw, NormalizedWord):
        raw = raw.to_dict()
    if not isinstance(raw, dict):
        return None

    term = _first(raw, "word", "term")
    if not term:
        return None
    word_id = _text(raw.get("id")) or term

    return NormalizedWord(
        id=word_id,
        term=term,
        meaning=_first(raw, "meaning", "translation"),
        translation=_text(raw.get("translation")),
        example=_first(raw, "example", "example_sentence"),
        derivatives=parse_derivative_field(raw.get("derivatives")),
        synonyms=parse_list_field(raw.get("synonyms")),
        antonyms=parse_list_field(raw.get("antonyms")),
    )


def normalize_words(records) -> list[NormalizedWord]:
    """Normalize a list of raw records, silently dropping unusable ones."""
    if not records:
        return []
    words: list[NormalizedWord] = []
    for raw in records:
        word = normalize_word(raw)
        if word is not None:
            words.append(word)
    return words
