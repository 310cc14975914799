"""Load raw word records from a JSON vocabulary export.

Handles three layouts:
  [ {...}, {...} ]                          (bare list)
  { "words": [ ... ] }                      (starred / wrong-answer lists)
  { "units": [ { "words": [ ... ] }, ... ] } (unit-based vocabularies)
"""
from __future__ import annotations

import json
from pathlib import Path


def extract_word_records(data) -> list[dict]:
    if isinstance(data, list):
        return [w for w in data if isinstance(w, dict)]
    if not isinstance(data, dict):
        return []

    if isinstance(data.get("words"), list):
        return [w for w in data["words"] if isinstance(w, dict)]

    records: list[dict] = []
    units = data.get("units")
    if isinstance(units, list):
        for unit in units:
            if isinstance(unit, dict) and isinstance(unit.get("words"), list):
                records.extend(w for w in unit["words"] if isinstance(w, dict))
    return records


def exclude_words(records: list[dict], excluded_ids) -> list[dict]:
    """Drop records whose id (or term, when the id is missing) is excluded."""
    excluded = {str(i) for i in excluded_ids or ()}
    if not excluded:
        return list(records)
    kept = []
    for record in records:
        if not isinstance(record, dict):
            continue
        key = record.get("id") or record.get("term") or record.get("word")
        if str(key) not in excluded:
            kept.append(record)
    return kept


def parse_vocabulary_file(path: Path, excluded_ids=None) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return exclude_words(extract_word_records(data), excluded_ids)
