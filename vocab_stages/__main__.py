"""CLI entry point for vocab-stages.

Usage:
  python -m vocab_stages serve [--port PORT] [--host HOST]
  python -m vocab_stages bank FILE [--seed N] [--exclude ID,ID,...]
"""
from __future__ import annotations

import json
import random
import sys
from pathlib import Path


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "bank":
        _bank(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, bank")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str | None) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "8765"))
    host = _parse_flag(args, "--host", "127.0.0.1")

    print(f"Starting Vocab Stages on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "vocab_stages.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _bank(args: list[str]):
    from vocab_stages.config import load_settings
    from vocab_stages.parsers.vocabulary_file import parse_vocabulary_file
    from vocab_stages.parsers.word_normalizer import normalize_words
    from vocab_stages.progression import STAGE_CATALOG
    from vocab_stages.question_bank import build_question_bank

    if not args or args[0].startswith("--"):
        print("Usage: python -m vocab_stages bank FILE [--seed N] [--exclude ID,ID,...]")
        sys.exit(1)

    path = Path(args[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    settings = load_settings()
    seed = _parse_flag(args, "--seed", None)
    rng = random.Random(int(seed) if seed is not None else settings.random_seed)
    excluded = [i for i in (_parse_flag(args, "--exclude", "") or "").split(",") if i]

    words = normalize_words(parse_vocabulary_file(path, excluded))
    bank = build_question_bank(words, settings, rng)
    if bank is None:
        print(f"Insufficient vocabulary: {len(words)} usable words in {path.name}")
        sys.exit(1)

    print(f"{len(words)} words from {path.name}", file=sys.stderr)
    for sid, title, _reward in STAGE_CATALOG:
        print(f"  Stage {sid} ({title}): {len(bank[sid])} questions", file=sys.stderr)

    out = {str(sid): [q.to_dict() for q in questions] for sid, questions in bank.items()}
    print(json.dumps(out, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
