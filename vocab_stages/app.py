"""FastAPI application exposing question banks, grading and progression."""
from __future__ import annotations

import logging
import random
import uuid

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from vocab_stages.config import Settings, load_settings, save_settings
from vocab_stages.generators.fill_in import (
    generate_fill_in_meaning_questions,
    generate_fill_in_word_questions,
)
from vocab_stages.grader import MEANING, WORD, FillInGrader
from vocab_stages.parsers.vocabulary_file import exclude_words
from vocab_stages.parsers.word_normalizer import normalize_words
from vocab_stages.progression import (
    FILL_IN,
    MATCH,
    NORMAL,
    ProgressState,
    can_start,
    complete_mode,
    initial_state,
    record_game_result,
    start_stage,
)
from vocab_stages.question_bank import (
    STAGE_IDS,
    build_question_bank,
    match_word_pool,
    shuffle_stage_questions,
)
from vocab_stages.session import QuizSession

app = FastAPI(title="Vocab Stages")

_log = logging.getLogger("vocab_stages.app")

# Global state (initialized on startup)
_settings: Settings | None = None
_progress: dict[str, ProgressState] = {}  # learner id -> progression state
_active_sessions: dict[str, dict] = {}  # session id -> {"learner", "session"}

INSUFFICIENT_VOCABULARY = "insufficient vocabulary"


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def _get_arbiter():
    s = get_settings()
    if s.arbiter_provider == "none":
        return None
    if s.arbiter_provider == "http":
        from vocab_stages.providers.arbiter_http import HttpArbiter
        return HttpArbiter(s.arbiter_url, timeout=s.arbiter_timeout)

    from vocab_stages.providers.arbiter_llm import LLMArbiter
    if s.arbiter_provider == "ollama":
        from vocab_stages.providers.llm_ollama import OllamaProvider
        return LLMArbiter(OllamaProvider(base_url=s.ollama_url, model=s.llm_model,
                                         timeout=s.arbiter_timeout))
    elif s.arbiter_provider == "anthropic":
        from vocab_stages.providers.llm_anthropic import AnthropicProvider
        return LLMArbiter(AnthropicProvider())
    elif s.arbiter_provider == "openai":
        from vocab_stages.providers.llm_openai import OpenAIProvider
        return LLMArbiter(OpenAIProvider())
    raise ValueError(f"Unknown arbiter provider: {s.arbiter_provider}")


def _get_grader() -> FillInGrader:
    return FillInGrader.from_settings(get_settings(), _get_arbiter())


def _rng() -> random.Random:
    return random.Random(get_settings().random_seed)


def _progress_for(learner: str) -> ProgressState:
    if learner not in _progress:
        _progress[learner] = initial_state()
    return _progress[learner]


def _words_from(body: dict):
    records = body.get("words") or []
    if not isinstance(records, list):
        raise HTTPException(400, "words must be a list")
    return normalize_words(exclude_words(records, body.get("excluded_ids")))


@app.on_event("startup")
async def startup():
    global _settings
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()


# ── API: Question bank ────────────────────────────────────────────────────

@app.post("/api/bank")
async def api_bank(request: Request):
    body = await request.json()
    words = _words_from(body)
    bank = build_question_bank(words, get_settings(), _rng())
    if bank is None:
        raise HTTPException(422, INSUFFICIENT_VOCABULARY)
    return {
        "word_count": len(words),
        "stages": {str(sid): [q.to_dict() for q in bank[sid]] for sid in STAGE_IDS},
    }


# ── API: Grading ──────────────────────────────────────────────────────────

@app.post("/api/grade")
async def api_grade(request: Request):
    body = await request.json()
    direction = body.get("direction", MEANING)
    if direction not in (WORD, MEANING):
        raise HTTPException(400, f"Unknown direction: {direction}")
    result = await _get_grader().grade(
        body.get("term", ""), body.get("expected", ""), body.get("answer", ""), direction,
    )
    return result.to_dict()


# ── API: Progress ─────────────────────────────────────────────────────────

@app.get("/api/progress/{learner}")
async def api_progress(learner: str):
    return _progress_for(learner).to_dict()


@app.post("/api/progress/{learner}/reset")
async def api_progress_reset(learner: str):
    _progress[learner] = initial_state()
    for sid in [k for k, v in _active_sessions.items() if v["learner"] == learner]:
        del _active_sessions[sid]
    return _progress[learner].to_dict()


@app.post("/api/progress/{learner}/game-result")
async def api_game_result(learner: str, request: Request):
    body = await request.json()
    if "stage_id" not in body:
        raise HTTPException(400, "stage_id is required")
    mode = body.get("mode", MATCH)
    if mode != MATCH:
        raise HTTPException(400, f"Game results are only recorded for {MATCH!r} mode")
    s = get_settings()
    state = record_game_result(
        _progress_for(learner),
        int(body["stage_id"]),
        mode,
        int(body.get("correct_count", 0)),
        s.min_game_correct,
    )
    _progress[learner] = state
    return state.to_dict()


# ── API: Quiz sessions ────────────────────────────────────────────────────

@app.post("/api/session/start")
async def api_session_start(request: Request):
    body = await request.json()
    s = get_settings()
    learner = body.get("learner", "default")
    stage_id = int(body.get("stage_id", 1))
    mode = body.get("mode", NORMAL)
    words = _words_from(body)
    state = _progress_for(learner)
    rng = _rng()

    pool = match_word_pool(stage_id, words) if mode == MATCH else None
    pool_size = len(pool) if pool is not None else None
    if not can_start(state, stage_id, mode, pool_size, s.min_match_words):
        raise HTTPException(409, f"Stage {stage_id} cannot be started in mode {mode!r}")

    if mode == MATCH:
        _progress[learner] = start_stage(state, stage_id, mode, pool_size, s.min_match_words)
        return {"stage_id": stage_id, "mode": mode, "match_words": pool}

    if mode == FILL_IN:
        direction = body.get("direction", MEANING)
        generate = (generate_fill_in_word_questions if direction == WORD
                    else generate_fill_in_meaning_questions)
        questions = generate(words, s.fill_in_limit, rng)
    else:
        bank = build_question_bank(words, s, rng)
        questions = shuffle_stage_questions(bank[stage_id], rng) if bank else []
    if not questions:
        raise HTTPException(422, INSUFFICIENT_VOCABULARY)

    _progress[learner] = start_stage(state, stage_id, mode)
    session_id = str(uuid.uuid4())
    _active_sessions[session_id] = {
        "learner": learner,
        "session": QuizSession(stage_id=stage_id, mode=mode, questions=questions),
    }
    _log.info("Session %s: learner %s, stage %d, %s, %d questions",
              session_id, learner, stage_id, mode, len(questions))
    return {
        "session_id": session_id,
        "stage_id": stage_id,
        "mode": mode,
        "total": len(questions),
        "question": questions[0].to_dict(include_answer=False),
    }


@app.post("/api/session/answer")
async def api_session_answer(request: Request):
    body = await request.json()
    session_id = body.get("session_id")
    if session_id not in _active_sessions:
        raise HTTPException(404, "Session not found")

    entry = _active_sessions[session_id]
    session: QuizSession = entry["session"]
    question = session.current
    if question is None:
        raise HTTPException(400, "No current question")

    if question.question_type in ("fill-in-word", "fill-in-meaning"):
        outcome = await session.submit_text(str(body.get("answer", "")), _get_grader())
    else:
        selected = body.get("selected")
        if not isinstance(selected, list) or not all(isinstance(i, int) for i in selected):
            raise HTTPException(400, "selected must be a list of option indexes")
        outcome = session.submit_choice(selected)

    answer_key = question.to_dict()
    result = {
        "correct": outcome.is_correct,
        "feedback": outcome.feedback,
        "tier": outcome.tier,
        "correct_answer": answer_key["correctAnswer"],
        "correct_answers": answer_key.get("correctAnswers"),
        "explanation": question.explanation,
        "session_progress": {
            "answered": session.answered,
            "correct": session.correct_count,
            "remaining": len(session.questions) - session.index,
        },
        "session_complete": outcome.finished,
    }

    if outcome.finished:
        learner = entry["learner"]
        state = complete_mode(_progress_for(learner), session.stage_id, session.mode)
        _progress[learner] = state
        result["summary"] = {
            "total": len(session.questions),
            "correct": session.correct_count,
            "accuracy": session.accuracy,
            "wrong_word_ids": session.wrong_word_ids,
        }
        result["progress"] = state.to_dict()
        del _active_sessions[session_id]
    else:
        result["next_question"] = session.current.to_dict(include_answer=False)

    return result


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
