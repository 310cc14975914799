"""Stage progression state machine.

Stages move ``locked -> unlocked -> current -> completed``.  Completing any
practice mode of a stage completes the stage and promotes the next locked
stage to ``current``; further modes are only recorded in the stage's
completed-mode set.  At most one stage is ``current`` at a time, and none
once all five are completed (victory).

State is an immutable ``ProgressState`` value: every transition takes a
state and returns a new one, so callers own where it is kept.  Invalid
events (unknown or locked stage, unavailable mode) leave the state as is.
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from vocab_stages.models import StageDefinition

_log = logging.getLogger("vocab_stages.progress")

LOCKED = "locked"
UNLOCKED = "unlocked"
CURRENT = "current"
COMPLETED = "completed"
STATUSES = (LOCKED, UNLOCKED, CURRENT, COMPLETED)

NORMAL = "normal"
MATCH = "match"
FILL_IN = "fill-in"

# (id, title, reward points)
STAGE_CATALOG = (
    (1, "Meaning Quiz", 50),
    (2, "Derivatives", 75),
    (3, "Synonyms & Antonyms", 100),
    (4, "Sentence Completion", 125),
    (5, "All in One", 150),
)

STAGE_MODES: dict[int, tuple[str, ...]] = {
    1: (NORMAL, MATCH, FILL_IN),
    2: (NORMAL, MATCH, FILL_IN),
    3: (NORMAL, FILL_IN),
    4: (NORMAL, FILL_IN),
    5: (NORMAL, FILL_IN),
}


@dataclass(frozen=True)
class ProgressState:
    stages: tuple[StageDefinition, ...]
    completed_modes: Mapping[int, frozenset[str]] = field(default_factory=dict)
    active_stage: int | None = None
    active_mode: str | None = None

    def stage(self, stage_id: int) -> StageDefinition | None:
        return next((s for s in self.stages if s.id == stage_id), None)

    @property
    def current_stage(self) -> int | None:
        return next((s.id for s in self.stages if s.status == CURRENT), None)

    @property
    def victory(self) -> bool:
        return is_victory(self)

    def to_dict(self) -> dict:
        return {
            "stages": [s.to_dict() for s in self.stages],
            "completedModes": {
                str(sid): sorted(modes) for sid, modes in self.completed_modes.items()
            },
            "activeStage": self.active_stage,
            "activeMode": self.active_mode,
            "victory": self.victory,
        }


def default_stages() -> list[StageDefinition]:
    return [
        StageDefinition(sid, title, CURRENT if sid == 1 else LOCKED, reward)
        for sid, title, reward in STAGE_CATALOG
    ]


def normalize_stages(stages: Iterable[StageDefinition] | None) -> tuple[StageDefinition, ...]:
    """Repair a stage list so it has all five stages and at most one current.

    Unknown ids and statuses are dropped; missing stages come back locked.
    Extra ``current`` stages are demoted to ``unlocked`` (the lowest keeps
    it).  With no current stage and stages left to do, the lowest
    unfinished stage becomes current.
    """
    given = {}
    for s in stages or ():
        if s.id in STAGE_MODES and s.status in STATUSES and s.id not in given:
            given[s.id] = s

    repaired = []
    for sid, title, reward in STAGE_CATALOG:
        s = given.get(sid)
        repaired.append(
            dataclasses.replace(s) if s else StageDefinition(sid, title, LOCKED, reward)
        )

    current_seen = False
    for i, s in enumerate(repaired):
        if s.status == CURRENT:
            if current_seen:
                repaired[i] = dataclasses.replace(s, status=UNLOCKED)
            current_seen = True

    if not current_seen:
        pending = [i for i, s in enumerate(repaired) if s.status != COMPLETED]
        if pending:
            i = pending[0]
            repaired[i] = dataclasses.replace(repaired[i], status=CURRENT)

    return tuple(repaired)


def initial_state(stages: Iterable[StageDefinition] | None = None) -> ProgressState:
    return ProgressState(
        stages=normalize_stages(stages if stages is not None else default_stages()),
        completed_modes={sid: frozenset() for sid in STAGE_MODES},
    )


def is_victory(state: ProgressState) -> bool:
    return bool(state.stages) and all(s.status == COMPLETED for s in state.stages)


def available_modes(
    stage_id: int,
    match_pool_size: int | None = None,
    min_match_words: int = 5,
) -> list[str]:
    """Practice modes a stage offers; match needs enough words to pair up."""
    modes = list(STAGE_MODES.get(stage_id, ()))
    if match_pool_size is not None and match_pool_size < min_match_words and MATCH in modes:
        modes.remove(MATCH)
    return modes


def can_start(
    state: ProgressState,
    stage_id: int,
    mode: str = NORMAL,
    match_pool_size: int | None = None,
    min_match_words: int = 5,
) -> bool:
    stage = state.stage(stage_id)
    if stage is None or stage.status == LOCKED:
        return False
    return mode in available_modes(stage_id, match_pool_size, min_match_words)


def start_stage(
    state: ProgressState,
    stage_id: int,
    mode: str = NORMAL,
    match_pool_size: int | None = None,
    min_match_words: int = 5,
) -> ProgressState:
    if not can_start(state, stage_id, mode, match_pool_size, min_match_words):
        _log.warning("Cannot start stage %s in mode %r", stage_id, mode)
        return state
    return dataclasses.replace(state, active_stage=stage_id, active_mode=mode)


def complete_mode(state: ProgressState, stage_id: int, mode: str) -> ProgressState:
    """Record *mode* as done for *stage_id* and advance the stage map."""
    stage = state.stage(stage_id)
    if stage is None or stage.status == LOCKED:
        _log.warning("Ignoring completion of unavailable stage %s", stage_id)
        return state
    if mode not in STAGE_MODES[stage_id]:
        _log.warning("Ignoring completion of unknown mode %r for stage %s", mode, stage_id)
        return state

    stages = []
    for s in state.stages:
        if s.id == stage_id:
            s = dataclasses.replace(s, status=COMPLETED)
        elif s.id == stage_id + 1 and s.status == LOCKED:
            s = dataclasses.replace(s, status=CURRENT)
        stages.append(s)

    completed = dict(state.completed_modes)
    completed[stage_id] = completed.get(stage_id, frozenset()) | {mode}

    new_state = ProgressState(
        stages=normalize_stages(stages),
        completed_modes=completed,
    )
    if new_state.victory:
        _log.info("All stages completed")
    else:
        _log.info("Stage %s completed (%s); current stage is %s",
                  stage_id, mode, new_state.current_stage)
    return new_state


def record_game_result(
    state: ProgressState,
    stage_id: int,
    mode: str,
    correct_count: int,
    min_correct: int = 3,
) -> ProgressState:
    """Match games complete the stage once enough pairs are right."""
    if correct_count >= min_correct:
        return complete_mode(state, stage_id, mode)
    _log.info("Stage %s %s: %d correct, %d needed", stage_id, mode, correct_count, min_correct)
    return dataclasses.replace(state, active_stage=None, active_mode=None)
