from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .errors import UnknownStepError
from .state_store import is_step_completed, mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single scaffolding step.

    Steps may also define `applies(state) -> bool`; a step that does not
    apply is skipped without being marked completed, so a later run with
    different answers still gets to it.
    """

    step_id: str

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]
    not_applicable: List[str] = field(default_factory=list)


def _applies(step: Step, state: Dict[str, Any]) -> bool:
    check = getattr(step, "applies", None)
    return True if check is None else bool(check(state))


def check_step_ids(steps: Sequence[Step], *step_ids: Optional[str]) -> None:
    known = [s.step_id for s in steps]
    for step_id in step_ids:
        if step_id is not None and step_id not in known:
            raise UnknownStepError(f"Unknown step_id {step_id!r} (expected one of: {', '.join(known)})")


def run_pipeline(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
) -> PipelineResult:
    """Run steps in order with resume semantics."""

    check_step_ids(steps, start_at, stop_after)

    ran: List[str] = []
    skipped: List[str] = []
    not_applicable: List[str] = []

    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                continue

        state.setdefault("execution", {})["current_step"] = step.step_id

        if (not force) and is_step_completed(state, step.step_id):
            logger.info("Skipping step %s (already completed)", step.step_id)
            skipped.append(step.step_id)
        elif not _applies(step, state):
            logger.info("Skipping step %s (not applicable)", step.step_id)
            not_applicable.append(step.step_id)
        else:
            logger.info("Running step %s", step.step_id)
            state = step.run(state)
            mark_step_completed(state, step.step_id)
            ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped, not_applicable=not_applicable)
