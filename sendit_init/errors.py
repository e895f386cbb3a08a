from __future__ import annotations

import shlex
from typing import Sequence


class CommandError(RuntimeError):
    """A subprocess exited non-zero while check=True."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        cmd = " ".join(shlex.quote(a) for a in self.argv)
        msg = f"Command failed ({returncode}): {cmd}"
        if stderr:
            msg += f"\n{stderr}"
        super().__init__(msg)


class InitAborted(RuntimeError):
    """A step could not continue; the remaining steps are not run."""

    def __init__(self, step_id: str, reason: str) -> None:
        self.step_id = step_id
        self.reason = reason
        super().__init__(f"{step_id}: {reason}")


class UnknownStepError(ValueError):
    """--start-at/--stop-after named a step that does not exist."""
