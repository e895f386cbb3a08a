from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.assets import move_path
from ..lib.env import PATHS

logger = logging.getLogger(__name__)


def normalize_gitignore(app_path: str) -> str:
    """Turn the template's `gitignore` into `.gitignore`.

    Templates ship the file without the dot because npm publishing renames
    `.gitignore` to `.npmignore`. When the app already has a `.gitignore`
    the template's entries are appended to it.

    Returns "renamed", "appended" or "missing".
    """
    src = Path(app_path) / "gitignore"
    dst = Path(app_path) / ".gitignore"
    if not src.exists():
        return "missing"
    try:
        move_path(str(src), str(dst))
        return "renamed"
    except FileExistsError:
        data = src.read_text(encoding="utf-8")
        existing = dst.read_text(encoding="utf-8")
        with dst.open("a", encoding="utf-8") as f:
            if existing and not existing.endswith("\n"):
                f.write("\n")
            f.write(data)
        src.unlink()
        return "appended"


def ensure_ignored(app_path: str, entry: str) -> bool:
    """Append entry to .gitignore unless already listed. Returns True if added."""
    p = Path(app_path) / ".gitignore"
    lines = p.read_text(encoding="utf-8").splitlines() if p.exists() else []
    if entry in (ln.strip() for ln in lines):
        return False
    with p.open("a", encoding="utf-8") as f:
        if lines and p.read_text(encoding="utf-8")[-1:] != "\n":
            f.write("\n")
        f.write(f"{entry}\n")
    return True


class NormalizeGitignoreStep:
    step_id = "25_normalize_gitignore"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")

        if bool(cfg.get("dry_run", False)):
            logger.info("Would normalize %s/gitignore", app_path)
            return state

        outcome = normalize_gitignore(app_path)
        if outcome == "missing":
            logger.info("Template has no gitignore; leaving .gitignore as is")
        ensure_ignored(app_path, f"/{PATHS.work_dir_name}/")

        logger.info("Normalized .gitignore (%s)", outcome)
        return state
