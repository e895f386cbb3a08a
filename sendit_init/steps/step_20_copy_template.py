from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

from rich.markup import escape

from ..errors import InitAborted
from ..lib.assets import copy_tree
from ..lib.console import console
from ..lib.env import PATHS
from ..state_store import record_decision

logger = logging.getLogger(__name__)


def resolve_template_path(
    *,
    template: str | None,
    original_directory: str | None,
    use_typescript: bool,
) -> str:
    if template:
        return os.path.abspath(os.path.join(original_directory or os.getcwd(), template))
    return PATHS.template_typescript if use_typescript else PATHS.template


class CopyTemplateStep:
    step_id = "20_copy_template"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        project = state.setdefault("project", {})
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")
        dry_run = bool(cfg.get("dry_run", False))

        readme = Path(app_path) / "README.md"
        old_readme = Path(app_path) / "README.old.md"
        renamed = False
        if readme.exists():
            if old_readme.exists():
                # Keep the README saved by an earlier run.
                logger.info("%s already exists; not renaming README.md", old_readme)
            else:
                if not dry_run:
                    readme.rename(old_readme)
                renamed = True
        project["readme_renamed"] = bool(project.get("readme_renamed")) or renamed

        template_path = resolve_template_path(
            template=cfg.get("template"),
            original_directory=cfg.get("original_directory"),
            use_typescript=bool(project.get("use_typescript", False)),
        )
        record_decision(state, "template_path", template_path)

        if not Path(template_path).exists():
            console.print(f"Could not locate supplied template: [green]{escape(template_path)}[/green]")
            raise InitAborted(self.step_id, f"template not found: {template_path}")

        copied = copy_tree(template_path, app_path, dry_run=dry_run)
        logger.info("Copied template %s (%d files)", template_path, len(copied))
        return state
