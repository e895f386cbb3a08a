from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from rich.markup import escape

from ..errors import CommandError, InitAborted
from ..init_config import InitConfig
from ..lib.assets import move_path, remove_tree
from ..lib.console import console
from ..lib.git import clone
from ..lib.render import deployment_variables, render_file

logger = logging.getLogger(__name__)


class DeploymentTemplateStep:
    step_id = "70_deployment_template"

    def __init__(self, init_config: InitConfig) -> None:
        self.init_config = init_config

    def applies(self, state: Dict[str, Any]) -> bool:
        # A --deployment/--no-deployment flag on this run beats the answer
        # recorded by an earlier 60_install_extras.
        flag = (state.get("config") or {}).get("deployment")
        if flag is not None:
            return bool(flag)
        decisions = (state.get("execution") or {}).get("decisions") or {}
        return bool(decisions.get("deployment", False))

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        app_path = cfg.get("app_path")
        app_name = cfg.get("app_name")
        if not app_path or not app_name:
            raise RuntimeError("config.app_path/app_name missing")
        dry_run = bool(cfg.get("dry_run", False))
        ic = self.init_config

        console.print("cloning Deployment Template")
        try:
            clone_dir = clone(ic.deployment_repository, cwd=app_path, dry_run=dry_run)
        except (CommandError, OSError) as e:
            console.print(f"[red]Could not clone {escape(ic.deployment_repository)}[/red]")
            raise InitAborted(self.step_id, str(e)) from e

        try:
            for src_rel, dst_rel in ic.deployment_moves.items():
                move_path(str(Path(clone_dir) / src_rel), str(Path(app_path) / dst_rel), dry_run=dry_run)
        except OSError as e:
            raise InitAborted(self.step_id, f"deployment template is incomplete: {e}") from e
        finally:
            remove_tree(clone_dir, dry_run=dry_run)

        variables = deployment_variables(app_name, release_prefix=ic.deployment_release_prefix)
        for rel in ic.deployment_render:
            try:
                render_file(str(Path(app_path) / rel), variables, dry_run=dry_run)
            except FileNotFoundError as e:
                raise InitAborted(self.step_id, f"deployment template has no {rel}") from e

        logger.info("Deployment template applied (release=%s)", variables["helmProductionName"])
        return state
