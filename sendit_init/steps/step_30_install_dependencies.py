from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from rich.markup import escape

from ..errors import InitAborted
from ..init_config import InitConfig
from ..lib.command import fmt_argv
from ..lib.console import console
from ..lib.pkg import base_install_plan, install, read_template_dependencies
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "30_install_dependencies"

    def __init__(self, init_config: InitConfig) -> None:
        self.init_config = init_config

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        project = state.get("project") or {}
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")
        dry_run = bool(cfg.get("dry_run", False))

        packages = list(self.init_config.base_packages)

        deps_file = Path(app_path) / self.init_config.template_dependencies_file
        if deps_file.exists():
            packages.extend(read_template_dependencies(str(deps_file)))
            if not dry_run:
                deps_file.unlink()

        plan = base_install_plan(
            use_yarn=bool(project.get("use_yarn", False)),
            verbose=bool(cfg.get("verbose", False)),
            packages=packages,
        )
        record_decision(state, "install_argv", plan.argv)

        # Older create-app CLIs did not install react themselves, and a custom
        # template may bring its own dependency list.
        if project.get("react_installed") and not cfg.get("template"):
            logger.info("react and react-dom already present; skipping install")
            return state

        console.print(f"Installing react and react-dom using {plan.command}...")
        console.print()

        result = install(plan, cwd=app_path, dry_run=dry_run)
        if not result.ok:
            console.print(f"[red]`{escape(fmt_argv(plan.argv))}` failed[/red]")
            raise InitAborted(self.step_id, f"{plan.command} exited with {result.returncode}")

        logger.info("Installed %s", ", ".join(packages))
        return state
