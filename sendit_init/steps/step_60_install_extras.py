from __future__ import annotations

import logging
from typing import Any, Dict

from ..init_config import InitConfig
from ..lib.console import ask_yes_no, console
from ..lib.pkg import add_packages
from ..state_store import record_decision, record_warning

logger = logging.getLogger(__name__)

DEPLOYMENT_QUESTION = "Do you need deployment file\n Type Y or N ? :"


class InstallExtrasStep:
    """Ask about deployment files, then add the house tooling on top."""

    step_id = "60_install_extras"

    def __init__(self, init_config: InitConfig) -> None:
        self.init_config = init_config

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")
        dry_run = bool(cfg.get("dry_run", False))

        wants_deployment = cfg.get("deployment")
        if wants_deployment is None:
            wants_deployment = ask_yes_no(DEPLOYMENT_QUESTION)
        record_decision(state, "deployment", bool(wants_deployment))

        console.print(app_path, markup=False)
        console.print("installing .......")

        ic = self.init_config
        for label, packages, dev_flag in (
            ("dependencies", ic.extras_dependencies, None),
            ("devDependencies", ic.extras_dev_dependencies, ic.extras_dev_flag),
        ):
            try:
                result = add_packages(ic.extras_command, packages, cwd=app_path, dev_flag=dev_flag, dry_run=dry_run)
            except OSError as e:
                logger.warning("Could not run %s: %s", " ".join(ic.extras_command), e)
                record_warning(state, {"extras": label, "error": str(e)})
                continue
            if result is not None and not result.ok:
                logger.warning("Installing extra %s failed (exit %s)", label, result.returncode)
                record_warning(state, {"extras": label, "returncode": result.returncode})

        if not wants_deployment:
            console.print("Happy hacking!")
        return state
