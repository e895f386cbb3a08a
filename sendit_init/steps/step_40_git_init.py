from __future__ import annotations

import logging
from typing import Any, Dict

from ..init_config import InitConfig
from ..lib.console import console
from ..lib.git import try_git_init
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class GitInitStep:
    step_id = "40_git_init"

    def __init__(self, init_config: InitConfig) -> None:
        self.init_config = init_config

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")

        initialized = try_git_init(
            app_path,
            commit_message=self.init_config.commit_message,
            dry_run=bool(cfg.get("dry_run", False)),
        )
        record_decision(state, "git_initialized", initialized)
        if initialized:
            console.print()
            console.print("Initialized a git repository.")
        return state
