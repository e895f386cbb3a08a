from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from ..init_config import InitConfig
from ..lib.pkg import is_react_installed, uses_yarn
from ..state_store import record_decision

logger = logging.getLogger(__name__)


def read_package_json(app_path: str, app_name: str) -> Dict[str, Any]:
    p = Path(app_path) / "package.json"
    if not p.exists():
        return {"name": app_name, "version": "0.1.0", "private": True}
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{p} must contain an object")
    return data


def write_package_json(app_path: str, package: Dict[str, Any]) -> None:
    p = Path(app_path) / "package.json"
    p.write_text(json.dumps(package, indent=2, ensure_ascii=False) + os.linesep, encoding="utf-8")


class WritePackageJsonStep:
    step_id = "10_write_package_json"

    def __init__(self, init_config: InitConfig) -> None:
        self.init_config = init_config

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")
        dry_run = bool(cfg.get("dry_run", False))

        package = read_package_json(app_path, cfg.get("app_name") or Path(app_path).name)
        package["dependencies"] = package.get("dependencies") or {}

        use_typescript = package["dependencies"].get("typescript") is not None
        use_yarn = uses_yarn(app_path)

        package["scripts"] = self.init_config.scripts
        package["eslintConfig"] = self.init_config.eslint_config
        package["browserslist"] = self.init_config.browserslist

        if dry_run:
            logger.info("Would write %s", str(Path(app_path) / "package.json"))
        else:
            Path(app_path).mkdir(parents=True, exist_ok=True)
            write_package_json(app_path, package)

        project = state.setdefault("project", {})
        project["use_yarn"] = use_yarn
        project["use_typescript"] = use_typescript
        project["react_installed"] = is_react_installed(package)
        record_decision(state, "package_manager", "yarn" if use_yarn else "npm")

        logger.info("Wrote package.json (yarn=%s typescript=%s)", use_yarn, use_typescript)
        return state
