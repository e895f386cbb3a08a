from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Suggested values are only filled in when missing; required values are
# forced because the bundler depends on them.
SUGGESTED_COMPILER_OPTIONS: Dict[str, Any] = {
    "target": "es5",
    "lib": ["dom", "dom.iterable", "esnext"],
    "allowJs": True,
    "skipLibCheck": True,
    "esModuleInterop": True,
    "allowSyntheticDefaultImports": True,
    "strict": True,
    "forceConsistentCasingInFileNames": True,
}

REQUIRED_COMPILER_OPTIONS: Dict[str, Any] = {
    "module": "esnext",
    "moduleResolution": "node",
    "resolveJsonModule": True,
    "isolatedModules": True,
    "noEmit": True,
    "jsx": "preserve",
}

APP_ENV_DTS = '/// <reference types="react-scripts" />\n'


def verify_tsconfig(app_path: str) -> list[str]:
    """Create or patch tsconfig.json. Returns the human-readable changes."""
    p = Path(app_path) / "tsconfig.json"
    changes: list[str] = []

    if p.exists():
        tsconfig = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(tsconfig, dict):
            raise ValueError(f"{p} must contain an object")
    else:
        tsconfig = {}
        changes.append("created tsconfig.json")

    opts = tsconfig.setdefault("compilerOptions", {})
    for key, value in SUGGESTED_COMPILER_OPTIONS.items():
        if key not in opts:
            opts[key] = value
            changes.append(f"compilerOptions.{key} suggested value: {json.dumps(value)}")
    for key, value in REQUIRED_COMPILER_OPTIONS.items():
        if opts.get(key) != value:
            opts[key] = value
            changes.append(f"compilerOptions.{key} must be {json.dumps(value)}")
    if "include" not in tsconfig:
        tsconfig["include"] = ["src"]
        changes.append("include should be [\"src\"]")

    if changes:
        p.write_text(json.dumps(tsconfig, indent=2) + os.linesep, encoding="utf-8")
    return changes


def ensure_app_env_dts(app_path: str) -> bool:
    p = Path(app_path) / "src" / "react-app-env.d.ts"
    if p.exists():
        return False
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(APP_ENV_DTS, encoding="utf-8")
    return True


class VerifyTypeScriptStep:
    step_id = "35_verify_typescript"

    def applies(self, state: Dict[str, Any]) -> bool:
        return bool((state.get("project") or {}).get("use_typescript", False))

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        app_path = cfg.get("app_path")
        if not app_path:
            raise RuntimeError("config.app_path missing")

        if bool(cfg.get("dry_run", False)):
            logger.info("Would verify tsconfig.json in %s", app_path)
            return state

        changes = verify_tsconfig(app_path)
        for change in changes:
            logger.info("tsconfig: %s", change)
        if ensure_app_env_dts(app_path):
            logger.info("Created src/react-app-env.d.ts")
        return state
