from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallPlan:
    command: str
    args: List[str]

    @property
    def argv(self) -> List[str]:
        return [self.command, *self.args]


def uses_yarn(app_path: str) -> bool:
    return (Path(app_path) / "yarn.lock").exists()


def displayed_command(use_yarn: bool) -> str:
    # `yarnpkg` is what gets executed, `yarn` is what users type.
    return "yarn" if use_yarn else "npm"


def base_install_plan(*, use_yarn: bool, verbose: bool, packages: Sequence[str]) -> InstallPlan:
    if use_yarn:
        command = "yarnpkg"
        args = ["add"]
    else:
        command = "npm"
        args = ["install", "--save"]
        if verbose:
            args.append("--verbose")
    return InstallPlan(command=command, args=[*args, *packages])


def read_template_dependencies(path: str) -> List[str]:
    """Return `name@version` specs from a template dependencies file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain an object")
    deps = data.get("dependencies") or {}
    if not isinstance(deps, dict):
        raise ValueError(f"{path}: dependencies must be an object")
    return [f"{name}@{version}" for name, version in deps.items()]


def is_react_installed(package: Dict[str, Any]) -> bool:
    deps = package.get("dependencies") or {}
    return "react" in deps and "react-dom" in deps


def install(plan: InstallPlan, *, cwd: str, dry_run: bool = False) -> CmdResult:
    """Run the install with output going straight to the terminal."""
    return run_cmd(plan.argv, check=False, cwd=cwd, stream=True, dry_run=dry_run)


def add_packages(
    command: Sequence[str],
    packages: Sequence[str],
    *,
    cwd: str,
    dev_flag: str | None = None,
    dry_run: bool = False,
) -> CmdResult | None:
    if not packages:
        return None
    argv = list(command)
    if dev_flag:
        argv.append(dev_flag)
    return run_cmd([*argv, *packages], check=False, cwd=cwd, dry_run=dry_run)
