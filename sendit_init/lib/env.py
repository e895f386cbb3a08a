from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_PKG_ROOT = Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class Paths:
    package_root: str = str(_PKG_ROOT)
    template: str = str(_PKG_ROOT / "template")
    template_typescript: str = str(_PKG_ROOT / "template-typescript")
    defaults_manifest: str = "manifests/defaults.yaml"
    work_dir_name: str = ".sendit-init"
    state_name: str = "state.json"
    log_name: str = "init.log"


PATHS = Paths()


def work_dir(app_path: str) -> str:
    return str(Path(app_path) / PATHS.work_dir_name)


def default_state_path(app_path: str) -> str:
    return str(Path(work_dir(app_path)) / PATHS.state_name)


def default_log_path(app_path: str) -> str:
    return str(Path(work_dir(app_path)) / PATHS.log_name)
