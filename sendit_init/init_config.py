from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lib.manifests import deep_merge, load_defaults, load_yaml


@dataclass(frozen=True)
class InitConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def scripts(self) -> Dict[str, str]:
        return dict(self._section("package").get("scripts") or {})

    @property
    def eslint_config(self) -> Dict[str, Any]:
        return dict(self._section("package").get("eslint_config") or {"extends": "react-app"})

    @property
    def browserslist(self) -> Any:
        return self._section("package").get("browserslist") or {}

    @property
    def base_packages(self) -> List[str]:
        return [str(p) for p in (self._section("install").get("packages") or ["react", "react-dom"])]

    @property
    def template_dependencies_file(self) -> str:
        return str(self._section("install").get("template_dependencies_file") or ".template.dependencies.json")

    @property
    def commit_message(self) -> str:
        return str(self._section("git").get("commit_message") or "Initial commit from Create React App")

    @property
    def extras_command(self) -> List[str]:
        return [str(a) for a in (self._section("extras").get("command") or ["yarn", "add"])]

    @property
    def extras_dev_flag(self) -> str:
        return str(self._section("extras").get("dev_flag") or "-D")

    @property
    def extras_dependencies(self) -> List[str]:
        return [str(p) for p in (self._section("extras").get("dependencies") or [])]

    @property
    def extras_dev_dependencies(self) -> List[str]:
        return [str(p) for p in (self._section("extras").get("dev_dependencies") or [])]

    @property
    def deployment_repository(self) -> str:
        repo = self._section("deployment").get("repository")
        if not repo:
            raise ValueError("deployment.repository must be set")
        return str(repo)

    @property
    def deployment_release_prefix(self) -> str:
        return str(self._section("deployment").get("release_prefix") or "prod-th")

    @property
    def deployment_moves(self) -> Dict[str, str]:
        moves = self._section("deployment").get("moves") or {}
        if not isinstance(moves, dict):
            raise ValueError("deployment.moves must be a mapping")
        return {str(k): str(v) for k, v in moves.items()}

    @property
    def deployment_render(self) -> List[str]:
        return [str(p) for p in (self._section("deployment").get("render") or [])]


def load_init_config(path: Optional[str] = None) -> InitConfig:
    """Packaged defaults, with an optional user YAML merged on top."""

    raw = load_defaults()
    if path is None:
        return InitConfig(raw=raw)

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("init config must be YAML")

    return InitConfig(raw=deep_merge(raw, load_yaml(p)))
