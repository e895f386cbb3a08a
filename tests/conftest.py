"""
Shared fixtures. Subprocesses are replaced by FakeRunner so no test needs
git, npm or yarn on the machine.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from sendit_init.errors import CommandError
from sendit_init.init_config import load_init_config
from sendit_init.lib.command import CmdResult
from sendit_init.logging_utils import reset_logging
from sendit_init.state_store import ensure_defaults


class FakeRunner:
    """Stands in for run_cmd; matches outcomes by argv prefix."""

    def __init__(self) -> None:
        self.calls: List[Tuple[List[str], Optional[str]]] = []
        self.outcomes: Dict[Tuple[str, ...], Any] = {}
        self.effects: Dict[Tuple[str, ...], Callable[[List[str], Optional[str]], None]] = {}

    def _match(self, table: Dict[Tuple[str, ...], Any], argv: List[str]) -> Any:
        best = None
        for prefix, value in table.items():
            if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best[0])):
                best = (prefix, value)
        return None if best is None else best[1]

    def __call__(self, argv, *, check=True, env=None, cwd=None, input_text=None, stream=False, dry_run=False):
        argv = list(argv)
        self.calls.append((argv, cwd))
        if dry_run:
            return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

        outcome = self._match(self.outcomes, argv)
        if isinstance(outcome, BaseException):
            raise outcome
        returncode = 0 if outcome is None else int(outcome)

        effect = self._match(self.effects, argv)
        if effect is not None and returncode == 0:
            effect(argv, cwd)

        if check and returncode != 0:
            raise CommandError(argv, returncode, "boom")
        return CmdResult(argv=argv, returncode=returncode, stdout="", stderr="")

    def argvs(self) -> List[List[str]]:
        return [argv for argv, _ in self.calls]


@pytest.fixture
def fake_cmd(monkeypatch):
    runner = FakeRunner()
    # Outside any repository and without mercurial unless a test says otherwise.
    runner.outcomes[("git", "rev-parse")] = 128
    runner.outcomes[("hg",)] = FileNotFoundError("hg")
    monkeypatch.setattr("sendit_init.lib.command.run_cmd", runner)
    monkeypatch.setattr("sendit_init.lib.git.run_cmd", runner)
    monkeypatch.setattr("sendit_init.lib.pkg.run_cmd", runner)
    return runner


def fake_deployment_clone(argv: List[str], cwd: Optional[str]) -> None:
    """Lay out a minimal deployment template where `git clone` would."""
    root = Path(cwd or ".") / argv[-1]
    (root / "deployment" / "nginx" / "conf.d").mkdir(parents=True)
    (root / "gitlab-ci.yml").write_text(
        "variables:\n  REGISTRY: <%= registryName %>\n  SHA: ${CI_COMMIT_SHA}\n", encoding="utf-8"
    )
    for env in ("production", "staging", "development"):
        (root / "deployment" / f"values-{env}.yaml").write_text(
            "nameOverride: <%= nameOverride %>\n", encoding="utf-8"
        )
    (root / "deployment" / "nginx" / "conf.d" / "site.conf").write_text(
        "upstream <%= webHttp %> {}\n", encoding="utf-8"
    )
    (root / "README.md").write_text("deployment template\n", encoding="utf-8")


@pytest.fixture
def deployment_clone(fake_cmd):
    fake_cmd.effects[("git", "clone")] = fake_deployment_clone
    return fake_cmd


@pytest.fixture
def init_config():
    return load_init_config()


@pytest.fixture
def app_dir(tmp_path):
    app = tmp_path / "my-app"
    app.mkdir()
    return app


@pytest.fixture
def make_state(app_dir):
    def _make(**config: Any) -> Dict[str, Any]:
        state = ensure_defaults({})
        state["config"].update({"app_path": str(app_dir), "app_name": app_dir.name})
        state["config"].update(config)
        return state

    return _make


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
