"""
Tests for the YAML config layer, the state store and the step pipeline.
"""
from __future__ import annotations

from typing import Any, Dict

import pytest

from sendit_init.init_config import load_init_config
from sendit_init.lib.manifests import deep_merge
from sendit_init.pipeline import run_pipeline
from sendit_init.state_store import ensure_defaults, is_step_completed, load_state, save_state


# ─────────────────────────────────────────────────────────────────────────────
# InitConfig
# ─────────────────────────────────────────────────────────────────────────────

def test_defaults_carry_scripts_and_packages(init_config):
    assert init_config.scripts["start"] == "react-app-rewired start --scripts-version sendit-react-scripts"
    assert set(init_config.scripts) == {"start", "build", "test", "eject", "storybook", "build-storybook"}
    assert init_config.eslint_config == {"extends": "react-app"}
    assert init_config.base_packages == ["react", "react-dom"]
    assert init_config.extras_command == ["yarn", "add"]
    assert "mobx" in init_config.extras_dependencies
    assert "@storybook/react" in init_config.extras_dev_dependencies
    assert init_config.deployment_moves == {"gitlab-ci.yml": ".gitlab-ci.yml", "deployment": "deployment"}
    assert len(init_config.deployment_render) == 5


def test_user_config_is_merged_over_defaults(tmp_path):
    p = tmp_path / "override.yaml"
    p.write_text(
        "git:\n  commit_message: Bootstrap\ndeployment:\n  release_prefix: prod-sg\n",
        encoding="utf-8",
    )
    cfg = load_init_config(str(p))
    assert cfg.commit_message == "Bootstrap"
    assert cfg.deployment_release_prefix == "prod-sg"
    # untouched keys in the same section survive
    assert cfg.deployment_repository.endswith("template-deployment-frontend.git")


def test_user_config_must_be_yaml(tmp_path):
    p = tmp_path / "override.json"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_init_config(str(p))


def test_missing_user_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_init_config(str(tmp_path / "nope.yaml"))


def test_deep_merge_replaces_lists_and_merges_mappings():
    base = {"a": {"x": 1, "y": [1, 2]}, "b": 1}
    merged = deep_merge(base, {"a": {"y": [3]}})
    assert merged == {"a": {"x": 1, "y": [3]}, "b": 1}
    assert base["a"]["y"] == [1, 2]


# ─────────────────────────────────────────────────────────────────────────────
# state store
# ─────────────────────────────────────────────────────────────────────────────

def test_load_state_missing_file_is_empty(tmp_path):
    assert load_state(str(tmp_path / "state.json")) == {}


@pytest.mark.parametrize("name", ["state.json", "state.yaml"])
def test_state_persists(tmp_path, name):
    path = str(tmp_path / "nested" / name)
    state = ensure_defaults({})
    state["execution"]["completed_steps"].append("10_write_package_json")
    save_state(path, state)
    assert load_state(path)["execution"]["completed_steps"] == ["10_write_package_json"]


def test_load_state_rejects_non_mapping(tmp_path):
    p = tmp_path / "state.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_state(str(p))


def test_ensure_defaults_keeps_recorded_values():
    state = ensure_defaults({"config": {"deployment": True}})
    assert state["config"]["deployment"] is True
    assert state["execution"]["completed_steps"] == []


# ─────────────────────────────────────────────────────────────────────────────
# pipeline
# ─────────────────────────────────────────────────────────────────────────────

class _Recorder:
    def __init__(self, step_id: str, log: list, applies: bool = True) -> None:
        self.step_id = step_id
        self._log = log
        self._applies = applies

    def applies(self, state: Dict[str, Any]) -> bool:
        return self._applies

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        self._log.append(self.step_id)
        return state


def _steps(log, **not_applicable):
    return [_Recorder(s, log, applies=s not in not_applicable) for s in ("a", "b", "c")]


def test_pipeline_runs_in_order_and_marks_completed():
    log: list = []
    state = ensure_defaults({})
    result = run_pipeline(state=state, steps=_steps(log))
    assert log == ["a", "b", "c"]
    assert result.ran_steps == ["a", "b", "c"]
    assert all(is_step_completed(state, s) for s in "abc")
    assert state["execution"]["current_step"] is None


def test_pipeline_skips_completed_unless_forced():
    log: list = []
    state = ensure_defaults({})
    state["execution"]["completed_steps"] = ["a"]
    result = run_pipeline(state=state, steps=_steps(log))
    assert log == ["b", "c"]
    assert result.skipped_steps == ["a"]

    log.clear()
    run_pipeline(state=state, steps=_steps(log), force=True)
    assert log == ["a", "b", "c"]


def test_pipeline_start_at_and_stop_after():
    log: list = []
    run_pipeline(state=ensure_defaults({}), steps=_steps(log), start_at="b", stop_after="b")
    assert log == ["b"]


def test_pipeline_unknown_bound():
    with pytest.raises(ValueError):
        run_pipeline(state=ensure_defaults({}), steps=_steps([]), start_at="zz")


def test_pipeline_not_applicable_is_not_marked_completed():
    log: list = []
    state = ensure_defaults({})
    result = run_pipeline(state=state, steps=_steps(log, b=True))
    assert log == ["a", "c"]
    assert result.not_applicable == ["b"]
    assert not is_step_completed(state, "b")


def test_pipeline_stops_on_exception():
    class Boom:
        step_id = "b"

        def run(self, state):
            raise RuntimeError("boom")

    log: list = []
    state = ensure_defaults({})
    steps = [_Recorder("a", log), Boom(), _Recorder("c", log)]
    with pytest.raises(RuntimeError):
        run_pipeline(state=state, steps=steps)
    assert log == ["a"]
    assert state["execution"]["current_step"] == "b"
