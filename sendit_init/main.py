from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, Optional

from rich.markup import escape

from .errors import InitAborted, UnknownStepError
from .init_config import InitConfig, load_init_config
from .lib.console import console
from .lib.env import default_log_path, default_state_path
from .logging_utils import configure_logging
from .pipeline import check_step_ids, run_pipeline
from .state_store import ensure_defaults, load_state, save_state
from .steps import (
    CopyTemplateStep,
    DeploymentTemplateStep,
    GitInitStep,
    InstallDependenciesStep,
    InstallExtrasStep,
    NormalizeGitignoreStep,
    PrintInstructionsStep,
    VerifyTypeScriptStep,
    WritePackageJsonStep,
)

logger = logging.getLogger(__name__)


def build_steps(init_config: InitConfig):
    return [
        WritePackageJsonStep(init_config),
        CopyTemplateStep(),
        NormalizeGitignoreStep(),
        InstallDependenciesStep(init_config),
        VerifyTypeScriptStep(),
        GitInitStep(init_config),
        PrintInstructionsStep(),
        InstallExtrasStep(init_config),
        DeploymentTemplateStep(init_config),
    ]


def run(
    app_path: str,
    app_name: Optional[str] = None,
    verbose: bool = False,
    original_directory: Optional[str] = None,
    template: Optional[str] = None,
    *,
    config_path: Optional[str] = None,
    state_path: Optional[str] = None,
    log_path: Optional[str] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
    dry_run: bool = False,
    deployment: Optional[bool] = None,
) -> Dict[str, Any]:
    """Scaffold an app in app_path, persisting state for resume."""

    app_path = os.path.abspath(app_path)
    app_name = app_name or os.path.basename(app_path)
    state_path = state_path or default_state_path(app_path)
    if dry_run:
        # Nothing goes into the app directory; the "Would ..." lines go to
        # the console unless --log names a file.
        console_level = logging.DEBUG if verbose else logging.INFO
    else:
        log_path = log_path or default_log_path(app_path)
        console_level = logging.DEBUG if verbose else logging.WARNING

    actual_log_path = configure_logging(log_path=log_path, console_level=console_level)

    init_config = load_init_config(config_path)
    steps = build_steps(init_config)
    check_step_ids(steps, start_at, stop_after)

    state = ensure_defaults(load_state(state_path))
    cfg = state["config"]
    cfg.update(
        {
            "app_path": app_path,
            "app_name": app_name,
            "verbose": bool(verbose),
            "original_directory": original_directory,
            "template": template,
            "config_path": config_path,
            "dry_run": bool(dry_run),
        }
    )
    # An answer recorded by an earlier run is kept unless a new one is given.
    if deployment is not None:
        cfg["deployment"] = bool(deployment)
    state.setdefault("execution", {}).setdefault("paths", {})["log_path_requested"] = log_path
    state.setdefault("execution", {}).setdefault("paths", {})["log_path_actual"] = actual_log_path

    try:
        result = run_pipeline(
            state=state,
            steps=steps,
            start_at=start_at,
            stop_after=stop_after,
            force=force,
        )
        state = result.state
        summary = state.setdefault("execution", {}).setdefault("summary", {})
        summary["ran_steps"] = result.ran_steps
        summary["skipped_steps"] = result.skipped_steps
        summary["not_applicable"] = result.not_applicable
        return state
    except Exception as e:
        if isinstance(e, InitAborted):
            logger.error("Scaffolding stopped: %s", e)
        else:
            logger.exception("Scaffolding failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        if not dry_run:
            save_state(state_path, state)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sendit-init", description="Scaffold a React app from the sendit template")
    p.add_argument("app_path", help="Directory to create the app in")
    p.add_argument("--name", default=None, help="App name (default: basename of app_path)")
    p.add_argument("--verbose", action="store_true", help="Verbose package manager output and console logging")
    p.add_argument(
        "--original-directory",
        default=None,
        help="Directory the user started from; --template is resolved against it (default: cwd)",
    )
    p.add_argument("--template", default=None, help="Custom template directory")
    p.add_argument("--config", default=None, help="YAML file merged over the packaged defaults")
    p.add_argument("--state", default=None, help="Path to scaffolding state (json|yaml)")
    p.add_argument("--log", default=None, help="Path to scaffolding log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_git_init)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--force", action="store_true", help="Re-run steps even if marked completed")
    p.add_argument("--dry-run", action="store_true", help="Log commands and copies without running them")

    answer = p.add_mutually_exclusive_group()
    answer.add_argument(
        "--deployment",
        dest="deployment",
        action="store_const",
        const=True,
        default=None,
        help="Add the deployment template without asking",
    )
    answer.add_argument(
        "--no-deployment",
        dest="deployment",
        action="store_const",
        const=False,
        help="Skip the deployment template without asking",
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run(
            args.app_path,
            app_name=args.name,
            verbose=bool(args.verbose),
            original_directory=args.original_directory or os.getcwd(),
            template=args.template,
            config_path=args.config,
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            force=bool(args.force),
            dry_run=bool(args.dry_run),
            deployment=args.deployment,
        )
    except UnknownStepError as e:
        parser.error(str(e))
    except InitAborted as e:
        console.print(f"[red]Aborting: {escape(e.reason)}[/red]")
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
