from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from rich.markup import escape

from ..lib.console import console
from ..lib.pkg import displayed_command


def cd_path(app_path: str, app_name: str, original_directory: Optional[str]) -> str:
    """The shortest way back into the app from where the user started."""
    if original_directory and os.path.join(original_directory, app_name) == app_path:
        return app_name
    return app_path


def usage_commands(use_yarn: bool) -> List[Tuple[str, List[str]]]:
    cmd = displayed_command(use_yarn)
    run = "" if use_yarn else "run "
    return [
        (f"{cmd} start", ["Starts the development server."]),
        (f"{cmd} {run}build", ["Bundles the app into static files for production."]),
        (f"{cmd} test", ["Starts the test runner."]),
        (
            f"{cmd} {run}eject",
            [
                "Removes this tool and copies build dependencies, configuration files",
                "and scripts into the app directory. If you do this, you can't go back!",
            ],
        ),
    ]


class PrintInstructionsStep:
    step_id = "50_print_instructions"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        project = state.get("project") or {}
        app_path = str(cfg.get("app_path"))
        app_name = str(cfg.get("app_name"))
        use_yarn = bool(project.get("use_yarn", False))
        cmd = displayed_command(use_yarn)

        console.print()
        console.print(f"Success! Created {escape(app_name)} at {escape(app_path)}")
        console.print("Inside that directory, you can run several commands:")
        console.print()
        for command, lines in usage_commands(use_yarn):
            console.print(f"[cyan]  {command}[/cyan]")
            for line in lines:
                console.print(f"    {line}")
            console.print()
        console.print("We suggest that you begin by typing:")
        console.print()
        console.print(f"[cyan]  cd[/cyan] {escape(cd_path(app_path, app_name, cfg.get('original_directory')))}")
        console.print(f"  [cyan]{cmd} start[/cyan]")
        if project.get("readme_renamed"):
            console.print()
            console.print("[yellow]You had a `README.md` file, we renamed it to `README.old.md`[/yellow]")
        console.print()
        console.print()
        return state
