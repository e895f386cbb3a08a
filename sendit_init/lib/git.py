from __future__ import annotations

import logging
from pathlib import Path

from ..errors import CommandError
from .assets import remove_tree
from .command import command_exists, run_cmd

logger = logging.getLogger(__name__)


def is_in_git_repository(cwd: str) -> bool:
    return command_exists(["git", "rev-parse", "--is-inside-work-tree"], cwd=cwd)


def is_in_mercurial_repository(cwd: str) -> bool:
    return command_exists(["hg", "--cwd", ".", "root"], cwd=cwd)


def try_git_init(app_path: str, *, commit_message: str, dry_run: bool = False) -> bool:
    """Create a repository with one commit.

    Returns False without touching anything when git is unavailable, the
    app already lives in a git/hg work tree, or this is a dry run. A failed commit after a
    successful init removes the new .git so no half-made repository stays.
    """
    if dry_run:
        logger.info("Would initialize a git repository in %s", app_path)
        return False

    did_init = False
    try:
        run_cmd(["git", "--version"], cwd=app_path)
        if is_in_git_repository(app_path) or is_in_mercurial_repository(app_path):
            logger.info("Skipping git init: %s is already under version control", app_path)
            return False

        run_cmd(["git", "init"], cwd=app_path)
        did_init = True

        run_cmd(["git", "add", "-A"], cwd=app_path)
        run_cmd(["git", "commit", "-m", commit_message], cwd=app_path)
        return True
    except (CommandError, OSError) as e:
        logger.info("git init skipped: %s", e)
        if did_init:
            # Most likely no commit author is configured.
            try:
                remove_tree(str(Path(app_path) / ".git"))
            except OSError as remove_err:
                logger.warning("Could not remove %s/.git: %s", app_path, remove_err)
        return False


def clone(repository: str, *, cwd: str, dest: str | None = None, dry_run: bool = False) -> str:
    """Clone repository inside cwd; returns the clone directory."""
    name = dest or Path(repository.rstrip("/")).name
    if name.endswith(".git"):
        name = name[: -len(".git")]
    argv = ["git", "clone", repository, name]
    result = run_cmd(argv, cwd=cwd, dry_run=dry_run)
    if result.stdout:
        logger.info("%s", result.stdout.strip())
    return str(Path(cwd) / name)
