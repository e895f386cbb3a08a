from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str, *, dry_run: bool = False) -> list[str]:
    """Copy src into dst, merging with existing content and overwriting files.

    Returns the copied file paths relative to dst.
    """
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    copied: list[str] = []
    if dry_run:
        logger.info("Would copy tree %s -> %s", str(s), str(d))
        return copied

    d.mkdir(parents=True, exist_ok=True)
    for item in sorted(s.rglob("*")):
        rel = item.relative_to(s)
        out = d / rel
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            copied.append(rel.as_posix())

    logger.debug("Copied %d files %s -> %s", len(copied), str(s), str(d))
    return copied


def move_path(src: str, dst: str, *, dry_run: bool = False) -> None:
    """Move a file or directory; refuse to clobber an existing destination."""
    s = Path(src)
    d = Path(dst)
    # A dry-run clone never exists on disk.
    if dry_run:
        logger.info("Would move %s -> %s", str(s), str(d))
        return

    if not s.exists():
        raise FileNotFoundError(src)
    if d.exists():
        raise FileExistsError(dst)

    d.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(s), str(d))
    logger.debug("Moved %s -> %s", str(s), str(d))


def remove_tree(path: str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if not p.exists():
        return
    if dry_run:
        logger.info("Would remove %s", str(p))
        return
    if p.is_dir():
        shutil.rmtree(p)
    else:
        p.unlink()
