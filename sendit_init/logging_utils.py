from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

FALLBACK_LOG_NAME = "sendit-init.log"


def configure_logging(
    log_path: Optional[str],
    level: int = logging.DEBUG,
    console_level: Optional[int] = logging.WARNING,
) -> Optional[str]:
    """Configure logging for one scaffolding run.

    The file handler records every decision and command at `level`. The
    console only shows `console_level` and above so that log lines do not
    bury the instructions printed for the user; pass None to disable it.

    If log_path is not writable we fall back to a file in the working
    directory. With log_path None no file is written. Returns the file path
    actually used, or None.
    """

    root = logging.getLogger()
    root.setLevel(min(level, console_level or level))

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_sendit_configured", False):
        return getattr(root, "_sendit_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handlers: list[logging.Handler] = []
    chosen_path: Optional[str] = None
    if log_path is not None:
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
            chosen_path = log_path
        except OSError:
            chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
            file_handler = logging.FileHandler(chosen_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    if console_level is not None:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handlers.append(console)

    for h in handlers:
        root.addHandler(h)

    setattr(root, "_sendit_configured", True)
    setattr(root, "_sendit_log_path", chosen_path)
    setattr(root, "_sendit_handlers", handlers)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Detach handlers installed by configure_logging()."""
    root = logging.getLogger()
    for h in getattr(root, "_sendit_handlers", []):
        root.removeHandler(h)
        h.close()
    for attr in ("_sendit_configured", "_sendit_log_path", "_sendit_handlers"):
        if hasattr(root, attr):
            delattr(root, attr)
