"""
logging_setup.py — Logging Setup
=================================
Root logger configuration for the web host.  Every module logs through
its own `logging.getLogger(__name__)`; this only decides where records go.

    init_logging()                  # stderr only
    init_logging("/var/log/algo")   # stderr + rotating app.log

The level comes from $ALGOPLAY_LOG_LEVEL (default INFO).
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LEVEL_ENV = "ALGOPLAY_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
HANDLER_MARK = "_algoplay"


def resolve_level() -> int:
    level_name = os.getenv(LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    return level


def installed_handlers(kind: type = logging.Handler) -> List[logging.Handler]:
    """Root handlers that init_logging added, optionally of one type."""
    return [
        h for h in logging.getLogger().handlers
        if getattr(h, HANDLER_MARK, False) and isinstance(h, kind)
    ]


def _install(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    setattr(handler, HANDLER_MARK, True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def init_logging(log_dir: Union[str, Path, None] = None) -> Optional[Path]:
    """Initialize logging and return the log file path (None without a log_dir)."""
    level = resolve_level()
    root = logging.getLogger()
    root.setLevel(level)

    # Only handlers installed here count.
    if not [h for h in installed_handlers() if not isinstance(h, logging.FileHandler)]:
        _install(root, logging.StreamHandler(), level)

    log_path: Optional[Path] = None
    if log_dir is not None:
        log_path = Path(log_dir) / "app.log"
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            if not installed_handlers(RotatingFileHandler):
                _install(
                    root,
                    RotatingFileHandler(
                        log_path,
                        maxBytes=2_000_000,
                        backupCount=5,
                        encoding="utf-8",
                    ),
                    level,
                )
        except OSError:
            logging.getLogger(__name__).exception("Cannot write logs to %s", log_path)
            log_path = None

    logging.getLogger(__name__).info(
        "Logging initialized at %s", log_path or "stderr"
    )
    return log_path


def set_console_level(level: int) -> None:
    """Adjust console (stderr) handler level."""
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            handler.setLevel(level)
