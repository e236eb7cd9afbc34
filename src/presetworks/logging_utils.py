"""Centralised logging utilities for PresetWorks entry points."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

__all__ = [
    "LOG_DIR_ENV",
    "LOG_LEVEL_ENV",
    "LOG_LEVELS",
    "configure_logging",
    "resolve_level",
]

LOG_DIR_ENV = "PRESETWORKS_LOG_DIR"
LOG_LEVEL_ENV = "PRESETWORKS_LOG_LEVEL"
_MANAGED_HANDLER_FLAG = "_presetworks_managed_handler"

LOG_LEVELS: Dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn ``"debug"`` or ``logging.DEBUG`` into a numeric level.

    ``None`` reads ``$PRESETWORKS_LOG_LEVEL`` and falls back to INFO.
    """

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    resolved = LOG_LEVELS.get(level.strip().lower())
    if resolved is None:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Invalid log level '{level}'. Choose from: {valid}")
    return resolved


def _default_log_directory() -> Path:
    """Return ``logs/`` under the project root, or ``$PRESETWORKS_LOG_DIR``."""

    env_override = os.environ.get(LOG_DIR_ENV)
    if env_override:
        return Path(env_override).expanduser()

    for candidate in Path(__file__).resolve().parents:
        if (candidate / "pyproject.toml").exists():
            return candidate / "logs"

    return Path.cwd() / "logs"


def _remove_managed_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def _managed(handler: logging.Handler, level: int, formatter: logging.Formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _MANAGED_HANDLER_FLAG, True)
    return handler


def configure_logging(
    log_name: str,
    *,
    level: Union[int, str, None] = None,
    log_dir: Optional[Path] = None,
    include_console: bool = True,
    suppressed_loggers: Iterable[str] = (),
) -> Path:
    """Send root logging to ``<log_dir>/<log_name>.log`` (and stderr).

    Calling again replaces the handlers installed by a previous call, so CLI
    commands and the API can each pick their own log file. Loggers named in
    *suppressed_loggers* only pass warnings and above.
    """

    numeric_level = resolve_level(level)
    target_directory = (
        Path(log_dir).expanduser() if log_dir else _default_log_directory()
    )
    target_directory.mkdir(parents=True, exist_ok=True)
    log_path = target_directory / f"{log_name}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    _remove_managed_handlers(root_logger)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root_logger.addHandler(
        _managed(logging.FileHandler(log_path, encoding="utf-8"), numeric_level, formatter)
    )
    if include_console:
        root_logger.addHandler(
            _managed(logging.StreamHandler(), numeric_level, formatter)
        )

    for name in suppressed_loggers:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.captureWarnings(True)

    return log_path
