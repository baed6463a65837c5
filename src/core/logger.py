"""Application logging.

One root logger named after LOG_PREFIX plus one child per package
(``DEMO/GUI``, ``DEMO/AUDIO`` ...). Levels of the package loggers can be
changed at startup with the ``-logs`` command line option.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from config import LOG_PREFIX

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Loggers created through get_logger(), keyed by their full path
_registry: Dict[str, logging.Logger] = {}

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}


def init_logger(level: int = logging.DEBUG) -> logging.Logger:
    logging.basicConfig(level=level, format=_FORMAT)
    root = logging.getLogger(LOG_PREFIX)
    root.setLevel(level)
    _registry[LOG_PREFIX] = root
    return root


def get_logger(package: str) -> logging.Logger:
    """Return (creating if needed) the logger for a package, e.g. 'gui'."""
    path = f"{LOG_PREFIX}/{package.upper()}"
    log = _registry.get(path)
    if log is None:
        log = logging.getLogger(path)
        _registry[path] = log
    return log


def find_logger(path: str) -> Optional[logging.Logger]:
    return _registry.get(path)


def set_level_by_name(log: logging.Logger, name: str) -> None:
    level = _LEVELS.get(name.upper())
    if level is None:
        raise ValueError(f"Invalid log level name: {name}")
    log.setLevel(level)


def fatal(log: logging.Logger, msg: str, *args) -> None:
    """Log at CRITICAL and terminate the process."""
    log.critical(msg, *args)
    raise SystemExit(1)


def apply_log_levels(levels: str, log: logging.Logger) -> int:
    """Apply a 'pkg:level,pkg:level' string to the package loggers.

    Bad entries are reported through `log` and skipped. Returns the number of
    levels actually changed.
    """
    changed = 0
    if not levels:
        return changed
    for entry in levels.split(","):
        parts = entry.split(":")
        if len(parts) != 2:
            log.error("Invalid logs level string")
            continue
        pack = parts[0].strip().upper()
        level = parts[1].strip().upper()
        packlog = find_logger(f"{LOG_PREFIX}/{pack}")
        if packlog is None:
            log.error("No logger for package:%s", pack)
            continue
        try:
            set_level_by_name(packlog, level)
        except ValueError as exc:
            log.error("%s", exc)
            continue
        log.info("Set log level:%s for package:%s", level, pack)
        changed += 1
    return changed
