"""
Loggers for the lp packages.

Every module logger hangs off its top-level package logger (lp_kernel,
lp_stats), which owns the single stderr handler. Library modules log at
WARNING and command line modules at INFO unless LP_LOG_LEVEL is set.
"""

import logging
import os
import sys

ENV_LOG_LEVEL = "LP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _is_cli(name: str) -> bool:
    return name.endswith(".cli") or ".cli." in name


def level_for(name: str) -> int:
    """Level of logger `name`: LP_LOG_LEVEL (a name or a number) or the default."""
    default = logging.INFO if _is_cli(name) else logging.WARNING
    value = os.getenv(ENV_LOG_LEVEL, "").strip()
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    # unknown names come back as the string "Level <name>"
    return level if isinstance(level, int) else default


def _package_logger(package: str) -> logging.Logger:
    root = logging.getLogger(package)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    _package_logger(name.split(".", 1)[0])
    logger = logging.getLogger(name)
    logger.setLevel(level_for(name))
    return logger
