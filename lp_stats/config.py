"""
Environment configuration for the lp-stats tools (read at call time).

  LP_STATS_FORMAT      default output format of `summary`: text | csv | json
  LP_STATS_KEEP_GOING  1/true/yes/on: skip files that fail to compile
  LP_LOG_LEVEL         logger level, see lp_kernel.logging

Command line flags always win over these.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_FORMAT = "LP_STATS_FORMAT"
ENV_KEEP_GOING = "LP_STATS_KEEP_GOING"

FORMATS = ("text", "csv", "json")
DEFAULT_FORMAT = "text"


def _truthy(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    output_format: str = DEFAULT_FORMAT
    keep_going: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        fmt = os.getenv(ENV_FORMAT, "").strip().lower() or DEFAULT_FORMAT
        if fmt not in FORMATS:
            raise ValueError(f"{ENV_FORMAT} must be one of {', '.join(FORMATS)}, got {fmt!r}")
        return cls(
            output_format=fmt,
            keep_going=_truthy(os.getenv(ENV_KEEP_GOING, "")),
        )
