"""
lp-stats merge

Merge JSON dataset reports (as written by `summary --format json`) into one.
Inputs are validated against the dataset schema; the merged report carries no
file label unless exactly one input was given.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from lp_kernel.logging import get_logger

from lp_stats.dataset import Dataset, merge_all
from lp_stats.report import dataset_from_payload, dataset_payload, render

log = get_logger(__name__)


def _load_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _dump_json(obj: Dict[str, Any], path: Path) -> None:
    path.write_text(json.dumps(obj, sort_keys=True, indent=2) + "\n", encoding="utf-8")


def load_report(path: Path) -> Dataset:
    """Read one report; raises ValueError with the file name on any problem."""
    try:
        obj = _load_json(path)
    except OSError as e:
        raise ValueError(f"{path}: cannot read: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON: {e}") from e
    try:
        return dataset_from_payload(obj)
    except jsonschema.ValidationError as e:
        where = "/".join(str(s) for s in e.absolute_path) or "<root>"
        raise ValueError(f"{path}: not a dataset report: {e.message} (at {where})") from e
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="lp-stats merge",
        description="Merge lp-stats JSON dataset reports deterministically.",
    )
    ap.add_argument("reports", nargs="+", type=Path)
    ap.add_argument("-o", "--out", type=Path, default=None, help="Write the merged JSON report here.")
    ap.add_argument("--text", action="store_true", help="Print the SUMMARY block instead of JSON.")
    args = ap.parse_args(argv)

    try:
        datasets = [load_report(p) for p in args.reports]
    except ValueError as e:
        print(f"lp-stats merge: error: {e}", file=sys.stderr)
        return 1

    merged = merge_all(datasets)
    log.info("merged %d report(s): %d rules", len(datasets), merged.rule_count)

    if args.text:
        print(render(merged))
        return 0

    payload = dataset_payload(merged)
    if args.out is not None:
        _dump_json(payload, args.out)
    else:
        print(json.dumps(payload, sort_keys=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
