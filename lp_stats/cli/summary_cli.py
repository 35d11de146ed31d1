"""
lp-stats summary

Compile each signature file, compute its rule statistics and print the
merged report (or every file separately with --separate).

Examples:
  python3 -m lp_stats.cli.main summary tests/fixtures/signatures/nat.sig.json
  python3 -m lp_stats.cli.main summary --separate --format csv a.sig.json b.sig.json
  python3 -m lp_stats.cli.main summary --format json --pretty a.sig.json > a.stats.json
"""

from __future__ import annotations

import argparse
import datetime
import json
import sys
from typing import Any, Dict, List, Optional

from lp_kernel.compile import Fatal
from lp_kernel.logging import get_logger
from lp_kernel.store import ModuleStore

from lp_stats.config import FORMATS, Settings
from lp_stats.dataset import Dataset, merge_all, of_file
from lp_stats.report import SCHEMA_PATH, SCHEMA_TAG, dataset_payload, render, render_csv

log = get_logger(__name__)


def _utc_now_z() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _emit_json(payload: Dict[str, Any], pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
    else:
        print(json.dumps(payload, ensure_ascii=False, sort_keys=True))


def _emit(args: argparse.Namespace, per_file: List[Dataset], total: Dataset, failed: List[str]) -> None:
    if args.format == "json":
        payload = dataset_payload(total)
        if args.separate:
            payload["files"] = [dataset_payload(d) for d in per_file]
        payload["meta"] = {
            "tool": "lp-stats summary",
            "generated_at": _utc_now_z(),
            "inputs": list(args.files),
            "failed": failed,
        }
        _emit_json(payload, pretty=bool(args.pretty))
        return

    if args.format == "csv":
        rows = list(per_file) if args.separate else [total]
        if args.separate and len(per_file) > 1:
            rows.append(total)
        sys.stdout.write(render_csv(rows))
        return

    blocks: List[str] = []
    if args.separate:
        blocks.extend(render(d, distributions=args.distributions) for d in per_file)
    if not args.separate or len(per_file) != 1:
        blocks.append(render(total, distributions=args.distributions))
    print("\n\n".join(blocks))


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"lp-stats summary: {e}", file=sys.stderr)
        return 2

    ap = argparse.ArgumentParser(
        prog="lp-stats summary",
        description="Compute rule statistics of compiled signature files.",
    )
    ap.add_argument("--schema", action="store_true", help="Print the JSON schema tag and path and exit.")
    ap.add_argument("--separate", action="store_true", help="Report every file on its own, then the total.")
    ap.add_argument("--format", choices=FORMATS, default=settings.output_format, help="Output format.")
    ap.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    ap.add_argument("--distributions", action="store_true", help="Add arity/size/height lines to text output.")
    ap.add_argument(
        "--keep-going",
        action="store_true",
        default=settings.keep_going,
        help="Skip files that fail to compile instead of stopping (exit status 1).",
    )
    ap.add_argument("files", nargs="*", help="Signature files (*.sig.json)")
    args = ap.parse_args(argv)

    if args.schema:
        print(f"{SCHEMA_TAG} {SCHEMA_PATH}")
        return 0

    if not args.files:
        ap.error("at least one file is required unless --schema is used")

    store = ModuleStore()
    per_file: List[Dataset] = []
    failed: List[str] = []

    for fname in args.files:
        try:
            per_file.append(of_file(fname, store))
        except Fatal as e:
            print(f"lp-stats: error: {e}", file=sys.stderr)
            if not args.keep_going:
                return 1
            failed.append(fname)

    total = merge_all(per_file)
    _emit(args, per_file, total, failed)
    log.info("%d file(s) analyzed, %d failed, %d module(s) loaded", len(per_file), len(failed), len(store))
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
