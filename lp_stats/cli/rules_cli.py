"""
lp-stats rules

Per-rule view of the metrics behind a summary: one line per rule with its
arity, size, height and linearity/order flags.

Usage:
    python3 -m lp_stats.cli.main rules nat.sig.json
    python3 -m lp_stats.cli.main rules --json nat.sig.json     (JSONL)
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from lp_kernel.codec import encode_term
from lp_kernel.compile import Fatal, compile_module
from lp_kernel.pretty import pretty_rule
from lp_kernel.store import ModuleStore

from lp_stats.engine.analyze import analyze_rule


def _yn(b: bool) -> str:
    return "yes" if b else "no"


def rule_records(fname: str, store: ModuleStore) -> List[Dict[str, Any]]:
    sign = compile_module(fname, store)
    out: List[Dict[str, Any]] = []
    for sym, rule in sign.iter_rules():
        m = analyze_rule(rule)
        out.append({
            "file": fname,
            "symbol": sym.name,
            "lhs": pretty_rule(sym.name, rule),
            "lhs_terms": [encode_term(t) for t in rule.lhs],
            "pos": str(rule.pos) if rule.pos is not None else None,
            "arity": m.arity,
            "size": m.size,
            "height": m.height,
            "nonlinear": m.nonlinear,
            "ho": m.higher_order,
        })
    return out


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="lp-stats rules", add_help=True)
    ap.add_argument("--json", action="store_true", help="Emit one JSON object per rule (JSONL).")
    ap.add_argument("files", nargs="+", help="Signature files (*.sig.json)")
    args = ap.parse_args(argv)

    store = ModuleStore()
    for fname in args.files:
        try:
            records = rule_records(fname, store)
        except Fatal as e:
            print(f"lp-stats: error: {e}", file=sys.stderr)
            return 1

        for r in records:
            if args.json:
                # deterministic JSON: sorted keys, compact separators
                print(json.dumps(r, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
            else:
                print(
                    f"{r['lhs']}\tarity={r['arity']} size={r['size']} height={r['height']} "
                    f"nonlinear={_yn(r['nonlinear'])} ho={_yn(r['ho'])}"
                )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
