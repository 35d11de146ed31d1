"""
Umbrella CLI router for the lp-stats tools.

This file is intentionally thin and does not re-implement leaf flags.
It only routes:

  lp-stats summary <...>   -> lp_stats.cli.summary_cli.main(<...>)
  lp-stats merge <...>     -> lp_stats.cli.merge_cli.main(<...>)
  lp-stats rules <...>     -> lp_stats.cli.rules_cli.main(<...>)

All remaining arguments are forwarded verbatim.
"""

from __future__ import annotations

import sys
from typing import List, Optional

HELP = """\
usage: lp-stats <summary|merge|rules> ...

Rule statistics over compiled rewrite-rule signatures.

commands:
  summary   Symbols, rules, non linear / HO rule counts of signature files
  merge     Merge JSON reports written by `summary --format json`
  rules     One line per rule with its arity, size and height

examples:
  python3 -m lp_stats.cli.main summary tests/fixtures/signatures/nat.sig.json
  python3 -m lp_stats.cli.main summary --separate --format csv a.sig.json b.sig.json
  python3 -m lp_stats.cli.main merge a.stats.json b.stats.json -o all.stats.json
  python3 -m lp_stats.cli.main rules --json tests/fixtures/signatures/nat.sig.json
"""


def _help(code: int = 0) -> int:
    print(HELP)
    return code


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help", "help"):
        return _help(0)

    top, rest = argv[0], argv[1:]

    if top == "summary":
        from lp_stats.cli.summary_cli import main as summary_main

        return int(summary_main(rest))

    if top == "merge":
        from lp_stats.cli.merge_cli import main as merge_main

        return int(merge_main(rest))

    if top == "rules":
        from lp_stats.cli.rules_cli import main as rules_main

        return int(rules_main(rest))

    print(f"lp-stats: unknown command: {top!r}", file=sys.stderr)
    return _help(2)


if __name__ == "__main__":
    raise SystemExit(main())
