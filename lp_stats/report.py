"""
Report rendering for datasets.

Three shapes:
- render(d)          human-readable SUMMARY block
- render_csv(ds)     header + one row per dataset (CSV_COLUMNS / csv_row)
- dataset_payload(d) JSON payload tagged with SCHEMA_TAG

dataset_from_payload() is the inverse of dataset_payload(); it is what the
merge tool reads back.
"""

from __future__ import annotations

import csv
import io
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import jsonschema

from lp_stats.dataset import Dataset
from lp_stats.distribution import Distribution

SCHEMA_TAG = "lp-stats-dataset.v1"
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "dataset.v1.json"

CSV_COLUMNS: tuple[str, ...] = (
    "file",
    "symbols",
    "rules",
    "nonlinear_rules",
    "ho_rules",
    "arity_max",
    "arity_mean",
    "size_max",
    "size_mean",
    "height_max",
    "height_mean",
)


def _fmt_num(v: Optional[float]) -> str:
    if v is None:
        return "-"
    if float(v).is_integer():
        return str(int(v))
    return f"{v:.2f}"


def _dist_line(label: str, d: Distribution) -> str:
    if not d:
        return f"{label}: -"
    return (
        f"{label}: min={d.min_value} max={d.max_value} "
        f"mean={_fmt_num(d.mean)} median={_fmt_num(d.median)}"
    )


def render(d: Dataset, *, distributions: bool = False) -> str:
    """
    SUMMARY block, one metric per line, without a trailing newline:

      SUMMARY:
        File: <name>          (file-scoped datasets only)
        Symbols: <n>
        Rules: <n>
        Non linear rules: <n>
        HO rules: <n>
    """
    lines = ["SUMMARY:"]
    if d.source_label is not None:
        lines.append(f"  File: {d.source_label}")
    lines.append(f"  Symbols: {d.symbol_count}")
    lines.append(f"  Rules: {d.rule_count}")
    lines.append(f"  Non linear rules: {d.nonlinear_rule_count}")
    lines.append(f"  HO rules: {d.higher_order_rule_count}")
    if distributions:
        lines.append("  " + _dist_line("Arity", d.arities))
        lines.append("  " + _dist_line("Size", d.sizes))
        lines.append("  " + _dist_line("Height", d.heights))
    return "\n".join(lines)


# ---------- CSV ----------


def csv_row(d: Dataset) -> List[str]:
    """One CSV row; same length and order as CSV_COLUMNS."""
    return [
        d.source_label if d.source_label is not None else "",
        str(d.symbol_count),
        str(d.rule_count),
        str(d.nonlinear_rule_count),
        str(d.higher_order_rule_count),
        _fmt_num(d.arities.max_value),
        _fmt_num(d.arities.mean),
        _fmt_num(d.sizes.max_value),
        _fmt_num(d.sizes.mean),
        _fmt_num(d.heights.max_value),
        _fmt_num(d.heights.mean),
    ]


def render_csv(datasets: Iterable[Dataset], *, header: bool = True) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    if header:
        w.writerow(CSV_COLUMNS)
    for d in datasets:
        w.writerow(csv_row(d))
    return buf.getvalue()


# ---------- JSON ----------


@lru_cache(maxsize=1)
def dataset_schema() -> Dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def dataset_payload(d: Dataset) -> Dict[str, Any]:
    return {
        "schema": SCHEMA_TAG,
        "file": d.source_label,
        "symbols": d.symbol_count,
        "rules": d.rule_count,
        "nonlinear_rules": d.nonlinear_rule_count,
        "ho_rules": d.higher_order_rule_count,
        "arity": d.arities.to_json_obj(),
        "size": d.sizes.to_json_obj(),
        "height": d.heights.to_json_obj(),
    }


def validate_payload(obj: Any) -> None:
    """Raise jsonschema.ValidationError if `obj` is not a dataset payload."""
    jsonschema.validate(instance=obj, schema=dataset_schema())


def dataset_from_payload(obj: Any) -> Dataset:
    """Decode a payload; raises ValidationError or ValueError when invalid."""
    validate_payload(obj)
    return Dataset(
        source_label=obj.get("file"),
        symbol_count=obj["symbols"],
        rule_count=obj["rules"],
        nonlinear_rule_count=obj["nonlinear_rules"],
        higher_order_rule_count=obj["ho_rules"],
        arities=Distribution.from_json_obj(obj["arity"]),
        sizes=Distribution.from_json_obj(obj["size"]),
        heights=Distribution.from_json_obj(obj["height"]),
    ).check()
