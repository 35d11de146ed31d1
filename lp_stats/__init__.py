# lp_stats/__init__.py
"""
Rule statistics over compiled rewrite-rule signatures.

    - Per-rule metrics: analyze_rule, RuleMetrics
    - Histograms: Distribution
    - Datasets: Dataset, EMPTY, of_signature, of_file, merge, merge_all
    - Reports: render, render_csv, dataset_payload
"""

from __future__ import annotations

from .engine.analyze import MalformedTermError, RuleMetrics, analyze_rule
from .distribution import Distribution
from .dataset import EMPTY, Dataset, merge, merge_all, of_file, of_signature
from .report import dataset_payload, render, render_csv

__all__ = [
    "MalformedTermError",
    "RuleMetrics",
    "analyze_rule",
    "Distribution",
    "EMPTY",
    "Dataset",
    "merge",
    "merge_all",
    "of_file",
    "of_signature",
    "dataset_payload",
    "render",
    "render_csv",
]
