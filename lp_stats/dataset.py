"""
Datasets: statistics of one compiled file, or of several merged together.

of_signature() folds every rule of a signature through analyze_rule();
merge() adds two datasets field by field. Datasets are frozen: every
combination builds a new value.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, List, Optional

from lp_kernel.compile import compile_module
from lp_kernel.core.signature import Signature
from lp_kernel.logging import get_logger
from lp_kernel.store import ModuleStore

from lp_stats.distribution import Distribution
from lp_stats.engine.analyze import analyze_rule

log = get_logger(__name__)


@dataclass(frozen=True)
class Dataset:
    source_label: Optional[str] = None  # file name, single-file datasets only
    symbol_count: int = 0
    rule_count: int = 0
    nonlinear_rule_count: int = 0
    higher_order_rule_count: int = 0
    arities: Distribution = Distribution.EMPTY
    sizes: Distribution = Distribution.EMPTY
    heights: Distribution = Distribution.EMPTY

    def check(self) -> "Dataset":
        """Raise ValueError unless the dataset invariants hold; return self."""
        for name in ("symbol_count", "rule_count", "nonlinear_rule_count", "higher_order_rule_count"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise ValueError(f"{name} must be a natural number, got {v!r}")
        if self.nonlinear_rule_count > self.rule_count:
            raise ValueError("more non linear rules than rules")
        if self.higher_order_rule_count > self.rule_count:
            raise ValueError("more higher order rules than rules")
        for name in ("arities", "sizes", "heights"):
            total = getattr(self, name).total
            if total != self.rule_count:
                raise ValueError(f"{name} counts {total} rules, expected {self.rule_count}")
        return self


EMPTY = Dataset()


def of_signature(sign: Signature, label: Optional[str] = None) -> Dataset:
    """Compute statistics on the rules of signature `sign`."""
    n_rules = 0
    n_nonlin = 0
    n_ho = 0
    arities: List[int] = []
    sizes: List[int] = []
    heights: List[int] = []

    for _sym, rule in sign.iter_rules():
        m = analyze_rule(rule)
        n_rules += 1
        if m.nonlinear:
            n_nonlin += 1
        if m.higher_order:
            n_ho += 1
        arities.append(m.arity)
        sizes.append(m.size)
        heights.append(m.height)

    return Dataset(
        source_label=label,
        symbol_count=len(sign.symbols),
        rule_count=n_rules,
        nonlinear_rule_count=n_nonlin,
        higher_order_rule_count=n_ho,
        arities=Distribution.of_values(arities),
        sizes=Distribution.of_values(sizes),
        heights=Distribution.of_values(heights),
    )


def of_file(fname: str, store: ModuleStore) -> Dataset:
    """
    Compute statistics on the rules of file `fname`.

    Compilation goes through `store`; a Fatal raised by the kernel is not
    caught here.
    """
    sign = store.lookup(compile_module(fname, store).path)
    d = of_signature(sign, label=fname)
    log.debug(
        "%s: %d symbols, %d rules (%d non linear, %d HO)",
        fname, d.symbol_count, d.rule_count, d.nonlinear_rule_count, d.higher_order_rule_count,
    )
    return d


def merge(d: Dataset, e: Dataset) -> Dataset:
    """Merge datasets `d` and `e` into one. The result has no source label."""
    return Dataset(
        source_label=None,
        symbol_count=d.symbol_count + e.symbol_count,
        rule_count=d.rule_count + e.rule_count,
        nonlinear_rule_count=d.nonlinear_rule_count + e.nonlinear_rule_count,
        higher_order_rule_count=d.higher_order_rule_count + e.higher_order_rule_count,
        arities=d.arities.merge(e.arities),
        sizes=d.sizes.merge(e.sizes),
        heights=d.heights.merge(e.heights),
    )


def merge_all(datasets: Iterable[Dataset]) -> Dataset:
    """
    Fold merge() over `datasets`. A single dataset comes back as is (label
    kept); nothing at all gives EMPTY.
    """
    ds = list(datasets)
    if not ds:
        return EMPTY
    return reduce(merge, ds)