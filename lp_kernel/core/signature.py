"""
LP kernel: signature model.

A Signature is the compiled result of one module: a name-indexed, read-only
collection of symbols and their rewrite rules. Nothing here is mutable once
built; the stats engine only reads these objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple

from lp_kernel.core.term import Term

ModulePath = Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Pos:
    fname: Optional[str]
    line: Optional[int] = None
    col: Optional[int] = None

    def __str__(self) -> str:
        parts = [self.fname or "<unknown>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.col is not None:
                parts.append(str(self.col))
        return ":".join(parts)


@dataclass(frozen=True, slots=True)
class Rule:
    lhs: Tuple[Term, ...]
    rhs: Any = None
    pos: Optional[Pos] = None


@dataclass(frozen=True, slots=True)
class Symbol:
    name: str
    rules: Tuple[Rule, ...] = ()


@dataclass(frozen=True)
class Signature:
    path: ModulePath
    symbols: Mapping[str, Symbol] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, sym in self.symbols.items():
            if sym.name != name:
                raise ValueError(f"symbol {sym.name!r} registered under {name!r}")
        # read-only view over a private copy
        object.__setattr__(self, "symbols", MappingProxyType(dict(self.symbols)))

    def iter_rules(self) -> Iterator[Tuple[Symbol, Rule]]:
        for sym in self.symbols.values():
            for r in sym.rules:
                yield sym, r
