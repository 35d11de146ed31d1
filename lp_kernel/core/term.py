"""
LP kernel: term model
=====================

Immutable term syntax for compiled rewrite rules.

Variants (closed set, see TERM_VARIANTS):
- Appl(fn, arg)            application
- Abst(hint, body)         abstraction; body refers to its binder via Bound(0)
- Symb(name)               reference to a signature symbol
- Vari(var)                bound variable, after its binder was opened
- Patt(slot, name, env)    pattern variable placeholder of a rule lhs
- KIND                     sentinel used only as a synthetic application head

Binders are locally nameless: a closed term never contains a free Vari, and
bound occurrences inside an Abst body are de Bruijn indices (Bound). Opening a
binder at traversal level n instantiates index 0 with Vari(Var(hint, n)).
Every binder opened while walking a closed term gets a distinct level, so the
variables produced are fresh relative to the rest of the term.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class Var:
    """A variable identity. `level` is the arena slot it was opened at."""

    name: str
    level: int

    def __repr__(self) -> str:
        return f"{self.name}#{self.level}"


@dataclass(frozen=True, slots=True)
class Appl:
    fn: "Term"
    arg: "Term"


@dataclass(frozen=True, slots=True)
class Abst:
    hint: str
    body: "Term"


@dataclass(frozen=True, slots=True)
class Symb:
    name: str


@dataclass(frozen=True, slots=True)
class Vari:
    var: Var


@dataclass(frozen=True, slots=True)
class Patt:
    slot: Optional[int]
    name: str
    env: Tuple["Term", ...] = ()


@dataclass(frozen=True, slots=True)
class Bound:
    """De Bruijn index. Only meaningful under the binder it points to."""

    index: int


class KindSentinel:
    """The `Kind` sort. Only ever used as a synthetic head (see add_args)."""

    __slots__ = ()
    _instance: Optional["KindSentinel"] = None

    def __new__(cls) -> "KindSentinel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "KIND"

    def __reduce__(self):
        return (KindSentinel, ())


KIND = KindSentinel()

Term = Union[Appl, Abst, Symb, Vari, Patt, Bound, KindSentinel]

TERM_VARIANTS: Tuple[type, ...] = (Appl, Abst, Symb, Vari, Patt, Bound, KindSentinel)


# ---------- spine helpers ----------


def add_args(head: Term, args: Iterable[Term]) -> Term:
    """add_args(h, [a1, ..., an]) == Appl(...Appl(Appl(h, a1), a2)..., an)."""
    t = head
    for a in args:
        t = Appl(t, a)
    return t


def get_args(t: Term) -> Tuple[Term, Tuple[Term, ...]]:
    """Inverse of add_args: split an application spine into (head, args)."""
    args = []
    while isinstance(t, Appl):
        args.append(t.arg)
        t = t.fn
    args.reverse()
    return t, tuple(args)


# ---------- binders ----------


def _instantiate(t: Term, depth: int, u: Term) -> Term:
    # replace Bound(depth) by u; depth grows by one under each Abst
    if isinstance(t, Bound):
        return u if t.index == depth else t
    if isinstance(t, Appl):
        head, args = get_args(t)
        return add_args(_instantiate(head, depth, u), [_instantiate(a, depth, u) for a in args])
    if isinstance(t, Abst):
        return Abst(t.hint, _instantiate(t.body, depth + 1, u))
    if isinstance(t, Patt):
        if not t.env:
            return t
        return Patt(t.slot, t.name, tuple(_instantiate(e, depth, u) for e in t.env))
    return t


def _abstract(t: Term, depth: int, x: Var) -> Term:
    # replace Vari(x) by Bound(depth)
    if isinstance(t, Vari):
        return Bound(depth) if t.var == x else t
    if isinstance(t, Appl):
        head, args = get_args(t)
        return add_args(_abstract(head, depth, x), [_abstract(a, depth, x) for a in args])
    if isinstance(t, Abst):
        return Abst(t.hint, _abstract(t.body, depth + 1, x))
    if isinstance(t, Patt):
        if not t.env:
            return t
        return Patt(t.slot, t.name, tuple(_abstract(e, depth, x) for e in t.env))
    return t


def open_abst(t: Abst, level: int) -> Tuple[Var, Term]:
    """
    Expose the bound variable and body of an abstraction.

    `level` is the number of binders already opened on the current traversal
    path; the returned variable is Var(t.hint, level).
    """
    if not isinstance(t, Abst):
        raise TypeError(f"open_abst expects Abst, got {type(t).__name__}")
    x = Var(t.hint, level)
    return x, _instantiate(t.body, 0, Vari(x))


def bind(x: Var, body: Term) -> Abst:
    """Close `body` over `x`. open_abst(bind(x, b), x.level) gives back (x, b)."""
    return Abst(x.name, _abstract(body, 0, x))
