"""
LP stats analyzer

Pure structural analysis over rewrite rules.
No mutation, no matching, no evaluation.

Height and size are measured on the rule's lhs rebuilt as one term,
add_args(KIND, lhs), and corrected by -1 for the synthetic head.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from lp_kernel.core.signature import Rule
from lp_kernel.core.term import (
    KIND,
    Abst,
    Appl,
    Bound,
    KindSentinel,
    Patt,
    Symb,
    Term,
    Vari,
    add_args,
    get_args,
    open_abst,
)


class MalformedTermError(TypeError):
    """A traversal met a loose de Bruijn index or a non-term object."""


def _malformed(t: object) -> MalformedTermError:
    if isinstance(t, Bound):
        return MalformedTermError(f"loose bound index {t.index} in rule lhs")
    return MalformedTermError(f"not a term: {type(t).__name__}")


@dataclass(frozen=True)
class RuleMetrics:
    arity: int
    size: int
    height: int
    nonlinear: bool
    higher_order: bool


def _rebuild(rule: Rule) -> Term:
    return add_args(KIND, rule.lhs)


def _depth(t: Term, level: int) -> int:
    """
    depth (h a0 ... a(n-1)) = max {depth h + n, n - i + depth a_i}
    depth (λx, u)           = 1 + depth u
    depth x                 = 0   for symbols, variables, patterns and KIND

    The application spine is walked in a loop; only real nesting recurses.
    """
    if isinstance(t, Appl):
        head, args = get_args(t)
        n = len(args)
        d = _depth(head, level) + n
        for i, a in enumerate(args):
            d = max(d, n - i + _depth(a, level))
        return d
    if isinstance(t, Abst):
        _, body = open_abst(t, level)
        return _depth(body, level + 1) + 1
    if isinstance(t, (Symb, Vari, Patt, KindSentinel)):
        return 0
    raise _malformed(t)


def _size(t: Term, level: int) -> int:
    if isinstance(t, Appl):
        head, args = get_args(t)
        return _size(head, level) + sum(_size(a, level) for a in args)
    if isinstance(t, Abst):
        _, body = open_abst(t, level)
        return _size(body, level + 1) + 1
    if isinstance(t, (Symb, Vari, Patt)):
        return 1
    # the synthetic head counts for one; the final -1 cancels it
    if isinstance(t, KindSentinel):
        return 1
    raise _malformed(t)


def height_of_rule(rule: Rule) -> int:
    """Nesting depth of the lhs. 0 for a rule without arguments."""
    return max(_depth(_rebuild(rule), 0) - 1, 0)


def size_of_rule(rule: Rule) -> int:
    """Number of (sub)terms of the lhs. Always >= arity_of_rule(rule)."""
    return _size(_rebuild(rule), 0) - 1


def arity_of_rule(rule: Rule) -> int:
    return len(rule.lhs)


def _slots(t: Term) -> Iterator[int]:
    # pattern slots anywhere in t; binders need no opening since only
    # Patt nodes are collected
    if isinstance(t, Patt):
        if t.slot is not None:
            yield t.slot
    elif isinstance(t, Appl):
        head, args = get_args(t)
        yield from _slots(head)
        for a in args:
            yield from _slots(a)
    elif isinstance(t, Abst):
        yield from _slots(t.body)
    elif not isinstance(t, (Symb, Vari, Bound, KindSentinel)):
        raise _malformed(t)


def is_nonlinear(rule: Rule) -> bool:
    """True if some pattern slot is bound at two or more positions of the lhs."""
    slots: List[int] = [s for t in rule.lhs for s in _slots(t)]
    return len(slots) != len(set(slots))


def _has_abst(t: Term) -> bool:
    if isinstance(t, Appl):
        head, args = get_args(t)
        return _has_abst(head) or any(_has_abst(a) for a in args)
    return isinstance(t, Abst)


def is_higher_order(rule: Rule) -> bool:
    """True if the lhs contains an abstraction at any depth."""
    return any(_has_abst(t) for t in rule.lhs)


def analyze_rule(rule: Rule) -> RuleMetrics:
    return RuleMetrics(
        arity=arity_of_rule(rule),
        size=size_of_rule(rule),
        height=height_of_rule(rule),
        nonlinear=is_nonlinear(rule),
        higher_order=is_higher_order(rule),
    )
