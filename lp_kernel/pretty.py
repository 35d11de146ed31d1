"""
Pretty-print helpers for terms and rules.

Rendering conventions (lambdapi-like):

    f a b          application spine
    λx, t          abstraction (binder names primed when shadowing)
    $X             pattern variable, $X.[x y] when it has an environment
    $_             pattern variable without a slot name
    KIND           the synthetic Kind head

Output is for humans only; nothing parses it back.
"""

from __future__ import annotations

from typing import Dict

from lp_kernel.core.signature import Rule
from lp_kernel.core.term import (
    Abst,
    Appl,
    Bound,
    KindSentinel,
    Patt,
    Symb,
    Term,
    Var,
    Vari,
    get_args,
    open_abst,
)


def _pp(t: Term, names: Dict[Var, str], level: int, wrap: bool) -> str:
    if isinstance(t, Symb):
        return t.name
    if isinstance(t, Vari):
        return names.get(t.var, t.var.name)
    if isinstance(t, Patt):
        base = f"${t.name}"
        if t.env:
            base += ".[" + " ".join(_pp(e, names, level, True) for e in t.env) + "]"
        return base
    if isinstance(t, KindSentinel):
        return "KIND"
    if isinstance(t, Bound):
        return f"#{t.index}"
    if isinstance(t, Appl):
        head, args = get_args(t)
        s = " ".join([_pp(head, names, level, True)] + [_pp(a, names, level, True) for a in args])
        return f"({s})" if wrap else s
    if isinstance(t, Abst):
        x, body = open_abst(t, level)
        name = x.name
        while name in names.values():
            name += "'"
        s = f"λ{name}, {_pp(body, {**names, x: name}, level + 1, False)}"
        return f"({s})" if wrap else s
    return f"<{type(t).__name__}>"


def pretty_term(t: Term) -> str:
    return _pp(t, {}, 0, False)


def pretty_rule(head: str, rule: Rule) -> str:
    """Render a rule's left-hand side applied to its head symbol."""
    if not rule.lhs:
        return head
    return " ".join([head] + [_pp(a, {}, 0, True) for a in rule.lhs])
