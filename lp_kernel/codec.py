"""
LP kernel: JSON codec for terms and signatures.

Encoding (one JSON object per term node):
  {"symb": "f"}
  {"var": "x"}                             must resolve to an enclosing abst
  {"abst": "x", "body": <term>}
  {"appl": [<term>, <term>, ...]}          two or more items, left-nested
  {"patt": 0 | null, "name": "X", "env": [<term>, ...]}

Variable names are resolved lexically (innermost binder wins) and turned into
de Bruijn indices through bind(), so decoded terms are always closed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from lp_kernel.core.signature import ModulePath, Pos, Rule, Signature, Symbol
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
    add_args,
    bind,
    get_args,
    open_abst,
)

SIGNATURE_SCHEMA_TAG = "lp-signature.v1"


class CodecError(ValueError):
    """Raised when a JSON object does not describe a term or a rule."""


# ---------- decoding ----------


def _lookup(scope: Sequence[Var], name: str) -> Var:
    for x in reversed(scope):
        if x.name == name:
            return x
    raise CodecError(f"unbound variable {name!r}")


def _decode(obj: Any, scope: List[Var]) -> Term:
    if not isinstance(obj, dict):
        raise CodecError(f"term must be an object, got {type(obj).__name__}")

    if "symb" in obj:
        name = obj["symb"]
        if not isinstance(name, str) or not name:
            raise CodecError(f"symb must be a non-empty string, got {name!r}")
        return Symb(name)

    if "var" in obj:
        name = obj["var"]
        if not isinstance(name, str):
            raise CodecError(f"var must be a string, got {name!r}")
        return Vari(_lookup(scope, name))

    if "abst" in obj:
        hint = obj["abst"]
        if not isinstance(hint, str) or not hint:
            raise CodecError(f"abst must name its variable, got {hint!r}")
        if "body" not in obj:
            raise CodecError("abst without body")
        x = Var(hint, len(scope))
        body = _decode(obj["body"], scope + [x])
        return bind(x, body)

    if "appl" in obj:
        items = obj["appl"]
        if not isinstance(items, list) or len(items) < 2:
            raise CodecError("appl needs a list of at least two terms")
        head, *args = [_decode(it, scope) for it in items]
        return add_args(head, args)

    if "patt" in obj:
        slot = obj["patt"]
        # bool is an int subclass; reject it explicitly
        if slot is not None and (isinstance(slot, bool) or not isinstance(slot, int) or slot < 0):
            raise CodecError(f"patt slot must be a natural number or null, got {slot!r}")
        name = obj.get("name", "_")
        if not isinstance(name, str):
            raise CodecError(f"patt name must be a string, got {name!r}")
        env = obj.get("env", [])
        if not isinstance(env, list):
            raise CodecError("patt env must be a list")
        return Patt(slot, name, tuple(_decode(e, scope) for e in env))

    raise CodecError(f"unknown term shape with keys {sorted(obj.keys())}")


def decode_term(obj: Any) -> Term:
    """Decode one closed term."""
    return _decode(obj, [])


def decode_rule(obj: Any, *, fname: Optional[str] = None) -> Rule:
    if not isinstance(obj, dict):
        raise CodecError(f"rule must be an object, got {type(obj).__name__}")
    lhs = obj.get("lhs")
    if not isinstance(lhs, list):
        raise CodecError("rule lhs must be a list of terms")
    pos = None
    p = obj.get("pos")
    if isinstance(p, dict):
        pos = Pos(fname, p.get("line"), p.get("col"))
    return Rule(lhs=tuple(decode_term(t) for t in lhs), rhs=obj.get("rhs"), pos=pos)


def decode_signature(obj: Dict[str, Any], path: ModulePath, *, fname: Optional[str] = None) -> Signature:
    """
    Decode a signature document (already schema-checked by the caller).
    CodecError raised for a rule carries that rule as `err.rule_obj`.
    """
    symbols: Dict[str, Symbol] = {}
    for name, sym_obj in (obj.get("symbols") or {}).items():
        rules = []
        for r in sym_obj.get("rules", []):
            try:
                rules.append(decode_rule(r, fname=fname))
            except CodecError as e:
                e.rule_obj = r  # type: ignore[attr-defined]
                raise
        symbols[name] = Symbol(name, tuple(rules))
    return Signature(path=path, symbols=symbols)


# ---------- encoding ----------


def _fresh_name(hint: str, taken: set) -> str:
    name = hint
    while name in taken:
        name += "'"
    return name


def _encode(t: Term, names: Dict[Var, str], level: int) -> Any:
    if isinstance(t, Symb):
        return {"symb": t.name}
    if isinstance(t, Vari):
        return {"var": names.get(t.var, t.var.name)}
    if isinstance(t, Appl):
        head, args = get_args(t)
        return {"appl": [_encode(head, names, level)] + [_encode(a, names, level) for a in args]}
    if isinstance(t, Abst):
        x, body = open_abst(t, level)
        name = _fresh_name(x.name, set(names.values()))
        return {"abst": name, "body": _encode(body, {**names, x: name}, level + 1)}
    if isinstance(t, Patt):
        return {"patt": t.slot, "name": t.name, "env": [_encode(e, names, level) for e in t.env]}
    if isinstance(t, Bound):
        raise CodecError(f"cannot encode loose bound index {t.index}")
    if isinstance(t, KindSentinel):
        raise CodecError("the Kind sentinel has no JSON encoding")
    raise CodecError(f"not a term: {type(t).__name__}")


def encode_term(t: Term) -> Any:
    """Encode a closed term. Shadowed binder names get primes appended."""
    return _encode(t, {}, 0)
