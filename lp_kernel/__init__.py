# lp_kernel/__init__.py
"""
LP kernel boundary: the pieces of a rewriting kernel the stats engine reads.

    - Terms: Appl, Abst, Symb, Vari, Patt, Bound, KIND, open_abst, bind, add_args
    - Signatures: Rule, Symbol, Signature, Pos
    - Loading: ModuleStore, module_path, compile_module, Fatal
"""

from __future__ import annotations

from .core.term import (
    KIND,
    TERM_VARIANTS,
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
from .core.signature import ModulePath, Pos, Rule, Signature, Symbol
from .store import ModuleStore, module_path
from .compile import Fatal, compile_module

__all__ = [
    "KIND",
    "TERM_VARIANTS",
    "Abst",
    "Appl",
    "Bound",
    "KindSentinel",
    "Patt",
    "Symb",
    "Term",
    "Var",
    "Vari",
    "add_args",
    "bind",
    "get_args",
    "open_abst",
    "ModulePath",
    "Pos",
    "Rule",
    "Signature",
    "Symbol",
    "ModuleStore",
    "module_path",
    "Fatal",
    "compile_module",
]
