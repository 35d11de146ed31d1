"""
LP kernel: compiled-module store.

The table of already-compiled signatures, keyed by module path. It is an
explicit object: callers create one (per CLI run, per test) and pass it to
compile_module / of_file instead of relying on process-wide state.
"""

from __future__ import annotations

import os
from typing import Dict

from lp_kernel.core.signature import ModulePath, Signature

SIGNATURE_EXT = ".sig.json"


def module_path(fname: str) -> ModulePath:
    """
    Module path of a signature file: normalized path components without the
    signature extension. Other file names raise ValueError, so two files
    can never share a module path.

      module_path("lib/nat/add.sig.json") == ("lib", "nat", "add")
      module_path("./lib//nat/add.sig.json") == ("lib", "nat", "add")
    """
    p = os.path.normpath(fname)
    if not p.endswith(SIGNATURE_EXT):
        raise ValueError(f"not a signature file (expected {SIGNATURE_EXT}): {fname!r}")
    p = p[: -len(SIGNATURE_EXT)]
    parts = tuple(s for s in p.replace(os.sep, "/").split("/") if s not in ("", "."))
    if not parts:
        raise ValueError(f"no module path for {fname!r}")
    return parts


class ModuleStore:
    """In-memory map ModulePath -> Signature."""

    def __init__(self) -> None:
        self._loaded: Dict[ModulePath, Signature] = {}

    def exists(self, mp: ModulePath) -> bool:
        return mp in self._loaded

    def lookup(self, mp: ModulePath) -> Signature:
        try:
            return self._loaded[mp]
        except KeyError:
            raise KeyError(f"module {'.'.join(mp)} is not loaded") from None

    def register(self, sign: Signature) -> None:
        self._loaded[sign.path] = sign

    def __len__(self) -> int:
        return len(self._loaded)

    def __contains__(self, mp: object) -> bool:
        return mp in self._loaded
