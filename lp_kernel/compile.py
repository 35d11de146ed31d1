"""
LP kernel: compile boundary.

compile_module(fname, store) loads one compiled signature file (*.sig.json),
checks it against the signature schema, decodes it and registers it in the
store. Any failure is reported as Fatal, with a source position when one is
known. Callers decide whether a Fatal ends the run.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from lp_kernel.codec import CodecError, SIGNATURE_SCHEMA_TAG, decode_signature
from lp_kernel.core.signature import ModulePath, Pos, Signature
from lp_kernel.logging import get_logger
from lp_kernel.store import ModuleStore, module_path

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "signature.v1.json"

log = get_logger(__name__)


class Fatal(Exception):
    """Unrecoverable compilation failure, optionally positioned."""

    def __init__(self, pos: Optional[Pos], msg: str) -> None:
        super().__init__(msg)
        self.pos = pos
        self.msg = msg

    def __str__(self) -> str:
        if self.pos is None:
            return self.msg
        return f"[{self.pos}] {self.msg}"


@lru_cache(maxsize=1)
def signature_validator() -> jsonschema.protocols.Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    cls = jsonschema.validators.validator_for(schema)
    cls.check_schema(schema)
    return cls(schema)


def _rule_pos(doc: Dict[str, Any], path: list, fname: str) -> Pos:
    # path looks like ["symbols", <name>, "rules", <i>, ...]
    if len(path) >= 4 and path[0] == "symbols" and path[2] == "rules":
        try:
            p = doc["symbols"][path[1]]["rules"][path[3]].get("pos")
        except (KeyError, IndexError, TypeError, AttributeError):
            p = None
        if isinstance(p, dict):
            return Pos(fname, p.get("line"), p.get("col"))
    return Pos(fname)


def _module_path(fname: str) -> ModulePath:
    try:
        return module_path(fname)
    except ValueError as e:
        raise Fatal(None, str(e)) from None


def load_signature(fname: str) -> Signature:
    """Read, validate and decode a signature file. Raises Fatal."""
    mp = _module_path(fname)
    p = Path(fname)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise Fatal(None, f"file not found: {fname}") from None
    except OSError as e:
        raise Fatal(None, f"cannot read {fname}: {e.strerror or e}") from e

    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise Fatal(Pos(fname, e.lineno, e.colno), f"invalid JSON: {e.msg}") from e

    if not isinstance(doc, dict) or doc.get("schema") != SIGNATURE_SCHEMA_TAG:
        raise Fatal(Pos(fname), f"not a {SIGNATURE_SCHEMA_TAG} document")

    err = jsonschema.exceptions.best_match(signature_validator().iter_errors(doc))
    if err is not None:
        path = list(err.absolute_path)
        where = "/".join(str(s) for s in path) or "<root>"
        raise Fatal(_rule_pos(doc, path, fname), f"{err.message} (at {where})")

    try:
        return decode_signature(doc, mp, fname=fname)
    except CodecError as e:
        r = getattr(e, "rule_obj", None)
        pos = Pos(fname)
        if isinstance(r, dict) and isinstance(r.get("pos"), dict):
            pos = Pos(fname, r["pos"].get("line"), r["pos"].get("col"))
        raise Fatal(pos, str(e)) from e


def compile_module(fname: str, store: ModuleStore, *, force: bool = False) -> Signature:
    """
    Make sure the module of `fname` is in `store` and return its signature.
    Already-loaded modules are not read again unless `force` is set.
    """
    mp = _module_path(fname)
    if not force and store.exists(mp):
        log.debug("module %s already loaded", ".".join(mp))
        return store.lookup(mp)

    log.debug("loading %s", fname)
    sign = load_signature(fname)
    store.register(sign)
    log.info("compiled %s: %d symbols", ".".join(mp), len(sign.symbols))
    return sign
