"""
compile_module: loading signature files into a ModuleStore, and the Fatal
diagnostics it raises.
"""

import pytest

from lp_kernel.compile import Fatal, compile_module, load_signature
from lp_kernel.core.signature import Pos
from lp_kernel.core.term import Patt, Symb
from lp_kernel.store import module_path


def test_compile_registers_module(sig_dir, store):
    fname = str(sig_dir / "nat.sig.json")
    sign = compile_module(fname, store)
    assert store.lookup(module_path(fname)) is sign
    assert set(sign.symbols) == {"N", "z", "s", "add", "eq"}
    first = sign.symbols["add"].rules[0]
    assert first.lhs == (Symb("z"), Patt(0, "y"))
    assert first.pos == Pos(fname, 5, 1)


def test_compile_uses_cached_signature(sig_dir, store):
    fname = str(sig_dir / "nat.sig.json")
    s1 = compile_module(fname, store)
    s2 = compile_module(fname, store)
    assert s1 is s2
    s3 = compile_module(fname, store, force=True)
    assert s3 is not s1
    assert store.lookup(module_path(fname)) is s3


def test_missing_file_is_unpositioned(tmp_path, store):
    with pytest.raises(Fatal) as ei:
        compile_module(str(tmp_path / "nope.sig.json"), store)
    assert ei.value.pos is None
    assert "file not found" in str(ei.value)
    assert not str(ei.value).startswith("[")


def test_invalid_json_is_positioned(write_sig):
    fname = write_sig("bad.sig.json", '{\n  "schema": "lp-signature.v1",\n  "symbols": {,}\n}\n')
    with pytest.raises(Fatal) as ei:
        load_signature(fname)
    pos = ei.value.pos
    assert pos is not None and pos.fname == fname
    assert pos.line == 3
    assert str(ei.value).startswith(f"[{fname}:3:")


def test_wrong_schema_tag(write_sig):
    fname = write_sig("old.sig.json", {"schema": "lp-signature.v0", "symbols": {}})
    with pytest.raises(Fatal, match="lp-signature.v1"):
        load_signature(fname)


def test_schema_violation_points_at_rule(write_sig):
    doc = {
        "schema": "lp-signature.v1",
        "symbols": {"f": {"rules": [{"lhs": [{"oops": 1}], "pos": {"line": 12, "col": 3}}]}},
    }
    fname = write_sig("shape.sig.json", doc)
    with pytest.raises(Fatal) as ei:
        load_signature(fname)
    assert ei.value.pos == Pos(fname, 12, 3)
    assert "symbols/f/rules/0" in ei.value.msg


def test_unbound_variable_points_at_rule(write_sig):
    doc = {
        "schema": "lp-signature.v1",
        "symbols": {"f": {"rules": [{"lhs": [{"abst": "x", "body": {"var": "y"}}], "pos": {"line": 4, "col": 1}}]}},
    }
    fname = write_sig("free.sig.json", doc)
    with pytest.raises(Fatal) as ei:
        load_signature(fname)
    assert ei.value.pos == Pos(fname, 4, 1)
    assert "unbound variable 'y'" in str(ei.value)


def test_failed_compile_leaves_store_untouched(write_sig, store):
    fname = write_sig("broken.sig.json", "not json")
    with pytest.raises(Fatal):
        compile_module(fname, store)
    assert len(store) == 0


def test_only_signature_files_compile(write_sig, store):
    doc = {"schema": "lp-signature.v1", "symbols": {"a": {"rules": []}}}
    sig = write_sig("a.sig.json", doc)
    plain = write_sig("a.json", {"schema": "lp-signature.v1", "symbols": {"a": {"rules": []}, "b": {"rules": []}}})
    assert set(compile_module(sig, store).symbols) == {"a"}
    with pytest.raises(Fatal, match="not a signature file") as ei:
        compile_module(plain, store)
    assert ei.value.pos is None
    assert len(store) == 1
