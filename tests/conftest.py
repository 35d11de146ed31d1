"""
Pytest configuration for lp-rule-stats tests.

Provides:
- Hypothesis profiles (select with HYPOTHESIS_PROFILE=ci)
- Paths to the signature fixtures
- A fresh ModuleStore per test
- write_sig(): write a signature document to tmp_path
"""

import json
import os
from pathlib import Path

import pytest
from hypothesis import settings

from lp_kernel.store import ModuleStore

# =============================================================================
# Hypothesis Configuration
# =============================================================================
# - print_blob=True makes failures easy to reproduce
# - derandomize=True in CI so runs are repeatable

settings.register_profile(
    "default",
    print_blob=True,
    derandomize=False,
)

settings.register_profile(
    "ci",
    print_blob=True,
    derandomize=True,
    max_examples=300,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Shared Test Utilities
# =============================================================================

ROOT = Path(__file__).resolve().parents[1]
SIGNATURES = ROOT / "tests" / "fixtures" / "signatures"


@pytest.fixture
def sig_dir() -> Path:
    return SIGNATURES


@pytest.fixture
def store() -> ModuleStore:
    return ModuleStore()


@pytest.fixture
def write_sig(tmp_path):
    """
    Write a signature document and return its path as a string.

    `doc` may be a dict (dumped as JSON) or raw text (written as is).
    """

    def _write(name: str, doc) -> str:
        p = tmp_path / name
        text = doc if isinstance(doc, str) else json.dumps(doc, indent=2)
        p.write_text(text, encoding="utf-8")
        return str(p)

    return _write
