from pathlib import Path

import pytest

from lp_kernel.store import ModuleStore

ROOT = Path(__file__).resolve().parents[2]
SIGNATURES = ROOT / "tests" / "fixtures" / "signatures"


@pytest.fixture
def sig_dir() -> Path:
    return SIGNATURES


@pytest.fixture
def store() -> ModuleStore:
    return ModuleStore()
