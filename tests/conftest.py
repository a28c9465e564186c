import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _no_config_override(monkeypatch):
    # A developer's SIGNPOST_CONFIG must not leak into tests.
    monkeypatch.delenv("SIGNPOST_CONFIG", raising=False)
