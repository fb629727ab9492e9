"""
Shared fixtures for the lint ratchet tests.
"""

import os
import sys
import textwrap

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def write_source(tmp_path):
    """Write a dedented source file under tmp_path and return its path."""
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that change the ratchet's behaviour."""
    for name in ("UPDATE_ANYWAY", "LINTRATCHET_BASELINE", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
