"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from ctxfix.go.parser import GoParser

FIXTURES = Path(__file__).parent / "fixtures" / "go"


@pytest.fixture(scope="session")
def go_parser():
    """One tree-sitter Go parser for the whole session."""
    return GoParser()


@pytest.fixture
def parse(go_parser):
    """Parse an inline Go snippet into a SourceFile."""

    def _parse(code: str, name: str = "test.go"):
        return go_parser.parse_bytes(code.encode("utf-8"), name)

    return _parse


@pytest.fixture
def trace_lines():
    """Collecting trace sink: pass ``trace_lines.append`` as the sink."""
    return []


@pytest.fixture
def fixtures_path():
    """Return path to Go fixtures directory."""
    return FIXTURES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's CTXFIX_* variables out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CTXFIX_") and not key.startswith("CTXFIX_LOG"):
            monkeypatch.delenv(key, raising=False)
