"""Shared pytest fixtures and configuration for the sigv4 test suite.

Guidelines
----------
* No internet access in any test.
* Signers and transports are mocked at the core boundary; the botocore
  and requests adapters are tested with in-memory doubles.
* Core tests must be pure, with no side effects.
* Tests must not depend on the caller's AWS configuration.
"""

from __future__ import annotations

from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    """Directory holding request body fixtures."""
    return DATA_DIR


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's color and log settings out of the tests."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("SIGV4_LOG", raising=False)
