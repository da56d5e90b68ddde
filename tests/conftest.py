from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic ids: ``student-1``, ``student-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"student-{next(counter)}"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "STUDENTBLOC_SIMULATED_LATENCY",
        "STUDENTBLOC_NOT_FOUND_POLICY",
        "STUDENTBLOC_HOST",
        "STUDENTBLOC_PORT",
        "STUDENTBLOC_STREAM_BUFFER",
    ):
        monkeypatch.delenv(name, raising=False)
