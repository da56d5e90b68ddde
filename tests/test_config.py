from __future__ import annotations

import pytest

from studentbloc.config import StudentBlocConfig
from studentbloc.exceptions import StudentBlocConfigError
from studentbloc.state.policy import NotFoundPolicy


def test_defaults() -> None:
    config = StudentBlocConfig()
    assert config.simulated_latency == 0.0
    assert config.not_found_policy is NotFoundPolicy.SUCCEED
    assert config.host == "127.0.0.1"
    assert config.port == 8080


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STUDENTBLOC_SIMULATED_LATENCY", "0.25")
    monkeypatch.setenv("STUDENTBLOC_NOT_FOUND_POLICY", " FAIL ")
    monkeypatch.setenv("STUDENTBLOC_HOST", "0.0.0.0")
    monkeypatch.setenv("STUDENTBLOC_PORT", "9000")

    config = StudentBlocConfig.from_env()

    assert config.simulated_latency == 0.25
    assert config.not_found_policy is NotFoundPolicy.FAIL
    assert config.host == "0.0.0.0"
    assert config.port == 9000


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STUDENTBLOC_SIMULATED_LATENCY", "not-a-number")
    monkeypatch.setenv("STUDENTBLOC_PORT", "9000")

    config = StudentBlocConfig.from_env(simulated_latency=1.5, port=8181)

    assert config.simulated_latency == 1.5
    assert config.port == 8181


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("STUDENTBLOC_SIMULATED_LATENCY", "soon"),
        ("STUDENTBLOC_SIMULATED_LATENCY", "-1"),
        ("STUDENTBLOC_NOT_FOUND_POLICY", "ignore"),
        ("STUDENTBLOC_PORT", "http"),
        ("STUDENTBLOC_PORT", "70000"),
        ("STUDENTBLOC_STREAM_BUFFER", "many"),
        ("STUDENTBLOC_STREAM_BUFFER", "0"),
    ],
)
def test_invalid_env_values_rejected(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(StudentBlocConfigError):
        StudentBlocConfig.from_env()


def test_policy_accepts_plain_string() -> None:
    assert StudentBlocConfig(not_found_policy="fail").not_found_policy is NotFoundPolicy.FAIL  # type: ignore[arg-type]


def test_host_from_env_unless_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STUDENTBLOC_HOST", "0.0.0.0")
    assert StudentBlocConfig.from_env().host == "0.0.0.0"
    assert StudentBlocConfig.from_env(host="localhost").host == "localhost"


def test_stream_buffer_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STUDENTBLOC_STREAM_BUFFER", "16")
    assert StudentBlocConfig.from_env().stream_buffer == 16


@pytest.mark.parametrize(
    "overrides",
    [
        {"port": "x"},
        {"port": 80.5},
        {"port": True},
        {"simulated_latency": "x"},
        {"simulated_latency": None},
        {"stream_buffer": "many"},
        {"stream_buffer": 0},
    ],
)
def test_bad_override_types_raise_config_error(overrides: dict[str, object]) -> None:
    with pytest.raises(StudentBlocConfigError):
        StudentBlocConfig.from_env(**overrides)
