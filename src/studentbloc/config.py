"""Coordinator configuration for studentbloc."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from studentbloc.exceptions import StudentBlocConfigError
from studentbloc.state.policy import NotFoundPolicy


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise StudentBlocConfigError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise StudentBlocConfigError(f"{name} must be an integer, got {value!r}") from exc


def _require_number(name: str, value: object, *, integral: bool = False) -> None:
    allowed = (int,) if integral else (int, float)
    if isinstance(value, bool) or not isinstance(value, allowed):
        kind = "an integer" if integral else "a number"
        raise StudentBlocConfigError(f"{name} must be {kind}, got {value!r}")


@dataclasses.dataclass(frozen=True)
class StudentBlocConfig:
    """Runtime configuration.

    Parameters
    ----------
    simulated_latency : float
        Seconds the coordinator waits before every store call, modelling a
        store backed by slow I/O.  ``0`` disables the delay.
    not_found_policy : NotFoundPolicy
        What an update or delete of an unknown id produces.
        ``succeed`` re-emits the snapshot and a success message;
        ``fail`` emits ``OperationFailed`` instead.
    host : str
        Bind address for the HTTP adapter.
    port : int
        Bind port for the HTTP adapter.
    stream_buffer : int
        Undelivered states a ``stream()`` consumer may fall behind before
        it is dropped.
    """

    simulated_latency: float = 0.0
    not_found_policy: NotFoundPolicy = NotFoundPolicy.SUCCEED
    host: str = "127.0.0.1"
    port: int = 8080
    stream_buffer: int = 256

    def __post_init__(self) -> None:
        _require_number("simulated_latency", self.simulated_latency)
        _require_number("port", self.port, integral=True)
        _require_number("stream_buffer", self.stream_buffer, integral=True)
        if self.simulated_latency < 0:
            raise StudentBlocConfigError("simulated_latency must be >= 0")
        try:
            policy = NotFoundPolicy(self.not_found_policy)
        except ValueError as exc:
            raise StudentBlocConfigError(f"Unknown not_found_policy: {self.not_found_policy!r}") from exc
        # Accept plain strings but always store the enum member.
        object.__setattr__(self, "not_found_policy", policy)
        if not 0 <= self.port <= 65535:
            raise StudentBlocConfigError(f"port out of range: {self.port}")
        if self.stream_buffer < 1:
            raise StudentBlocConfigError("stream_buffer must be >= 1")

    @classmethod
    def from_env(cls, **overrides: Any) -> StudentBlocConfig:
        """Create configuration from environment variables.

        Reads ``STUDENTBLOC_SIMULATED_LATENCY``, ``STUDENTBLOC_NOT_FOUND_POLICY``,
        ``STUDENTBLOC_HOST``, ``STUDENTBLOC_PORT`` and ``STUDENTBLOC_STREAM_BUFFER``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        latency_env = env.get("STUDENTBLOC_SIMULATED_LATENCY")
        if latency_env is not None and "simulated_latency" not in overrides:
            config_kwargs["simulated_latency"] = _env_float("STUDENTBLOC_SIMULATED_LATENCY", latency_env)

        policy_env = env.get("STUDENTBLOC_NOT_FOUND_POLICY")
        if policy_env is not None and "not_found_policy" not in overrides:
            config_kwargs["not_found_policy"] = policy_env.strip().lower()

        host_env = env.get("STUDENTBLOC_HOST")
        if host_env is not None and "host" not in overrides:
            config_kwargs["host"] = host_env

        port_env = env.get("STUDENTBLOC_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_int("STUDENTBLOC_PORT", port_env)

        buffer_env = env.get("STUDENTBLOC_STREAM_BUFFER")
        if buffer_env is not None and "stream_buffer" not in overrides:
            config_kwargs["stream_buffer"] = _env_int("STUDENTBLOC_STREAM_BUFFER", buffer_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
