#!/usr/bin/env python3
"""Serve a coordinator over HTTP.

Usage
-----
::

    pip install -e .
    python scripts/serve.py --port 8080 -v

Then, for example::

    curl -X POST localhost:8080/students -d '{"name": "Ann", "age": 20, "school": "Tech U"}'
    curl localhost:8080/students

Connect a WebSocket client to ``/ws`` to watch every state as it is emitted.
Host, port, latency and not-found policy default to the ``STUDENTBLOC_*``
environment variables.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

from aiohttp import web

from studentbloc import StudentBlocConfig, StudentCoordinator, StudentStore
from studentbloc.web import create_app


async def _build_app(config: StudentBlocConfig) -> web.Application:
    # The coordinator queue and worker must be created on the server's loop.
    coordinator = StudentCoordinator(StudentStore(), config=config)
    coordinator.start()
    return create_app(coordinator)


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the studentbloc coordinator over HTTP/WebSocket.")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int, help="Bind port")
    parser.add_argument("--latency", type=float, help="Simulated store latency in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.latency is not None:
        overrides["simulated_latency"] = args.latency
    config = StudentBlocConfig.from_env(**overrides)

    web.run_app(_build_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
