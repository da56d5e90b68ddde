#!/usr/bin/env python3
"""Walk a coordinator through a short add/update/delete session.

Every state the coordinator emits is printed as one JSON line, so the
Pending -> Loaded -> OperationSucceeded sequence of each event is easy
to follow.

Usage
-----
::

    pip install -e .
    python scripts/demo.py
    python scripts/demo.py --latency 0.2 --not-found fail -v

Options::

    --latency SECONDS    Simulated store latency (default: from env or 0)
    --not-found POLICY   succeed | fail
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any

from studentbloc import (
    Create,
    Delete,
    LoadAll,
    Student,
    StudentBlocConfig,
    StudentCoordinator,
    StudentState,
    StudentStore,
    Update,
)
from studentbloc.state.states import Loaded


def _print_state(state: StudentState) -> None:
    print(json.dumps(state.model_dump(mode="json"), ensure_ascii=False))


async def run(config: StudentBlocConfig) -> None:
    latest: list[Student] = []

    def _remember(state: StudentState) -> None:
        if isinstance(state, Loaded):
            latest[:] = state.records

    async with StudentCoordinator(StudentStore(), config=config) as coordinator:
        coordinator.subscribe(_print_state)
        coordinator.subscribe(_remember)

        coordinator.dispatch(LoadAll())
        coordinator.dispatch(Create(name="Ann", age=20, school="Tech U"))
        coordinator.dispatch(Create(name="Ben", age=22, school="State College"))
        await coordinator.join()

        ann, ben = latest
        coordinator.dispatch(Update(record=ann.copy_with(age=21)))
        coordinator.dispatch(Delete(id=ben.id))
        coordinator.dispatch(Delete(id="nonexistent-id"))
        coordinator.dispatch(Create(name="", age=19, school="Tech U"))


def main() -> None:
    parser = argparse.ArgumentParser(description="Demonstrate the studentbloc event/state pipeline.")
    parser.add_argument("--latency", type=float, help="Simulated store latency in seconds")
    parser.add_argument("--not-found", choices=["succeed", "fail"], help="Not-found policy for update/delete")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.latency is not None:
        overrides["simulated_latency"] = args.latency
    if args.not_found is not None:
        overrides["not_found_policy"] = args.not_found

    asyncio.run(run(StudentBlocConfig.from_env(**overrides)))


if __name__ == "__main__":
    main()
