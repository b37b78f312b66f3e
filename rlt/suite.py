"""Base classes for defining benchmark suites."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from rlt.stats import IterReport


@dataclass
class IterInfo:
    """Where an iteration sits within its worker and within the whole run."""

    worker_id: int
    worker_seq: int = 0
    runner_seq: int = 0


class BenchSuite(ABC):
    """A benchmark with per-worker state.

    Every worker works on its own shallow copy of the suite: ``setup`` builds
    the worker state (a client, a connection, ...), ``bench`` runs one
    iteration with it, and ``teardown`` is called once when the worker stops.
    """

    @abstractmethod
    async def setup(self, worker_id: int) -> Any:
        """Create and return the state for the given worker."""

    @abstractmethod
    async def bench(self, state: Any, info: IterInfo) -> IterReport:
        """Run a single iteration and report its outcome."""

    async def teardown(self, state: Any, info: IterInfo) -> None:
        """Release the worker state.

        By default the state is closed if it offers ``aclose`` or ``close``.
        """
        closer = getattr(state, "aclose", None) or getattr(state, "close", None)
        if callable(closer):
            result = closer()
            if inspect.isawaitable(result):
                await result


class StatelessBenchSuite(BenchSuite):
    """A benchmark that needs no per-worker state."""

    async def setup(self, worker_id: int) -> int:
        """Check the worker id and use it as the worker's only state."""
        if isinstance(worker_id, bool) or not isinstance(worker_id, int):
            raise TypeError(f"worker id must be an int, got {type(worker_id).__name__}")
        if worker_id < 0:
            raise ValueError(f"worker id must be >= 0 (got {worker_id})")
        return worker_id

    async def bench(self, state: Any, info: IterInfo) -> IterReport:
        return await self.run_iteration(info)

    @abstractmethod
    async def run_iteration(self, info: IterInfo) -> IterReport:
        """Run a single iteration and report its outcome."""