"""Exceptions raised by the benchmark library."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when benchmark options or window settings are invalid."""


class WorkerSetupError(RuntimeError):
    """Raised when a worker fails to set up its state before benchmarking."""

    def __init__(self, worker_id: int, source: BaseException) -> None:
        super().__init__(f"failed to set up worker {worker_id}: {source}")
        self.worker_id = worker_id
        self.source = source
        self.__cause__ = source