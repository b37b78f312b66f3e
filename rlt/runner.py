"""The benchmark runner, its options and the primitives it coordinates with."""

from __future__ import annotations

import asyncio
import copy
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from rlt.errors import ConfigError, WorkerSetupError
from rlt.stats import IterReport
from rlt.suite import BenchSuite, IterInfo

logger = logging.getLogger(__name__)

PENDING = "pending"
SETUP = "setup"
WARMUP = "warmup"
BENCH = "bench"
_STAGES = (PENDING, SETUP, WARMUP, BENCH)

_CANCELLED = object()

Observer = Callable[[IterReport | BaseException], Awaitable[None] | None]


class Clock:
    """A pausable clock measuring running time in seconds."""

    def __init__(self, paused: bool = False) -> None:
        self._accumulated = 0.0
        self._started_at: float | None = None if paused else time.perf_counter()
        self._changed = asyncio.Event()

    @classmethod
    def new_paused(cls) -> Clock:
        return cls(paused=True)

    def _notify(self) -> None:
        self._changed.set()
        self._changed = asyncio.Event()

    def pause(self) -> None:
        if self._started_at is not None:
            self._accumulated += time.perf_counter() - self._started_at
            self._started_at = None
            self._notify()

    def resume(self) -> None:
        if self._started_at is None:
            self._started_at = time.perf_counter()
            self._notify()

    def is_paused(self) -> bool:
        return self._started_at is None

    def elapsed(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + time.perf_counter() - self._started_at

    async def sleep(self, seconds: float) -> None:
        """Wait until the clock has run for ``seconds`` more; paused time does not count."""
        target = self.elapsed() + seconds
        while True:
            changed = self._changed
            if self.is_paused():
                await changed.wait()
                continue
            remaining = target - self.elapsed()
            if remaining <= 0:
                return
            try:
                await asyncio.wait_for(changed.wait(), remaining)
            except TimeoutError:
                pass


class PauseControl:
    """A shared switch that holds iterations back while paused."""

    def __init__(self) -> None:
        self._running = asyncio.Event()
        self._running.set()

    def pause(self) -> None:
        self._running.clear()

    def resume(self) -> None:
        self._running.set()

    def is_paused(self) -> bool:
        return not self._running.is_set()

    async def wait_if_paused(self) -> None:
        if not self._running.is_set():
            await self._running.wait()


@dataclass(frozen=True)
class BenchPhase:
    """The phase a run is in, with progress for setup and warm-up."""

    stage: str = PENDING
    completed: int = 0
    total: int = 0

    def __post_init__(self) -> None:
        if self.stage not in _STAGES:
            raise ValueError(f"unknown bench phase: {self.stage!r}")


class PhaseChannel:
    """Holds the latest phase; readers may wait for a phase they care about."""

    def __init__(self, initial: BenchPhase | None = None) -> None:
        self._value = initial if initial is not None else BenchPhase()
        self._changed = asyncio.Event()

    def send(self, phase: BenchPhase) -> None:
        self._value = phase
        self._changed.set()
        self._changed = asyncio.Event()

    def get(self) -> BenchPhase:
        return self._value

    async def wait_for(self, predicate: Callable[[BenchPhase], bool]) -> BenchPhase:
        while True:
            changed = self._changed
            if predicate(self._value):
                return self._value
            await changed.wait()


class RateLimiter:
    """Lets through at most ``rate`` callers per second, with a burst of one."""

    def __init__(self, rate: int) -> None:
        if rate <= 0:
            raise ConfigError("rate must be non-zero")
        self._interval = 1.0 / rate
        self._next_free: float | None = None

    async def until_ready(self) -> None:
        now = asyncio.get_running_loop().time()
        allowed = now if self._next_free is None else max(self._next_free, now)
        self._next_free = allowed + self._interval
        if allowed > now:
            await asyncio.sleep(allowed - now)


def _seconds(value: float | timedelta) -> float:
    return value.total_seconds() if isinstance(value, timedelta) else float(value)


@dataclass
class BenchOpts:
    """Core options for a benchmark run. Durations are in seconds."""

    clock: Clock = field(default_factory=Clock.new_paused)
    concurrency: int = 1
    iterations: int | None = None
    duration: float | None = None
    warmups: int = 0
    rate: int | None = None

    @classmethod
    def builder(cls) -> BenchOptsBuilder:
        return BenchOptsBuilder()


class BenchOptsBuilder:
    """Fluent construction of validated :class:`BenchOpts`."""

    def __init__(self) -> None:
        self._clock: Clock | None = None
        self._concurrency = 1
        self._iterations: int | None = None
        self._duration: float | None = None
        self._warmups = 0
        self._rate: int | None = None

    def clock(self, clock: Clock) -> BenchOptsBuilder:
        self._clock = clock
        return self

    def concurrency(self, n: int) -> BenchOptsBuilder:
        self._concurrency = n
        return self

    def iterations(self, n: int) -> BenchOptsBuilder:
        self._iterations = n
        return self

    def duration(self, d: float | timedelta) -> BenchOptsBuilder:
        self._duration = _seconds(d)
        return self

    def warmups(self, n: int) -> BenchOptsBuilder:
        self._warmups = n
        return self

    def rate(self, r: int) -> BenchOptsBuilder:
        """Limit the run to ``r`` iterations per second."""
        self._rate = r
        return self

    def build(self) -> BenchOpts:
        if self._concurrency <= 0:
            raise ConfigError("concurrency must be non-zero")
        if self._rate is not None and self._rate <= 0:
            raise ConfigError("rate must be non-zero")
        return BenchOpts(
            clock=self._clock if self._clock is not None else Clock.new_paused(),
            concurrency=self._concurrency,
            iterations=self._iterations,
            duration=self._duration,
            warmups=self._warmups,
            rate=self._rate,
        )


@dataclass
class _RunContext:
    workers: int
    barrier: asyncio.Barrier
    limiter: RateLimiter | None
    warmup_seq: int = 0
    warmup_completed: int = 0
    setup_completed: int = 0
    seq: int = 0


class Runner:
    """Runs a suite with the given options across concurrent workers."""

    def __init__(
        self,
        suite: BenchSuite,
        opts: BenchOpts,
        observer: Observer | None = None,
        pause: PauseControl | None = None,
        cancel: asyncio.Event | None = None,
        phases: PhaseChannel | None = None,
    ) -> None:
        self.suite = suite
        self.opts = opts
        self.observer = observer
        self.pause = pause if pause is not None else PauseControl()
        self.cancel = cancel if cancel is not None else asyncio.Event()
        self.phases = phases if phases is not None else PhaseChannel()

    async def run(self) -> None:
        """Run setup, warm-up and the benchmark on every worker, then tear down."""
        opts = self.opts
        ctx = _RunContext(
            workers=opts.concurrency,
            barrier=asyncio.Barrier(opts.concurrency),
            limiter=RateLimiter(opts.rate) if opts.rate is not None else None,
        )
        tasks = [
            asyncio.create_task(self._worker(worker_id, copy.copy(self.suite), ctx))
            for worker_id in range(opts.concurrency)
        ]
        if opts.duration is not None:
            await self._until_expired(opts.duration, tasks)
        await _join_all(tasks)

    async def _until_expired(self, duration: float, tasks: list[asyncio.Task]) -> None:
        async def expire() -> None:
            await self.opts.clock.sleep(duration)
            self.cancel.set()

        waiters = [
            asyncio.create_task(self.cancel.wait()),
            asyncio.create_task(expire()),
            asyncio.create_task(asyncio.wait(tasks)),
        ]
        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()

    async def _unless_cancelled(self, awaitable: Awaitable[Any]) -> Any:
        """Await ``awaitable`` unless the run is cancelled first."""
        if self.cancel.is_set():
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return _CANCELLED
        work = asyncio.ensure_future(awaitable)
        stop = asyncio.ensure_future(self.cancel.wait())
        try:
            done, _ = await asyncio.wait({work, stop}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop.cancel()
            if not work.done():
                work.cancel()
        if stop in done:
            return _CANCELLED
        return work.result()

    async def _iteration(
        self, suite: BenchSuite, state: Any, info: IterInfo
    ) -> IterReport | Exception:
        await self.pause.wait_if_paused()
        try:
            return await suite.bench(state, info)
        except Exception as exc:
            logger.error("Error in iteration(%s): %r", info, exc)
            return exc

    async def _notify(self, result: IterReport | Exception) -> None:
        if self.observer is None:
            return
        try:
            outcome = self.observer(result)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            logger.debug("observer failed: %r", exc)

    async def _worker(self, worker_id: int, suite: BenchSuite, ctx: _RunContext) -> None:
        try:
            state = await suite.setup(worker_id)
        except Exception as exc:
            raise WorkerSetupError(worker_id, exc) from exc
        info = IterInfo(worker_id)

        ctx.setup_completed += 1
        self.phases.send(BenchPhase(SETUP, ctx.setup_completed, ctx.workers))
        await ctx.barrier.wait()

        warmups = self.opts.warmups
        while True:
            info.runner_seq = ctx.warmup_seq
            ctx.warmup_seq += 1
            if info.runner_seq >= warmups:
                break
            if ctx.limiter is not None:
                if await self._unless_cancelled(ctx.limiter.until_ready()) is _CANCELLED:
                    break
            result = await self._unless_cancelled(self._iteration(suite, state, info))
            if result is _CANCELLED:
                break
            info.worker_seq += 1
            ctx.warmup_completed += 1
            self.phases.send(BenchPhase(WARMUP, ctx.warmup_completed, warmups))

        if await ctx.barrier.wait() == ctx.workers - 1:
            self.phases.send(BenchPhase(BENCH))
            if not self.pause.is_paused():
                self.opts.clock.resume()

        info.worker_seq = 0
        iterations = self.opts.iterations
        while True:
            info.runner_seq = ctx.seq
            ctx.seq += 1
            if iterations is not None and info.runner_seq >= iterations:
                break
            if ctx.limiter is not None:
                if await self._unless_cancelled(ctx.limiter.until_ready()) is _CANCELLED:
                    break
            result = await self._unless_cancelled(self._iteration(suite, state, info))
            if result is _CANCELLED:
                break
            await self._notify(result)
            info.worker_seq += 1

        try:
            await suite.teardown(state, info)
        except Exception as exc:
            logger.warning("Error during teardown for worker %d: %r", worker_id, exc)


async def _join_all(tasks: Iterable[asyncio.Task]) -> None:
    tasks = list(tasks)
    try:
        for finished in asyncio.as_completed(tasks):
            await finished
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)