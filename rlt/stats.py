"""Iteration reports, counters and rolling-window statistics."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from rlt.errors import ConfigError
from rlt.status import Status

_RECENT_WINDOW_SECS = 600


@dataclass(frozen=True)
class IterReport:
    """The outcome of one benchmark iteration.

    ``duration`` is the iteration latency in seconds.
    """

    duration: float
    status: Status
    bytes: int = 0
    items: int = 0


@dataclass
class Counter:
    """Accumulated iterations, items, bytes and total latency (seconds)."""

    iters: int = 0
    items: int = 0
    bytes: int = 0
    latency_sum: float = 0.0

    def record(self, report: IterReport) -> None:
        """Add one iteration report to the totals."""
        self.iters += 1
        self.items += report.items
        self.bytes += report.bytes
        self.latency_sum += report.duration

    def copy(self) -> Counter:
        return Counter(self.iters, self.items, self.bytes, self.latency_sum)

    def __isub__(self, other: Counter) -> Counter:
        self.iters -= other.iters
        self.items -= other.items
        self.bytes -= other.bytes
        self.latency_sum -= other.latency_sum
        return self

    def __sub__(self, other: Counter) -> Counter:
        result = self.copy()
        result -= other
        return result


@dataclass
class IterStats:
    """Overall totals plus a per-status breakdown."""

    overall: Counter = field(default_factory=Counter)
    by_status: dict[Status, Counter] = field(default_factory=dict)

    def record(self, report: IterReport) -> None:
        self.overall.record(report)
        self.by_status.setdefault(report.status, Counter()).record(report)


class StatsWindow:
    """A fixed number of counters, newest first; rotating drops the oldest."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"stats window size must be > 0 (got {size})")
        self._buckets: deque[Counter] = deque(maxlen=size)
        self.rotate(Counter())

    @property
    def size(self) -> int:
        return self._buckets.maxlen or 0

    def push(self, report: IterReport) -> None:
        """Accumulate a report into the newest bucket."""
        self._buckets[0].record(report)

    def rotate(self, bucket: Counter) -> None:
        """Add a new bucket at the front, dropping the oldest when full."""
        self._buckets.appendleft(bucket)

    def front(self) -> Counter:
        return self._buckets[0]

    def back(self) -> Counter:
        return self._buckets[-1]

    def get(self, index: int) -> Counter | None:
        if 0 <= index < len(self._buckets):
            return self._buckets[index]
        return None

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[Counter]:
        return iter(self._buckets)


class MultiScaleStatsWindow:
    """Several rolling windows, each rotating every given number of seconds."""

    def __init__(self, buckets: int, periods: Iterable[int]) -> None:
        periods = [int(p) for p in periods]
        if not periods:
            raise ConfigError("stats window periods must be non-empty")
        for period in periods:
            if period <= 0:
                raise ConfigError(f"stats window period must be > 0 (got {period})")
        self.ticks = 0
        self._periods = periods
        self._windows = [StatsWindow(buckets) for _ in periods]

    def push(self, report: IterReport) -> None:
        """Accumulate a report into every window."""
        for window in self._windows:
            window.push(report)

    def tick(self) -> None:
        """Advance by one second, rotating windows whose period has elapsed."""
        self.ticks += 1
        for period, window in zip(self._periods, self._windows):
            if self.ticks % period == 0:
                window.rotate(Counter())

    def window_for_secs(self, secs: int) -> StatsWindow | None:
        """The window rotating every ``secs`` seconds, if there is one."""
        for period, window in zip(self._periods, self._windows):
            if period == secs:
                return window
        return None


class RecentStatsWindow:
    """Cumulative snapshots taken ``fps`` times a second, for rates over recent spans."""

    def __init__(self, fps: int) -> None:
        if fps < 1:
            raise ValueError(f"fps must be > 0 (got {fps})")
        self.fps = fps
        self.interval = 1.0 / fps
        self._window = StatsWindow(fps * _RECENT_WINDOW_SECS + 1)
        self.record(Counter())

    def record(self, total: Counter) -> None:
        """Store a snapshot of the cumulative totals."""
        self._window.rotate(total.copy())

    def stats_for_secs(self, secs: int) -> tuple[Counter, float]:
        """The change over the last ``secs`` seconds and the span actually covered."""
        frames_back = self.fps * secs
        clamped = min(frames_back, max(len(self._window) - 1, 0))
        duration = clamped / self.fps
        back = self._window.get(clamped) or self._window.back()
        return self._window.front() - back, duration