# rlt

`rlt` is a small load testing library built on `asyncio`, with no
dependencies outside the standard library. You describe one iteration of
work as a benchmark suite, and the runner drives it from a number of
concurrent workers, with optional warm-up iterations, an iteration or time
limit, and a rate limit in iterations per second. Each result is handed to
an observer you supply, and the library provides counters and rolling
statistics windows to collect them into.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `rlt.suite`: `BenchSuite`, with `setup(worker_id)`, `bench(state, info)`
  and `teardown(state, info)`. The default `teardown` closes the state if it
  has an `aclose` or `close` method. `StatelessBenchSuite` needs only
  `run_iteration(info)`; its `setup` just returns the worker id. `IterInfo`
  carries `worker_id`, `worker_seq` (the worker's own count) and
  `runner_seq` (the count across all workers).
- `rlt.runner`: `BenchOpts` and its builder (`BenchOpts.builder()`, with
  `clock`, `concurrency`, `iterations`, `duration`, `warmups`, `rate` and
  `build`), `Runner`, `Clock`, `PauseControl`, `BenchPhase`, `PhaseChannel`
  and `RateLimiter`.
- `rlt.status`: `StatusKind` and `Status`, made with `Status.success`,
  `Status.client_error`, `Status.server_error`, `Status.error` or, from an
  HTTP status code, `Status.from_http`.
- `rlt.stats`: `IterReport` (one iteration's latency in seconds, status,
  bytes and items), `Counter`, `IterStats`, `StatsWindow`,
  `MultiScaleStatsWindow` and `RecentStatsWindow`.
- `rlt.timewindow`: `TimeWindow` (one second, ten seconds, one minute, ten
  minutes) and `TimeWindowMode` (`auto()` or `manual(window)`).
- `rlt.util`: `human_bytes(value, precision)` and `rate(count, elapsed)`.
- `rlt.errors`: `ConfigError` and `WorkerSetupError`.

## Running a benchmark

```python
import asyncio
import time

from rlt.runner import BenchOpts, Runner
from rlt.stats import IterReport, IterStats
from rlt.status import Status
from rlt.suite import StatelessBenchSuite


class Nap(StatelessBenchSuite):
    async def run_iteration(self, info):
        start = time.perf_counter()
        await asyncio.sleep(0.001)
        return IterReport(
            duration=time.perf_counter() - start,
            status=Status.success(200),
            items=1,
        )


async def main():
    stats = IterStats()

    def observe(result):
        if isinstance(result, IterReport):
            stats.record(result)

    opts = BenchOpts.builder().concurrency(4).iterations(1000).warmups(10).build()
    await Runner(Nap(), opts, observer=observe).run()
    print(stats.overall.iters, opts.clock.elapsed())


asyncio.run(main())
```

How a run proceeds:

- Each worker gets its own shallow copy of the suite and calls `setup`. If
  `setup` raises, the run fails with `WorkerSetupError`.
- All workers finish setup before warm-up starts, and finish warm-up before
  the measured phase starts. Warm-up results are not passed to the
  observer.
- The clock in `BenchOpts` starts when the measured phase begins, unless
  the `PauseControl` is paused at that moment, so setup and warm-up time are
  not counted.
- The run ends after `iterations` iterations in total, after `duration`
  seconds of clock time, or when the cancel event given to `Runner` is set,
  whichever comes first. With neither limit it runs until cancelled.
- The observer is called with each `IterReport`, or with the exception an
  iteration raised; it may be a plain function or a coroutine function.
  Errors raised by the observer or by `teardown` are logged and ignored.
- Progress is published on a `PhaseChannel` as `BenchPhase` values with
  stage `"setup"`, `"warmup"` (with `completed` and `total`) and then
  `"bench"`; `PhaseChannel.wait_for(predicate)` waits for a phase.
- `PauseControl.pause()` holds back new iterations until `resume()`. It does
  not stop the clock; call `Clock.pause()` and `Clock.resume()` as well if
  paused time should not count.

`BenchOptsBuilder.build()` raises `ConfigError` when the concurrency or the
rate is zero or negative. `duration` accepts seconds or a `timedelta`.

## Values and helpers

```python
from rlt.status import Status
from rlt.timewindow import TimeWindow, TimeWindowMode
from rlt.util import human_bytes, rate

print(Status.from_http(404))                # Client Error(404)
print(human_bytes(1536, 2))                 # 1.50 KiB
print(rate(500, 2.0))                       # 250.0
print(TimeWindowMode.auto().effective(75))  # 1m
print(TimeWindow.TEN_SEC.format(3))         # 30s
```

`MultiScaleStatsWindow(buckets, periods)` keeps one rolling window per
period in seconds; `push` adds a report to all of them and `tick`, called
once a second, rotates those whose period has come round.
`RecentStatsWindow(fps)` stores cumulative `Counter` snapshots `fps` times
a second and `stats_for_secs(secs)` returns the change over that span and
the span actually covered.

## What it does not do

There is no command-line program, no live terminal dashboard and no final
summary report with latency percentiles. The runner only passes results to
your observer; collecting, aggregating and displaying them is up to you,
using the counters and windows above.