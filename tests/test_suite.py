import pytest

from rlt.stats import IterReport
from rlt.status import Status
from rlt.suite import BenchSuite, IterInfo, StatelessBenchSuite


class EchoSuite(StatelessBenchSuite):
    def __init__(self):
        self.seen = []

    async def run_iteration(self, info):
        self.seen.append(info)
        return IterReport(duration=0.001, status=Status.success(info.worker_id))


class CountingSuite(BenchSuite):
    async def setup(self, worker_id):
        return {"worker": worker_id, "calls": 0}

    async def bench(self, state, info):
        state["calls"] += 1
        return IterReport(duration=0.0, status=Status.success(state["calls"]))


def test_iter_info_starts_at_zero():
    info = IterInfo(3)
    assert info.worker_id == 3
    assert info.worker_seq == 0
    assert info.runner_seq == 0


def test_bench_suite_is_abstract():
    with pytest.raises(TypeError):
        BenchSuite()


def test_stateless_suite_requires_run_iteration():
    with pytest.raises(TypeError):
        StatelessBenchSuite()


@pytest.mark.asyncio
async def test_stateless_bench_delegates_to_run_iteration():
    suite = EchoSuite()
    info = IterInfo(5, worker_seq=2, runner_seq=9)
    report = await suite.bench(None, info)
    assert report.status == Status.success(5)
    assert suite.seen == [info]


@pytest.mark.asyncio
async def test_default_teardown_returns_none():
    suite = EchoSuite()
    assert await suite.teardown(None, IterInfo(0)) is None


@pytest.mark.asyncio
async def test_stateful_suite_keeps_state_between_iterations():
    suite = CountingSuite()
    state = await suite.setup(2)
    assert state["worker"] == 2
    first = await suite.bench(state, IterInfo(2))
    second = await suite.bench(state, IterInfo(2))
    assert first.status.code < second.status.code
    assert state["calls"] == second.status.code