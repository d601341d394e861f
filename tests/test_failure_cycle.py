from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest

from httpr.config.schema import FailureCycleConfig
from httpr.core.failure import CyclePhase, FailureCycle, FailureCycleState


def mk_cycle(enabled=True, failures=0, successes=0, failure_code=503, success_code=200, default=200):
    cfg = FailureCycleConfig(
        enabled=enabled,
        failure_count=failures,
        success_count=successes,
        failure_code=failure_code,
        success_code=success_code,
    )
    return FailureCycle(cfg, default_code=default)


def run(cycle, n):
    return [cycle.evaluate() for _ in range(n)]


def test_two_failures_then_one_success():
    cycle = mk_cycle(failures=2, successes=1)
    assert run(cycle, 6) == [503, 503, 200, 503, 503, 200]


@pytest.mark.parametrize("failures,successes", [(1, 1), (3, 2), (1, 4), (5, 5)])
def test_block_repeats_identically(failures, successes):
    cycle = mk_cycle(failures=failures, successes=successes, failure_code=500, success_code=201)
    block = [500] * failures + [201] * successes
    assert run(cycle, len(block) * 4) == block * 4


def test_zero_successes_always_fails():
    cycle = mk_cycle(failures=3, successes=0)
    assert set(run(cycle, 20)) == {503}


def test_zero_failures_always_succeeds():
    cycle = mk_cycle(failures=0, successes=3, success_code=202, default=418)
    assert set(run(cycle, 20)) == {202}


def test_zero_failures_example_with_matching_default():
    cycle = mk_cycle(failures=0, successes=3, success_code=200, default=200)
    assert run(cycle, 7) == [200] * 7


def test_both_zero_returns_default():
    cycle = mk_cycle(failures=0, successes=0, default=299)
    assert cycle.is_degenerate
    assert cycle.phase == CyclePhase.IDLE
    assert run(cycle, 5) == [299] * 5
    assert cycle.phase == CyclePhase.IDLE
    assert cycle.snapshot() == FailureCycleState(0, 0)


def test_disabled_returns_default_and_keeps_counters():
    cycle = mk_cycle(enabled=False, failures=2, successes=2, default=204)
    assert run(cycle, 10) == [204] * 10
    assert cycle.snapshot() == FailureCycleState(0, 0)
    assert cycle.phase == CyclePhase.DISABLED


def test_first_call_is_a_failure():
    cycle = mk_cycle(failures=1, successes=10)
    assert cycle.phase == CyclePhase.FAILURE
    assert cycle.evaluate() == 503
    assert cycle.phase == CyclePhase.SUCCESS


def test_counters_stay_in_bounds():
    cycle = mk_cycle(failures=2, successes=3)
    for _ in range(50):
        cycle.evaluate()
        state = cycle.snapshot()
        assert 0 <= state.failure_iteration <= 2
        assert 0 <= state.success_iteration <= 3


def test_snapshot_is_a_copy():
    cycle = mk_cycle(failures=2, successes=1)
    snap = cycle.snapshot()
    cycle.evaluate()
    assert snap.failure_iteration == 0
    assert cycle.snapshot().failure_iteration == 1


def test_same_config_gives_same_behavior():
    cfg = FailureCycleConfig(enabled=True, failure_count=2, success_count=3)
    again = FailureCycleConfig(**cfg.model_dump())
    assert cfg == again

    first = FailureCycle(cfg)
    second = FailureCycle(again)
    assert run(first, 17) == run(second, 17)


@pytest.mark.parametrize("failures,successes,calls", [(3, 2, 1000), (7, 0, 500), (1, 9, 1003)])
def test_concurrent_callers_match_sequential_counts(failures, successes, calls):
    expected = Counter(run(mk_cycle(failures=failures, successes=successes), calls))

    cycle = mk_cycle(failures=failures, successes=successes)
    with ThreadPoolExecutor(max_workers=16) as pool:
        futures = [pool.submit(cycle.evaluate) for _ in range(calls)]
        observed = Counter(f.result() for f in futures)

    assert observed == expected
