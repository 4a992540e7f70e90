import random
import threading

import pytest

from portprobe.scanning.throttle import ErrorCounter, Throttle

from conftest import FixedRandom


def _counter_at(n: int) -> ErrorCounter:
    counter = ErrorCounter()
    for _ in range(n):
        counter.increment()
    return counter


def test_base_delay_within_bounds():
    throttle = Throttle(ErrorCounter(), rng=random.Random(1234))
    for _ in range(500):
        delay = throttle.delay_ms()
        assert 50 <= delay < 150


def test_base_delay_endpoints():
    assert Throttle(ErrorCounter(), rng=FixedRandom(0.0)).delay_ms() == 50
    assert Throttle(ErrorCounter(), rng=FixedRandom(0.5)).delay_ms() == 100


def test_no_penalty_at_threshold():
    throttle = Throttle(_counter_at(5), rng=FixedRandom(0.0))
    assert throttle.delay_ms() == 50


def test_penalty_above_threshold():
    throttle = Throttle(_counter_at(6), rng=FixedRandom(0.0))
    # 50 base + 6 errors * 10
    assert throttle.delay_ms() == 110


def test_pause_sleeps_for_delay_in_seconds():
    slept = []
    throttle = Throttle(_counter_at(10), rng=FixedRandom(0.0), sleep=slept.append)
    delay = throttle.pause()
    assert delay == 150
    assert slept == [pytest.approx(0.15)]


def test_invalid_bounds_rejected():
    with pytest.raises(ValueError):
        Throttle(ErrorCounter(), min_delay_ms=200, max_delay_ms=100)


def test_error_counter_is_exact_under_contention():
    counter = ErrorCounter()

    def bump():
        for _ in range(1000):
            counter.increment()

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter.value == 8000
