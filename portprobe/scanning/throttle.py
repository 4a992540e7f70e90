from __future__ import annotations

import random
import threading
import time
from typing import Callable, Optional


class ErrorCounter:
    """Monotonic count of probe errors shared by the workers of one scan."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class Throttle:
    """Randomized per-probe delay that backs off as errors accumulate.

    - Base delay is uniform in [min_delay_ms, max_delay_ms).
    - Once the shared error count exceeds ``error_threshold``, every delay
      grows by ``error_count * penalty_ms``.
    """

    def __init__(
        self,
        counter: ErrorCounter,
        min_delay_ms: float = 50.0,
        max_delay_ms: float = 150.0,
        error_threshold: int = 5,
        penalty_ms: float = 10.0,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_delay_ms < min_delay_ms:
            raise ValueError("max_delay_ms must be >= min_delay_ms")
        self.counter = counter
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.error_threshold = error_threshold
        self.penalty_ms = penalty_ms
        self._rng = rng or random.Random()
        self._rng_lock = threading.Lock()
        self._sleep = sleep

    def delay_ms(self) -> float:
        with self._rng_lock:
            u = self._rng.random()
        delay = self.min_delay_ms + u * (self.max_delay_ms - self.min_delay_ms)
        errors = self.counter.value
        if errors > self.error_threshold:
            delay += errors * self.penalty_ms
        return delay

    def pause(self) -> float:
        delay = self.delay_ms()
        self._sleep(delay / 1000.0)
        return delay
