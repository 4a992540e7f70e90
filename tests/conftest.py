import random
import threading
from collections import Counter

import pytest

from portprobe.models import CLOSED, OPEN, ScanRequest
from portprobe.scanning.prober import ProbeOutcome, ProbeStrategy


class ParityProber(ProbeStrategy):
    """Even ports open, odd ports closed."""

    def probe(self, network, host, port):
        return ProbeOutcome(OPEN if port % 2 == 0 else CLOSED)


class RecordingProber(ProbeStrategy):
    """Counts visits per port; every port reports closed."""

    def __init__(self):
        self.visits = Counter()
        self._lock = threading.Lock()

    def probe(self, network, host, port):
        with self._lock:
            self.visits[port] += 1
        return ProbeOutcome(CLOSED)


class FailingProber(ProbeStrategy):
    """Reports ``status`` with an error for every port."""

    def __init__(self, status, message):
        self.status = status
        self.message = message

    def probe(self, network, host, port):
        return ProbeOutcome(self.status, OSError(f"{self.message} (port {port})"))


class RaisingProber(ProbeStrategy):
    def probe(self, network, host, port):
        raise RuntimeError(f"boom on {port}")


@pytest.fixture
def make_request():
    def _make(**overrides) -> ScanRequest:
        params = dict(
            host="127.0.0.1",
            start_port=1,
            end_port=10,
            concurrency=2,
            throttle=False,
        )
        params.update(overrides)
        return ScanRequest(**params)

    return _make


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns ``value``."""

    def __init__(self, value: float):
        super().__init__()
        self.value = value

    def random(self):
        return self.value
