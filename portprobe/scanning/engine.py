"""Scan engine: bounded worker pool over a job queue, single collector.

Flow for one scan:
- a producer thread feeds every port in the range into a job queue sized to
  the worker count, then one end-of-jobs marker per worker;
- ``concurrency`` worker threads probe, emit a ``PortResult`` and optionally
  throttle;
- a closer thread joins every worker and then marks the result queue done;
- the caller's thread drains the result queue, sorts and builds the report.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import List, Optional

from ..dns_resolution import DEFAULT_LOOKUP_TIMEOUT
from ..models import CLOSED, PortResult, ScanReport, ScanRequest
from ..utils.time import now_utc
from .prober import ProbeStrategy
from .throttle import ErrorCounter, Throttle
from .validation import validate_request


logger = logging.getLogger(__name__)

# End-of-stream marker for both queues
_DONE = object()


def _error_text(error: BaseException) -> str:
    return str(error) or type(error).__name__


def probe_port(prober: ProbeStrategy, network: str, host: str, port: int) -> PortResult:
    """Probe one port and wrap the outcome; never raises for probe failures."""
    try:
        outcome = prober.probe(network, host, port)
        error = _error_text(outcome.error) if outcome.error is not None else None
        return PortResult(port=port, status=outcome.status, error=error)
    except Exception as e:
        logger.warning(f"Prober failed on {host}:{port}/{network}: {e!r}")
        return PortResult(port=port, status=CLOSED, error=_error_text(e))


def _produce_jobs(jobs: queue.Queue, start_port: int, end_port: int, workers: int) -> None:
    for port in range(start_port, end_port + 1):
        jobs.put(port)
    for _ in range(workers):
        jobs.put(_DONE)


def _worker(
    jobs: queue.Queue,
    results: queue.Queue,
    request: ScanRequest,
    counter: ErrorCounter,
    throttle: Optional[Throttle],
) -> None:
    while True:
        port = jobs.get()
        if port is _DONE:
            return
        result = probe_port(request.prober, request.network, request.host, port)
        if result.error is not None:
            errors = counter.increment()
            logger.debug(f"Port {port}: {result.status} ({result.error}); errors so far: {errors}")
        results.put(result)
        if throttle is not None:
            throttle.pause()


def _close_when_done(workers: List[threading.Thread], results: queue.Queue) -> None:
    for w in workers:
        w.join()
    results.put(_DONE)


def _collect(results: queue.Queue) -> List[PortResult]:
    collected: List[PortResult] = []
    while True:
        item = results.get()
        if item is _DONE:
            break
        collected.append(item)
    collected.sort(key=lambda r: r.port)
    return collected


def run_scan(
    request: ScanRequest, lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
) -> ScanReport:
    """Validate ``request`` and scan every port in its range.

    Raises a ``ScanValidationError`` subclass before any thread starts when the
    parameters are invalid. Per-port failures never raise; they are recorded
    on the corresponding ``PortResult``.
    """
    request = validate_request(request, lookup_timeout)

    started_at = now_utc()
    start = time.perf_counter()
    logger.info(
        f"Scanning {request.host} ports {request.start_port}-{request.end_port}/{request.network} "
        f"with {request.concurrency} workers (throttle={request.throttle})"
    )

    jobs: queue.Queue = queue.Queue(maxsize=request.concurrency)
    results: queue.Queue = queue.Queue(maxsize=request.port_count)
    counter = ErrorCounter()
    throttle = Throttle(counter) if request.throttle else None

    # Workers beyond the port count would only idle
    wanted = min(request.concurrency, request.port_count)
    workers: List[threading.Thread] = []
    for i in range(wanted):
        w = threading.Thread(
            target=_worker,
            args=(jobs, results, request, counter, throttle),
            name=f"portprobe-worker-{i}",
            daemon=True,
        )
        try:
            w.start()
        except RuntimeError as e:
            if not workers:
                raise
            logger.warning(f"Started {len(workers)} of {wanted} workers: {e}")
            break
        workers.append(w)

    threading.Thread(
        target=_produce_jobs,
        args=(jobs, request.start_port, request.end_port, len(workers)),
        name="portprobe-producer",
        daemon=True,
    ).start()
    threading.Thread(
        target=_close_when_done,
        args=(workers, results),
        name="portprobe-closer",
        daemon=True,
    ).start()

    collected = _collect(results)
    elapsed = time.perf_counter() - start
    logger.info(f"Scan of {request.host} completed in {elapsed:.3f}s ({counter.value} probe errors)")

    return ScanReport(
        host=request.host,
        network=request.network,
        start_port=request.start_port,
        end_port=request.end_port,
        concurrency=request.concurrency,
        throttle=request.throttle,
        started_at=started_at,
        finished_at=now_utc(),
        elapsed_seconds=elapsed,
        error_count=counter.value,
        results=collected,
    )
