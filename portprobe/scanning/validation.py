from __future__ import annotations

from ..dns_resolution import DEFAULT_LOOKUP_TIMEOUT, host_is_valid
from ..models import SUPPORTED_NETWORKS, ScanRequest
from .prober import SocketProber


MIN_PORT = 1
MAX_PORT = 65535


class ScanValidationError(ValueError):
    """Base for parameter errors that stop a scan before it starts."""

    message = "invalid scan parameters"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidHost(ScanValidationError):
    message = "invalid host"


class InvalidPortRange(ScanValidationError):
    message = f"invalid port range, valid range ({MIN_PORT}-{MAX_PORT})"


class StartPortGreaterThanEnd(ScanValidationError):
    message = "start port cannot be greater than end port"


class InvalidConcurrency(ScanValidationError):
    message = "concurrency must be at least 1"


class UnsupportedNetwork(ScanValidationError):
    message = f"unsupported network, expected one of: {', '.join(SUPPORTED_NETWORKS)}"


def _port_in_range(port: int) -> bool:
    return MIN_PORT <= port <= MAX_PORT


def validate_request(
    request: ScanRequest, lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
) -> ScanRequest:
    """Check ``request`` and return a copy with defaults filled in.

    Checks run in order: host, port bounds, start/end order, concurrency,
    network. The first failure raises; the input request is never mutated.
    """
    if not host_is_valid(request.host, lookup_timeout):
        raise InvalidHost()
    if not _port_in_range(request.start_port) or not _port_in_range(request.end_port):
        raise InvalidPortRange()
    if request.start_port > request.end_port:
        raise StartPortGreaterThanEnd()
    if request.concurrency < 1:
        raise InvalidConcurrency()

    network = (request.network or "").strip().lower() or "tcp"
    if network not in SUPPORTED_NETWORKS:
        raise UnsupportedNetwork()

    prober = request.prober
    if prober is None:
        prober = SocketProber(timeout=request.timeout)

    return request.model_copy(
        update={"network": network, "host": request.host.strip(), "prober": prober}
    )
