"""Connection probe strategies.

A probe makes one connection attempt against one port and classifies it.
The engine only depends on ``ProbeStrategy``, so tests and callers can
substitute deterministic implementations for ``SocketProber``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import socket
from typing import Optional

from ..models import CLOSED, OPEN, TIMEOUT, PortStatus


@dataclass(frozen=True)
class ProbeOutcome:
    status: PortStatus
    error: Optional[BaseException] = None


class ProbeStrategy(ABC):
    """Abstract base class for probe implementations"""

    @abstractmethod
    def probe(self, network: str, host: str, port: int) -> ProbeOutcome:
        """
        Attempt a single connection and classify it

        Args:
            network: tcp/udp, optionally suffixed with 4 or 6
            host: IP literal or resolvable name
            port: Port number to probe

        Returns:
            ProbeOutcome carrying the status and, on failure, the error
        """


def _family_for(network: str) -> int:
    if network.endswith("4"):
        return socket.AF_INET
    if network.endswith("6"):
        return socket.AF_INET6
    return socket.AF_UNSPEC


class SocketProber(ProbeStrategy):
    """Probe with a plain socket connect.

    TCP ports are open when the handshake completes. UDP is connectionless,
    so a UDP port reports open whenever the local connect succeeds.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def probe(self, network: str, host: str, port: int) -> ProbeOutcome:
        try:
            sock = self._connect(network, host, port)
        except (socket.timeout, TimeoutError) as e:
            return ProbeOutcome(TIMEOUT, e)
        except OSError as e:
            return ProbeOutcome(CLOSED, e)
        sock.close()
        return ProbeOutcome(OPEN)

    def _connect(self, network: str, host: str, port: int) -> socket.socket:
        sock_type = socket.SOCK_DGRAM if network.startswith("udp") else socket.SOCK_STREAM
        infos = socket.getaddrinfo(host, port, _family_for(network), sock_type)
        last_error: Optional[OSError] = None
        for family, stype, proto, _, sockaddr in infos:
            sock = socket.socket(family, stype, proto)
            if self.timeout is not None:
                sock.settimeout(self.timeout)
            try:
                sock.connect(sockaddr)
                return sock
            except OSError as e:
                sock.close()
                last_error = e
        if last_error is None:
            last_error = socket.gaierror(f"no addresses for {host}")
        raise last_error
