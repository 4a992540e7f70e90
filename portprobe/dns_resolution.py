from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
import ipaddress
import logging
import socket
from typing import List


logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 2.0


def is_ip_address(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def _getaddrinfo_with_timeout(target: str, timeout: float) -> list[tuple]:
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(socket.getaddrinfo, target, None)
        return future.result(timeout=timeout)
    finally:
        # A hung resolver must not hold up the caller past the timeout
        executor.shutdown(wait=False)


def resolve_host(host: str, timeout: float = DEFAULT_LOOKUP_TIMEOUT) -> List[str]:
    """Return the sorted, de-duplicated addresses ``host`` resolves to.

    Raises ``socket.gaierror`` when the name does not resolve and
    ``concurrent.futures.TimeoutError`` when the lookup exceeds ``timeout``.
    """
    records = _getaddrinfo_with_timeout(host, timeout)
    addresses = set()
    for family, _, _, _, sockaddr in records:
        if family in (socket.AF_INET, socket.AF_INET6) and sockaddr:
            addresses.add(sockaddr[0])
    if not addresses:
        raise socket.gaierror("no records")
    return sorted(addresses)


def host_is_valid(host: str, timeout: float = DEFAULT_LOOKUP_TIMEOUT) -> bool:
    """True when ``host`` is an IP literal or a name that resolves in time."""
    host = (host or "").strip()
    if not host:
        return False
    if is_ip_address(host):
        return True
    try:
        addresses = resolve_host(host, timeout)
    except FutureTimeout:
        logger.debug(f"Lookup for {host} timed out after {timeout}s")
        return False
    except (OSError, UnicodeError) as e:
        logger.debug(f"Lookup for {host} failed: {e}")
        return False
    logger.debug(f"{host} resolved to {', '.join(addresses)}")
    return True
