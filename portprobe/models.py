from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


PortStatus = Literal["open", "closed", "timeout"]

OPEN: PortStatus = "open"
CLOSED: PortStatus = "closed"
TIMEOUT: PortStatus = "timeout"

SUPPORTED_NETWORKS = ("tcp", "tcp4", "tcp6", "udp", "udp4", "udp6")


class ScanRequest(BaseModel):
    """Parameters for a single scan.

    Fields are unconstrained here; ``validate_request`` checks
    them and raises the specific parameter errors.
    """

    network: Optional[str] = None  # tcp/udp, with optional 4/6 suffix
    host: str
    start_port: int
    end_port: int
    concurrency: int = 1
    throttle: bool = False
    # Probe timeout in seconds; None keeps the socket default
    timeout: Optional[float] = None
    # ProbeStrategy instance; None installs the socket prober on validation
    prober: Optional[Any] = Field(default=None, exclude=True)

    @property
    def port_count(self) -> int:
        return self.end_port - self.start_port + 1


class PortResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    port: int
    status: PortStatus
    error: Optional[str] = None


class ScanReport(BaseModel):
    host: str
    network: str
    start_port: int
    end_port: int
    concurrency: int
    throttle: bool
    started_at: datetime
    finished_at: datetime
    elapsed_seconds: float
    error_count: int = 0
    results: List[PortResult] = Field(default_factory=list)

    def open_ports(self) -> List[int]:
        return [r.port for r in self.results if r.status == OPEN]

    def count(self, status: PortStatus) -> int:
        return sum(1 for r in self.results if r.status == status)
