from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def fmt_duration(seconds: float) -> str:
    """Format an elapsed duration the way the CLI prints it (e.g. ``1.234s``)."""
    return f"{seconds:.3f}s"
