from __future__ import annotations

from ..models import ScanReport


def render_text(report: ScanReport) -> str:
    """One ``Port <N>: <status>`` line per result, ascending by port."""
    return "\n".join(f"Port {r.port}: {r.status}" for r in report.results)
