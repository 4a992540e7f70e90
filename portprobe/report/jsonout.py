from __future__ import annotations

import json

from ..models import ScanReport


def render_json(report: ScanReport) -> str:
    """Render the report as indented JSON; empty error fields are dropped."""
    data = report.model_dump(mode="python")
    for result in data["results"]:
        if result.get("error") is None:
            result.pop("error", None)
    return json.dumps(data, indent=2, default=str)
