"""JSON reporter for scripting and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from vulntally.findings.models import AggregationResult


def to_dict(result: AggregationResult, tag: str) -> Dict[str, Any]:
    """Convert an AggregationResult to a JSON-serialisable dict."""
    repositories: List[Dict[str, Any]] = []
    for name, counts in result.rows():
        repositories.append({"repository": name, **counts.as_dict()})

    return {
        "version": "1.0",
        "tag": tag,
        "partial": result.partial,
        "repositories": repositories,
        "totals": {**result.totals.as_dict(), "total": result.attributed_total},
        "unattributed": result.unattributed,
        "unrecognized": result.unrecognized,
    }


def render(result: AggregationResult, tag: str) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, tag), indent=2)
