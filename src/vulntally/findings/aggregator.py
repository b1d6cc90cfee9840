"""Fold findings into per-repository and grand-total severity counts."""

from __future__ import annotations

from typing import Iterable

from vulntally.findings.extractor import extract_repository
from vulntally.findings.models import AggregationResult, Finding, SeverityCounts


def aggregate(findings: Iterable[Finding], *, partial: bool = False) -> AggregationResult:
    """Count findings by repository and severity tier.

    Findings with no resolvable repository count toward the grand total only.
    Severities outside critical/high/medium/low are not counted anywhere;
    they are only tallied in ``unrecognized``.
    """
    buckets: dict[str, SeverityCounts] = {}
    totals = SeverityCounts()
    unattributed = 0
    unrecognized = 0
    seen = 0

    for finding in findings:
        seen += 1
        name = extract_repository(finding)
        tier = finding.tier

        if name:
            bucket = buckets.setdefault(name, SeverityCounts())
        else:
            unattributed += 1
            bucket = None

        if tier is None:
            unrecognized += 1
            continue

        totals.increment(tier)
        if bucket is not None:
            bucket.increment(tier)

    return AggregationResult(
        repositories={name: buckets[name] for name in sorted(buckets)},
        totals=totals,
        unattributed=unattributed,
        unrecognized=unrecognized,
        findings_seen=seen,
        partial=partial,
    )
