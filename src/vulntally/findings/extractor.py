"""Resolve the owning ECR repository of a finding.

Resolution never raises: a record with an unexpected shape becomes
``Unattributed`` and is logged, so one bad record cannot stop aggregation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from vulntally.findings.models import Finding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attributed:
    name: str


@dataclass(frozen=True)
class Unattributed:
    reason: str


Resolution = Union[Attributed, Unattributed]


def resolve_repository(finding: Finding) -> Resolution:
    """Return the repository a finding belongs to, or why it has none."""
    if len(finding.resources) != 1:
        return Unattributed(f"unexpected number of resources ({len(finding.resources)})")
    image = finding.resources[0].ecr_image
    if image is None:
        return Unattributed("missing ECR container image details")
    if not image.repository_name:
        return Unattributed("no repository name")
    return Attributed(image.repository_name)


def extract_repository(finding: Finding) -> str:
    """Return the repository name, or ``""`` when it cannot be determined."""
    resolution = resolve_repository(finding)
    if isinstance(resolution, Unattributed):
        logger.info(
            "Finding %s: %s", finding.finding_arn or "<no arn>", resolution.reason
        )
        return ""
    return resolution.name
