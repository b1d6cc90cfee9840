"""Finding data models — parsed Inspector records and severity counters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from vulntally.config.schema import SEVERITY_TIERS, Severity


@dataclass(frozen=True)
class EcrImageDetail:
    """The ``awsEcrContainerImage`` block of a resource's details."""

    repository_name: Optional[str] = None
    registry: Optional[str] = None
    image_tags: Tuple[str, ...] = ()

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "EcrImageDetail":
        return cls(
            repository_name=data.get("repositoryName"),
            registry=data.get("registry"),
            image_tags=tuple(data.get("imageTags") or ()),
        )


@dataclass(frozen=True)
class Resource:
    """A resource affected by a finding."""

    type: Optional[str] = None
    id: Optional[str] = None
    ecr_image: Optional[EcrImageDetail] = None

    @classmethod
    def from_api(cls, data: Any) -> "Resource":
        if not isinstance(data, Mapping):
            return cls()
        details = data.get("details")
        image = details.get("awsEcrContainerImage") if isinstance(details, Mapping) else None
        return cls(
            type=data.get("type"),
            id=data.get("id"),
            ecr_image=EcrImageDetail.from_api(image) if isinstance(image, Mapping) else None,
        )


@dataclass(frozen=True)
class Finding:
    """A single Inspector finding, reduced to the fields we inspect.

    The upstream schema marks almost everything optional, so every field
    here tolerates absence.
    """

    finding_arn: str = ""
    title: str = ""
    severity: str = ""
    resources: Tuple[Resource, ...] = ()

    @classmethod
    def from_api(cls, data: Any) -> "Finding":
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            finding_arn=data.get("findingArn") or "",
            title=data.get("title") or "",
            severity=data.get("severity") or "",
            resources=tuple(Resource.from_api(r) for r in data.get("resources") or ()),
        )

    @property
    def tier(self) -> Optional[Severity]:
        """Recognised severity tier, or None for anything outside the four."""
        key = self.severity.lower()
        return key if key in SEVERITY_TIERS else None  # type: ignore[return-value]


@dataclass
class SeverityCounts:
    """Per-tier counters. Only ever incremented."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    def increment(self, tier: Severity) -> None:
        setattr(self, tier, getattr(self, tier) + 1)

    @property
    def total(self) -> int:
        return self.critical + self.high + self.medium + self.low

    def as_dict(self) -> Dict[str, int]:
        return {
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "total": self.total,
        }


@dataclass
class AggregationResult:
    """Counts per repository plus the grand total across all findings."""

    repositories: Dict[str, SeverityCounts] = field(default_factory=dict)
    totals: SeverityCounts = field(default_factory=SeverityCounts)
    unattributed: int = 0  # findings with no resolvable repository
    unrecognized: int = 0  # findings whose severity is outside the four tiers
    findings_seen: int = 0
    partial: bool = False  # set when built from an interrupted fetch

    @property
    def repository_names(self) -> List[str]:
        return sorted(self.repositories)

    def rows(self) -> Iterator[Tuple[str, SeverityCounts]]:
        for name in self.repository_names:
            yield name, self.repositories[name]

    @property
    def attributed_total(self) -> int:
        """Sum of the per-repository totals; excludes unattributed findings."""
        return sum(c.total for c in self.repositories.values())
