"""Query filter for Inspector ListFindings — tag equality plus repository exclusions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Tuple


class ValidationError(ValueError):
    """Raised when user-supplied run parameters are missing or invalid."""


@dataclass(frozen=True)
class Filter:
    """Immutable filter, built once per run and resubmitted with every page.

    ``exclusion_terms`` keeps every comma-separated segment exactly as given,
    empty ones included. Empty terms are dropped when the criteria document
    is rendered, since the service rejects empty filter values.
    """

    tag: str
    exclusion_terms: Tuple[str, ...] = ()

    @property
    def excluded_repositories(self) -> FrozenSet[str]:
        return frozenset(t for t in self.exclusion_terms if t)

    def to_criteria(self) -> Dict[str, Any]:
        """Render the ``filterCriteria`` request document."""
        criteria: Dict[str, Any] = {
            "ecrImageTags": [{"comparison": "EQUALS", "value": self.tag}],
        }
        exclusions: List[Dict[str, str]] = [
            {"comparison": "NOT_EQUALS", "value": term}
            for term in self.exclusion_terms
            if term
        ]
        if exclusions:
            criteria["ecrImageRepositoryName"] = exclusions
        return criteria


def build_filter(tag: str, ignore_list: str = "") -> Filter:
    """Build a Filter for images tagged *tag*, excluding repositories in *ignore_list*.

    *ignore_list* is split on commas with no trimming, so ``"x,,y"`` yields
    the terms ``("x", "", "y")``.
    """
    if not tag:
        raise ValidationError("an image tag is required")
    terms: Tuple[str, ...] = tuple(ignore_list.split(",")) if ignore_list else ()
    return Filter(tag=tag, exclusion_terms=terms)
