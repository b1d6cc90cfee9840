"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

Severity = Literal["critical", "high", "medium", "low"]

# Report column order, most severe first.
SEVERITY_TIERS: tuple[str, ...] = ("critical", "high", "medium", "low")

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json")

# Inspector2 ListFindings accepts 1..100 results per page.
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


def valid_page_size(value: int) -> bool:
    """Return True if *value* is accepted as ``maxResults``."""
    return MIN_PAGE_SIZE <= value <= MAX_PAGE_SIZE


@dataclass
class AwsConfig:
    profile: str = ""
    region: Optional[str] = None  # None = take it from the profile
    page_size: Optional[int] = None  # None = let the service choose


@dataclass
class FilterConfig:
    ignore: List[str] = field(default_factory=list)  # repositories to exclude


@dataclass
class OutputConfig:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True


@dataclass
class ReportConfig:
    allow_partial: bool = False  # render what was fetched when a page fails


@dataclass
class VulntallyConfig:
    version: str = "1.0"
    aws: AwsConfig = field(default_factory=AwsConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
