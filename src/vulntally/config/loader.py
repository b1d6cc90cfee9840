"""Load and merge configuration from .vulntally.toml and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from vulntally.config.defaults import CONFIG_FILENAME
from vulntally.config.schema import (
    OUTPUT_FORMATS,
    AwsConfig,
    FilterConfig,
    OutputConfig,
    ReportConfig,
    VulntallyConfig,
    valid_page_size,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: VulntallyConfig) -> None:
    """Apply VULNTALLY_* environment variable overrides."""
    if val := os.environ.get("VULNTALLY_PROFILE"):
        cfg.aws.profile = val
    if val := os.environ.get("VULNTALLY_REGION"):
        cfg.aws.region = val
    if val := os.environ.get("VULNTALLY_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("VULNTALLY_IGNORE"):
        cfg.filter.ignore.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("VULNTALLY_PAGE_SIZE"):
        try:
            size = int(val)
        except ValueError:
            size = 0
        if valid_page_size(size):
            cfg.aws.page_size = size
    if os.environ.get("VULNTALLY_ALLOW_PARTIAL") == "1":
        cfg.report.allow_partial = True


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    section_data = data.get(section, {})
    if not isinstance(section_data, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in section_data.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: VulntallyConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format}")
    size = cfg.aws.page_size
    if size is not None and (
        isinstance(size, bool) or not isinstance(size, int) or not valid_page_size(size)
    ):
        raise ConfigError(f"page_size must be between 1 and 100, got {cfg.aws.page_size}")
    if not isinstance(cfg.filter.ignore, list) or not all(
        isinstance(r, str) for r in cfg.filter.ignore
    ):
        raise ConfigError("[filter] ignore must be a list of repository names")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> VulntallyConfig:
    """Load, validate, and return a VulntallyConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = VulntallyConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = VulntallyConfig(
            version=raw.get("version", "1.0"),
            aws=_build_section(raw, AwsConfig, "aws"),
            filter=_build_section(raw, FilterConfig, "filter"),
            output=_build_section(raw, OutputConfig, "output"),
            report=_build_section(raw, ReportConfig, "report"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
