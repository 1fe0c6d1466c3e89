"""Load and merge configuration from .raceguard.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from raceguard.config.schema import (
    OUTPUT_FORMATS,
    SEVERITIES,
    GitHubConfig,
    IgnoreConfig,
    OutputConfig,
    RaceGuardConfig,
    RulesConfig,
    ScanConfig,
)

CONFIG_FILENAME = ".raceguard.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: RaceGuardConfig) -> None:
    """Apply RACEGUARD_* environment variable overrides."""
    if val := os.environ.get("RACEGUARD_FAIL_ON"):
        if val in SEVERITIES:
            cfg.scan.fail_on = val  # type: ignore[assignment]
    if val := os.environ.get("RACEGUARD_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("RACEGUARD_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("RACEGUARD_IGNORE_PATHS"):
        cfg.ignore.paths.extend(p.strip() for p in val.split(os.pathsep) if p.strip())
    if val := os.environ.get("RACEGUARD_WORKERS"):
        try:
            workers = int(val)
        except ValueError:
            workers = 0
        if workers > 0:
            cfg.scan.workers = workers


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table, got {type(raw).__name__}")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: RaceGuardConfig) -> None:
    if cfg.scan.fail_on not in SEVERITIES:
        raise ConfigError(f"Invalid scan.fail_on: {cfg.scan.fail_on!r}")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output.format: {cfg.output.format!r}")
    if not isinstance(cfg.scan.workers, int) or cfg.scan.workers < 1:
        raise ConfigError(f"scan.workers must be a positive integer, got {cfg.scan.workers!r}")


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> RaceGuardConfig:
    """Load, validate, and return a RaceGuardConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = RaceGuardConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = RaceGuardConfig(
            version=raw.get("version", "1.0"),
            scan=_build_section(raw, ScanConfig, "scan"),
            output=_build_section(raw, OutputConfig, "output"),
            rules=_build_section(raw, RulesConfig, "rules"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            github=_build_section(raw, GitHubConfig, "github"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
