"""Parser settings loaded from YAML."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bodyparser.parser.formatters import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH
from bodyparser.parser.rules import FieldExclude, FieldFilter


DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "settings.yaml"
ENV_SETTINGS_PATH = "BODYPARSER_SETTINGS"


@dataclass
class SummarySettings:
    """Length bounds for generated summaries."""

    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH


@dataclass
class AppSettings:
    """Top-level application settings loaded from YAML."""

    debug: bool = False
    summary: SummarySettings = field(default_factory=SummarySettings)
    excludes: List[FieldExclude] = field(default_factory=list)
    filters: List[FieldFilter] = field(default_factory=list)


class SettingsError(RuntimeError):
    """Raised when there is an issue loading settings."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise SettingsError(f"Settings file not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise SettingsError(f"Settings file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError("Settings file must define a mapping at the root level")
    return data


def _parse_summary(entry: Dict[str, Any]) -> SummarySettings:
    if not isinstance(entry, dict):
        raise SettingsError("'summary' must be a mapping of configuration values")

    try:
        min_length = int(entry.get("min_length", DEFAULT_MIN_LENGTH))
        max_length = int(entry.get("max_length", DEFAULT_MAX_LENGTH))
    except (TypeError, ValueError) as exc:
        raise SettingsError("Summary lengths must be integers") from exc
    return validate_summary(SummarySettings(min_length=min_length, max_length=max_length))


def validate_summary(summary: SummarySettings) -> SummarySettings:
    if summary.min_length < 0 or summary.max_length < 0:
        raise SettingsError("Summary lengths must not be negative")
    if summary.min_length > summary.max_length:
        raise SettingsError(
            f"Summary min_length ({summary.min_length}) exceeds max_length ({summary.max_length})"
        )
    return summary


def _parse_excludes(entries: Any) -> List[FieldExclude]:
    if not isinstance(entries, list):
        raise SettingsError("'excludes' must be a list of expressions such as 'div.share'")
    try:
        return [FieldExclude.parse(str(entry)) for entry in entries]
    except ValueError as exc:
        raise SettingsError(str(exc)) from exc


def _parse_filter(entry: Any) -> FieldFilter:
    if isinstance(entry, str):
        entry = {"expr": entry}
    if not isinstance(entry, dict) or not entry.get("expr"):
        raise SettingsError("Each filter entry must define at least 'expr'")
    try:
        return FieldFilter.from_mapping(entry)
    except (ValueError, re.error) as exc:
        raise SettingsError(f"Invalid filter {entry!r}: {exc}") from exc


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """Load parser settings from YAML into ``AppSettings``.

    ``path`` defaults to the value of the ``BODYPARSER_SETTINGS`` environment variable
    and falls back to ``config/settings.yaml`` relative to the project root.
    """

    if path is None:
        env_path = os.environ.get(ENV_SETTINGS_PATH)
        if env_path:
            path = Path(env_path)
        else:
            path = DEFAULT_SETTINGS_PATH

    data = _load_yaml(Path(path))

    summary_raw = data.get("summary", {})
    summary = _parse_summary(summary_raw) if summary_raw else SummarySettings()

    excludes = _parse_excludes(data.get("excludes") or [])

    filters_raw = data.get("filters") or []
    if not isinstance(filters_raw, list):
        raise SettingsError("'filters' must be a list of filter definitions")
    filters = [_parse_filter(item) for item in filters_raw]

    return AppSettings(
        debug=bool(data.get("debug", False)),
        summary=summary,
        excludes=excludes,
        filters=filters,
    )


__all__ = [
    "AppSettings",
    "DEFAULT_SETTINGS_PATH",
    "ENV_SETTINGS_PATH",
    "SettingsError",
    "SummarySettings",
    "load_settings",
    "validate_summary",
]
