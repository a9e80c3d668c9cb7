"""Configuration loading for doccarchive (.doccarchive.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .indexer import DEFAULT_MANIFEST_SUFFIX

CONFIG_FILENAME = ".doccarchive.yml"
DEFAULT_PLACEHOLDER_NAME = "NoFrameworkName"
DEFAULT_MERGE_OUTPUT_NAME = "Combined.doccarchive"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ChangeLogConfig:
    """Change log naming and placement settings."""

    placeholder_name: str = DEFAULT_PLACEHOLDER_NAME
    output_dir: Optional[Path] = None
    initial_version: Optional[str] = None
    newer_version: Optional[str] = None


@dataclass
class IndexerConfig:
    """Archive traversal settings."""

    manifest_suffix: str = DEFAULT_MANIFEST_SUFFIX


@dataclass
class MergeConfig:
    """Defaults for combining archives."""

    default_output_name: str = DEFAULT_MERGE_OUTPUT_NAME


@dataclass
class DocCArchiveConfig:
    """Represents the settings defined in .doccarchive.yml."""

    root: Path
    changelog: ChangeLogConfig = field(default_factory=ChangeLogConfig)
    indexer: IndexerConfig = field(default_factory=IndexerConfig)
    merge: MergeConfig = field(default_factory=MergeConfig)


def load_config(config_path: Path) -> DocCArchiveConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocCArchiveConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    changelog = ChangeLogConfig()
    changelog_data = _as_dict(data.get("changelog"))
    if changelog_data:
        changelog.placeholder_name = (
            _as_str(changelog_data.get("placeholder_name")) or DEFAULT_PLACEHOLDER_NAME
        )
        output_dir = _as_str(changelog_data.get("output_dir"))
        changelog.output_dir = root / output_dir if output_dir else None
        changelog.initial_version = _as_str(changelog_data.get("initial_version"))
        changelog.newer_version = _as_str(changelog_data.get("newer_version"))

    indexer = IndexerConfig()
    indexer_data = _as_dict(data.get("indexer"))
    if indexer_data:
        suffix = _as_str(indexer_data.get("manifest_suffix"))
        if suffix:
            indexer.manifest_suffix = suffix if suffix.startswith(".") else f".{suffix}"

    merge = MergeConfig()
    merge_data = _as_dict(data.get("merge"))
    if merge_data:
        merge.default_output_name = (
            _as_str(merge_data.get("default_output_name")) or DEFAULT_MERGE_OUTPUT_NAME
        )

    return DocCArchiveConfig(root=root, changelog=changelog, indexer=indexer, merge=merge)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


__all__ = [
    "ChangeLogConfig",
    "ConfigError",
    "DocCArchiveConfig",
    "IndexerConfig",
    "MergeConfig",
    "load_config",
]
