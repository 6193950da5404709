"""Configuration loading for implgen (.implgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILE_NAME = ".implgen.yml"


@dataclass
class SourcesConfig:
    """Where type metadata is read from."""

    catalogs: List[Path] = field(default_factory=list)
    source_paths: List[Path] = field(default_factory=list)


@dataclass
class CompilerConfig:
    """How generated sources are compiled."""

    executable: Optional[str] = None
    encoding: str = "UTF8"
    extra_args: List[str] = field(default_factory=list)


@dataclass
class ArchiveConfig:
    """Archive mode behaviour."""

    keep_intermediates: bool = True


@dataclass
class ImplGenConfig:
    """Represents the settings defined in .implgen.yml."""

    root: Path
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)


def load_config(config_path: Path) -> ImplGenConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ImplGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    sources_data = _as_dict(data.get("sources"))
    sources = SourcesConfig(
        catalogs=[root / entry for entry in _as_str_list(sources_data.get("catalogs"))],
        source_paths=[root / entry for entry in _as_str_list(sources_data.get("source_paths"))],
    )

    compiler_data = _as_dict(data.get("compiler"))
    compiler = CompilerConfig(
        executable=_as_str(compiler_data.get("executable")),
        encoding=_as_str(compiler_data.get("encoding")) or "UTF8",
        extra_args=_as_str_list(compiler_data.get("extra_args")),
    )

    archive_data = _as_dict(data.get("archive"))
    keep = _as_bool(archive_data.get("keep_intermediates"))
    archive = ArchiveConfig(keep_intermediates=True if keep is None else keep)

    return ImplGenConfig(root=root, sources=sources, compiler=compiler, archive=archive)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
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
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ArchiveConfig",
    "CONFIG_FILE_NAME",
    "CompilerConfig",
    "ImplGenConfig",
    "SourcesConfig",
    "load_config",
]
