"""Configuration loading for reviewkit (.reviewkit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".reviewkit.yml"

DEFAULT_PAGE_MARKERS = ("page.tsx", "page.ts", "page.jsx", "page.js")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Where the review kit is written, relative to the repository root."""

    dir: str = "review-kit"
    file: str = "REVIEW_KIT.json"


@dataclass
class RoutesConfig:
    """Page tree location and the filenames that mark a routable page."""

    app_dir: str = "src/app"
    page_markers: List[str] = field(default_factory=lambda: list(DEFAULT_PAGE_MARKERS))


@dataclass
class EnvConfig:
    """Environment files compared by the env audit."""

    file: str = ".env"
    example_file: str = ".env.example"


@dataclass
class ReviewKitConfig:
    """Represents the settings defined in .reviewkit.yml."""

    root: Path
    output: OutputConfig = field(default_factory=OutputConfig)
    routes: RoutesConfig = field(default_factory=RoutesConfig)
    env: EnvConfig = field(default_factory=EnvConfig)
    schema_path: str = "prisma/schema.prisma"
    manifest_path: str = "package.json"

    @property
    def output_path(self) -> Path:
        return self.root / self.output.dir / self.output.file


def load_config(config_path: Path) -> ReviewKitConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ReviewKitConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ReviewKitConfig(root=root)

    output_data = _as_dict(data.get("output"))
    if output_data:
        config.output = OutputConfig(
            dir=_as_str(output_data.get("dir")) or config.output.dir,
            file=_as_str(output_data.get("file")) or config.output.file,
        )

    routes_data = _as_dict(data.get("routes"))
    if routes_data:
        markers = _as_str_list(routes_data.get("page_markers"))
        config.routes = RoutesConfig(
            app_dir=_as_str(routes_data.get("app_dir")) or config.routes.app_dir,
            page_markers=markers or list(DEFAULT_PAGE_MARKERS),
        )

    env_data = _as_dict(data.get("env"))
    if env_data:
        config.env = EnvConfig(
            file=_as_str(env_data.get("file")) or config.env.file,
            example_file=_as_str(env_data.get("example_file")) or config.env.example_file,
        )

    schema_data = _as_dict(data.get("schema"))
    if schema_data:
        config.schema_path = _as_str(schema_data.get("path")) or config.schema_path

    manifest_data = _as_dict(data.get("manifest"))
    if manifest_data:
        config.manifest_path = _as_str(manifest_data.get("path")) or config.manifest_path

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) and str(value) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
