"""Report extractors and the default pipeline ordering."""

from __future__ import annotations

from typing import List

from .base import Extractor
from .env import EnvAuditor, audit_env, parse_env_keys
from .manifest import ManifestReader, parse_manifest
from .routes import RouteScanner, derive_route
from .schema import SchemaSnapshotter


def default_extractors() -> List[Extractor]:
    """Return the filesystem extractors in pipeline order."""
    return [ManifestReader(), RouteScanner(), EnvAuditor(), SchemaSnapshotter()]


__all__ = [
    "EnvAuditor",
    "Extractor",
    "ManifestReader",
    "RouteScanner",
    "SchemaSnapshotter",
    "audit_env",
    "default_extractors",
    "derive_route",
    "parse_env_keys",
    "parse_manifest",
]
