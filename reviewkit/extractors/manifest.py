"""Project manifest (package.json) reader."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .base import Extractor
from ..config import ReviewKitConfig
from ..files import safe_read
from ..logging import get_logger
from ..models import PackageSummary

logger = get_logger("extractors.manifest")


def parse_manifest(content: Optional[str]) -> Optional[PackageSummary]:
    """Return the manifest summary, or ``None`` when missing or malformed."""
    if content is None:
        return None
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.debug("Ignoring malformed manifest: %s", exc)
        return None
    if not isinstance(data, dict):
        return None

    return PackageSummary(
        name=_as_str(data.get("name")),
        version=_as_str(data.get("version")),
        scripts=_as_mapping(data.get("scripts")),
        dependencies=_as_mapping(data.get("dependencies")),
        dev_dependencies=_as_mapping(data.get("devDependencies")),
    )


class ManifestReader(Extractor):
    """Summarises the name, version, scripts and dependencies of the project."""

    section = "package"

    def extract(self, config: ReviewKitConfig) -> Optional[PackageSummary]:
        return parse_manifest(safe_read(config.root / config.manifest_path))


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_mapping(value: Any) -> Optional[Dict[str, Any]]:
    return dict(value) if isinstance(value, dict) else None
