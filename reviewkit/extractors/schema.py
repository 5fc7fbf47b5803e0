"""Snapshot of the data-schema definition file."""

from __future__ import annotations

from .base import Extractor
from ..config import ReviewKitConfig
from ..files import relative_posix, safe_read
from ..models import SchemaSnapshot


class SchemaSnapshotter(Extractor):
    """Captures the schema file text at its conventional path, if present."""

    section = "schema"

    def extract(self, config: ReviewKitConfig) -> SchemaSnapshot:
        schema_file = config.root / config.schema_path
        if not schema_file.is_file():
            return SchemaSnapshot()
        text = safe_read(schema_file)
        if text is None:
            return SchemaSnapshot()
        return SchemaSnapshot(schema_path=relative_posix(schema_file, config.root), schema=text)
