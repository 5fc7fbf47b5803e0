"""Route discovery for file-system routed page trees."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .base import Extractor
from ..config import ReviewKitConfig
from ..files import relative_posix
from ..logging import get_logger
from ..models import RouteEntry

_PAGE_SEGMENT = "page"

logger = get_logger("extractors.routes")


def derive_route(segments: Sequence[str]) -> str:
    """Turn the directory segments below the app root into a URL path.

    ``("blog", "[slug]")`` becomes ``/blog/[slug]`` and no segments become
    ``/``. Dynamic segment folders are kept verbatim; folders literally named
    ``page`` never appear in a route.
    """
    parts = [segment for segment in segments if segment and segment != _PAGE_SEGMENT]
    return "/" + "/".join(parts)


class RouteScanner(Extractor):
    """Walks the app directory and records every page-marker file as a route."""

    section = "routes"

    def __init__(self, page_markers: Iterable[str] | None = None) -> None:
        self._page_markers = frozenset(page_markers) if page_markers is not None else None

    def extract(self, config: ReviewKitConfig) -> Tuple[RouteEntry, ...]:
        markers = self._page_markers or frozenset(config.routes.page_markers)
        app_dir = config.root / config.routes.app_dir
        routes = self.scan(app_dir, config.root, markers)
        logger.debug("Discovered %d routes under %s", len(routes), config.routes.app_dir)
        return tuple(routes)

    def fallback(self) -> Tuple[RouteEntry, ...]:
        return ()

    def scan(self, app_dir: Path, repo_root: Path, markers: Iterable[str]) -> List[RouteEntry]:
        """Return sorted route entries for ``app_dir``; a missing directory yields ``[]``."""
        if not app_dir.is_dir():
            return []

        marker_set = set(markers)
        results: List[RouteEntry] = []
        # Unreadable directories are skipped silently by os.walk.
        for dirpath, dirnames, filenames in os.walk(app_dir, followlinks=True):
            dirnames.sort()
            current_dir = Path(dirpath)
            for filename in sorted(filenames):
                if filename not in marker_set:
                    continue
                segments = current_dir.relative_to(app_dir).parts
                results.append(
                    RouteEntry(
                        route=derive_route(segments),
                        file=relative_posix(current_dir / filename, repo_root),
                    )
                )

        return sorted(results, key=lambda entry: (entry.route, entry.file))
