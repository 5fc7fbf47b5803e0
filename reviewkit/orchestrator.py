"""Pipeline orchestration: run the extractors and write the review kit."""

from __future__ import annotations

import json
import os
import platform
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .config import ReviewKitConfig, load_config
from .extractors import Extractor, default_extractors
from .git import VcsInspector
from .logging import get_logger
from .models import Report, ReportMeta


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC string with millisecond precision."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Orchestrator:
    """Coordinates the extractors and persists the resulting report."""

    def __init__(
        self,
        extractors: Optional[Iterable[Extractor]] = None,
        *,
        environ: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._environ = environ
        if extractors is not None:
            self.extractors: List[Extractor] = list(extractors)
        else:
            self.extractors = [*default_extractors(), VcsInspector(environ=environ)]
        self._clock = clock or _utc_now
        self.logger = get_logger("orchestrator")

    def run(self, path: str = ".") -> Path:
        """Audit the repository at ``path`` and write the review kit."""
        config = load_config(Path(path))
        self.logger.info("Generating review kit for %s", config.root)
        report = self.build(config)
        output_path = self.write(report, config.output_path)
        self.logger.debug("Wrote %s", _relativize(output_path, config.root))
        return output_path

    def build(self, config: ReviewKitConfig) -> Report:
        """Run every extractor in order and merge the results into one report."""
        sections: Dict[str, Any] = {}
        for extractor in self.extractors:
            sections[extractor.section] = self._execute(extractor, config)
        return Report(meta=self._meta(), **sections)

    def write(self, report: Report, output_path: Path) -> Path:
        """Serialize ``report`` to ``output_path``, replacing any previous report.

        Failures to create the directory or write the file propagate.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
        output_path.write_text(payload + "\n", encoding="utf-8")
        return output_path

    def _execute(self, extractor: Extractor, config: ReviewKitConfig) -> Any:
        name = type(extractor).__name__
        try:
            value = extractor.extract(config)
        except Exception as exc:
            self.logger.warning(
                "%s failed; leaving %s empty: %s", name, extractor.section, exc
            )
            self.logger.debug("%s traceback", name, exc_info=True)
            return extractor.fallback()
        self.logger.debug("%s completed", name)
        return value

    def _meta(self) -> ReportMeta:
        environ = self._environ if self._environ is not None else os.environ
        return ReportMeta(
            generated_at=format_timestamp(self._clock()),
            ci=bool(environ.get("CI")),
            python=platform.python_version(),
        )


def _relativize(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
