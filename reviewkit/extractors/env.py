"""Environment file audit comparing the real and example key sets."""

from __future__ import annotations

from typing import Optional, Set

from .base import Extractor
from ..config import ReviewKitConfig
from ..files import safe_read
from ..logging import get_logger
from ..models import EnvKeySets

_COMMENT_PREFIX = "#"
_SEPARATOR = "="

logger = get_logger("extractors.env")


def parse_env_keys(content: Optional[str]) -> Set[str]:
    """Return the keys declared in ``KEY=VALUE`` text; ``None`` is an empty file."""
    keys: Set[str] = set()
    for line in (content or "").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIX):
            continue
        if _SEPARATOR not in stripped:
            continue
        keys.add(stripped.split(_SEPARATOR, 1)[0].strip())
    return keys


def audit_env(real: Optional[str], example: Optional[str]) -> EnvKeySets:
    """Compare the real env file text against the example/template text."""
    real_keys = parse_env_keys(real)
    example_keys = parse_env_keys(example)
    return EnvKeySets(
        example_only=tuple(sorted(example_keys - real_keys)),
        missing_in_example=tuple(sorted(real_keys - example_keys)),
        present_in_both=tuple(sorted(example_keys & real_keys)),
    )


class EnvAuditor(Extractor):
    """Reads both env files from the repository root and audits their keys."""

    section = "env_audit"

    def extract(self, config: ReviewKitConfig) -> EnvKeySets:
        real = safe_read(config.root / config.env.file)
        example = safe_read(config.root / config.env.example_file)
        if real is None:
            logger.debug("%s not found; treating as empty", config.env.file)
        if example is None:
            logger.debug("%s not found; treating as empty", config.env.example_file)
        return audit_env(real, example)

    def fallback(self) -> EnvKeySets:
        return EnvKeySets()
