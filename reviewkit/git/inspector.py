"""Version-control inspection for the review kit."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Tuple

from ..config import ReviewKitConfig
from ..extractors.base import Extractor
from ..logging import get_logger
from ..models import VcsInfo
from .client import GitClient, GitCommandError

LOCAL_BASE_REF = "HEAD~1"

logger = get_logger("git.inspector")


def resolve_base_ref(environ: Mapping[str, str]) -> str:
    """Choose the revision changed files are computed against.

    Pull-request builds expose the target branch through ``GITHUB_BASE_REF``
    alongside ``GITHUB_SHA``; those diff against the remote branch. Every
    other context compares with the previous commit.
    """
    base_branch = environ.get("GITHUB_BASE_REF")
    commit = environ.get("GITHUB_SHA")
    if base_branch and commit:
        return f"origin/{base_branch}"
    return LOCAL_BASE_REF


class VcsInspector(Extractor):
    """Collects the current revision and changed files without ever raising."""

    section = "vcs"

    def __init__(
        self,
        client_factory: Callable[[Path], GitClient] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._client_factory = client_factory or GitClient
        self._environ = environ

    def extract(self, config: ReviewKitConfig) -> VcsInfo:
        client = self._client_factory(config.root)
        environ = self._environ if self._environ is not None else os.environ
        return VcsInfo(
            ref=self._revision(client),
            changed_files=self._changed_files(client, resolve_base_ref(environ)),
        )

    def fallback(self) -> VcsInfo:
        return VcsInfo()

    def _revision(self, client: GitClient) -> Optional[str]:
        try:
            ref = client.short_revision()
        except GitCommandError as exc:
            logger.debug("No revision available: %s", exc)
            return None
        return ref or None

    def _changed_files(self, client: GitClient, base: str) -> Tuple[str, ...]:
        try:
            files: List[str] = client.changed_files(base)
        except GitCommandError as exc:
            logger.debug("No changed files against %s: %s", base, exc)
            return ()
        logger.debug("%d files changed against %s", len(files), base)
        return tuple(files)
