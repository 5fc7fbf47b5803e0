from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.fake_git import FakeGitClient
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def no_git() -> FakeGitClient:
    """Git client factory that behaves as if no repository is present."""
    return FakeGitClient(ref=None, changed=None)


@pytest.fixture(autouse=True)
def _reset_reviewkit_logger():
    """Undo configure_logging so caplog sees records in every test."""
    yield
    logger = logging.getLogger("reviewkit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
