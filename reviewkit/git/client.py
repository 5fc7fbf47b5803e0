"""Thin wrapper around the git commands the review kit needs."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List


class GitCommandError(RuntimeError):
    """Raised when a git command fails or git is not installed."""


class GitClient:
    """Answers revision and diff queries for a single working tree."""

    def __init__(self, repo_path: Path, runner: Callable[..., str] | None = None) -> None:
        self.repo_path = Path(repo_path)
        self._runner = runner or self._default_runner

    def short_revision(self) -> str:
        """Return the abbreviated hash of ``HEAD``."""
        return self._run(["git", "rev-parse", "--short", "HEAD"]).strip()

    def changed_files(self, base: str) -> List[str]:
        """Return paths that differ between ``base`` and the working tree."""
        output = self._run(["git", "diff", "--name-only", base])
        return [line.strip() for line in output.splitlines() if line.strip()]

    def _run(self, args: Iterable[str]) -> str:
        return self._runner(list(args), cwd=self.repo_path)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        command = list(args)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                check=True,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise GitCommandError(f"could not run {command[0]}: {exc}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise GitCommandError(f"{' '.join(command)} failed: {detail}") from exc
        except OSError as exc:
            raise GitCommandError(f"{' '.join(command)} failed: {exc}") from exc
        return completed.stdout


__all__ = ["GitClient", "GitCommandError"]
