"""Fail-soft file access shared by the extractors."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def safe_read(path: Path) -> Optional[str]:
    """Return the UTF-8 text of ``path`` or ``None`` when it cannot be read.

    A missing file, a directory, undecodable bytes and permission errors all
    collapse to ``None``; callers treat that the same as an absent file.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


__all__ = ["relative_posix", "safe_read"]
