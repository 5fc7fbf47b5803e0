"""Git access for the review kit."""

from .client import GitClient, GitCommandError
from .inspector import VcsInspector, resolve_base_ref

__all__ = ["GitClient", "GitCommandError", "VcsInspector", "resolve_base_ref"]
