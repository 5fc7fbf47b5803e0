"""Base class for report extractors."""

from abc import ABC, abstractmethod
from typing import Any

from ..config import ReviewKitConfig


class Extractor(ABC):
    """Contract for a single, independent report section producer."""

    #: Report field populated by this extractor.
    section: str = ""

    @abstractmethod
    def extract(self, config: ReviewKitConfig) -> Any:
        """Inspect the repository described by ``config`` and return the section value."""

    def fallback(self) -> Any:
        """Return the section value used when ``extract`` fails unexpectedly."""
        return None
