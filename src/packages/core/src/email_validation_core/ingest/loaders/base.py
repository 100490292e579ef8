"""Base loader interface."""
from abc import ABC, abstractmethod
from typing import Any


class BaseLoader(ABC):
    """Abstract base class for tabular file loaders."""

    name: str = ""

    @abstractmethod
    def detect(self, head: bytes, suffix: str) -> bool:
        """Detect if this loader can handle the file."""
        pass

    @abstractmethod
    def load(self, file_path: str, options: dict) -> list[dict[str, Any]]:
        """Load all rows from the file as raw field mappings."""
        pass
