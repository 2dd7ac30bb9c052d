"""Base collector interface and the report source abstraction."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..errors import CollectorError, ExternalToolError


class ReportSource(ABC):
    """Something that can list arrays and return their raw login reports.

    The collector only depends on this interface, so tests (and other
    front ends) can supply report text without running the array CLI.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the source can be used (tooling present)."""
        pass

    @abstractmethod
    def list_arrays(self) -> List[str]:
        """Return the array identifiers this source can report on.

        Raises:
            ExternalToolError: If the inventory cannot be read.
        """
        pass

    @abstractmethod
    def fetch_report(self, array_id: str) -> str:
        """Return the raw `list logins -v` text for one array.

        Raises:
            ExternalToolError: If the report cannot be produced.
        """
        pass


class BaseCollector(ABC):
    """Abstract base class for data collectors."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this collector.

        Returns:
            A short, lowercase identifier (e.g., 'symaccess_logins')
        """
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name for console output."""
        pass

    @abstractmethod
    def collect(self) -> Dict[str, Any]:
        """Fetch current data from this source.

        Returns:
            Dictionary containing the collected data. Structure varies by collector.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this collector can run (dependencies met)."""
        pass


__all__ = ["BaseCollector", "ReportSource", "CollectorError", "ExternalToolError"]
