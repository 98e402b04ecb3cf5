"""Base analyzer interface."""

from abc import ABC, abstractmethod
from typing import Any

from bs4 import BeautifulSoup


class BaseAnalyzer(ABC):
    """Abstract base class for heuristic passes over a parsed document."""

    @abstractmethod
    def analyze(self, document: BeautifulSoup) -> Any:
        """
        Analyze the parsed document and return the pass's metrics record.

        Args:
            document: The parsed page.

        Returns:
            Metrics record with its own score and findings.
        """
        pass
