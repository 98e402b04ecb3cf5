"""Base extractor interface."""

import re
from abc import ABC, abstractmethod
from typing import Any

from bs4 import BeautifulSoup, Tag


class BaseExtractor(ABC):
    """Abstract base class for all extractors."""

    @abstractmethod
    def extract(self, document: BeautifulSoup) -> Any:
        """
        Extract structured facts from a parsed document.

        Args:
            document: The parsed page.

        Returns:
            The extracted record.
        """
        pass

    def _text(self, tag: Tag) -> str:
        """Return the stripped text content of an element."""
        return tag.get_text().strip()

    def _parse_int(self, value: str | None) -> int | None:
        """Parse a leading integer the way browsers read ``width="100px"``."""
        if value is None:
            return None
        match = re.match(r"\s*([+-]?\d+)", value)
        return int(match.group(1)) if match else None
