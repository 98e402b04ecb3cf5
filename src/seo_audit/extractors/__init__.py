"""Extractors module for pulling structured facts out of a parsed page."""

from .base import BaseExtractor
from .metadata_extractor import MetadataExtractor
from .technical_extractor import TechnicalExtractor

__all__ = ["BaseExtractor", "MetadataExtractor", "TechnicalExtractor"]
