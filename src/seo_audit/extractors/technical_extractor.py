"""Technical detail scanner for structural page facts."""

import json
import re
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup, Doctype

from ..models import (
    HeadingStructure,
    ImageAnalysis,
    LinkAnalysis,
    LinkType,
    ScriptAnalysis,
    StructuredDataItem,
    StylesheetAnalysis,
    TechnicalDetails,
)
from .base import BaseExtractor

logger = structlog.get_logger()

HEADING_PATTERN = re.compile(r"^h[1-6]$")
JSON_LD_TYPE = "application/ld+json"
INVALID_JSON_LD = "Invalid JSON-LD syntax"


class TechnicalExtractor(BaseExtractor):
    """Scans headings, images, links, scripts, stylesheets and JSON-LD blocks.

    Each facet is collected in document order by its own pass over the tree.
    """

    def __init__(self, page_url: str):
        self.page_url = page_url
        self.page_host = urlparse(page_url).hostname

    def extract(self, document: BeautifulSoup) -> TechnicalDetails:
        html_tag = document.find("html")

        return TechnicalDetails(
            doctype=self._doctype(document),
            html_lang=html_tag.get("lang") if html_tag else None,
            headings=tuple(self.scan_headings(document)),
            images=tuple(self.scan_images(document)),
            links=tuple(self.scan_links(document)),
            scripts=tuple(self.scan_scripts(document)),
            stylesheets=tuple(self.scan_stylesheets(document)),
            structured_data=tuple(self.scan_structured_data(document)),
        )

    def _doctype(self, document: BeautifulSoup) -> str | None:
        for item in document.contents:
            if isinstance(item, Doctype):
                parts = str(item).split()
                return parts[0].lower() if parts else None
        return None

    def scan_headings(self, document: BeautifulSoup) -> list[HeadingStructure]:
        headings = []
        for tag in document.find_all(HEADING_PATTERN):
            text = self._text(tag)
            headings.append(HeadingStructure(level=int(tag.name[1]), text=text, is_empty=not text))
        return headings

    def scan_images(self, document: BeautifulSoup) -> list[ImageAnalysis]:
        images = []
        for img in document.find_all("img"):
            alt = img.get("alt")
            images.append(
                ImageAnalysis(
                    src=img.get("src") or "",
                    alt=alt,
                    title=img.get("title"),
                    width=self._parse_int(img.get("width")),
                    height=self._parse_int(img.get("height")),
                    loading=img.get("loading"),
                    has_alt=alt is not None,
                    is_decorative=alt == "" or img.get("role") == "presentation",
                )
            )
        return images

    def scan_links(self, document: BeautifulSoup) -> list[LinkAnalysis]:
        links = []
        for anchor in document.find_all("a", href=True):
            href = anchor["href"]
            rel = anchor.get("rel")
            links.append(
                LinkAnalysis(
                    href=href,
                    text=self._text(anchor),
                    type=self.classify_link(href),
                    rel=rel,
                    target=anchor.get("target"),
                    is_nofollow=rel is not None and "nofollow" in rel,
                )
            )
        return links

    def classify_link(self, href: str) -> LinkType:
        """Classify an href as anchor, external or internal to the page host."""
        if href.startswith("#"):
            return LinkType.ANCHOR

        if href.startswith("http"):
            try:
                host = urlparse(href).hostname
            except ValueError:
                host = None
            if host != self.page_host:
                return LinkType.EXTERNAL

        return LinkType.INTERNAL

    def scan_scripts(self, document: BeautifulSoup) -> list[ScriptAnalysis]:
        return [
            ScriptAnalysis(
                src=script.get("src"),
                type=script.get("type"),
                is_async=script.has_attr("async"),
                defer=script.has_attr("defer"),
                inline=not script.has_attr("src"),
                size=len(script.get_text()),
            )
            for script in document.find_all("script")
        ]

    def scan_stylesheets(self, document: BeautifulSoup) -> list[StylesheetAnalysis]:
        sheets = document.find_all(
            lambda t: t.name == "style" or (t.name == "link" and t.get("rel") == "stylesheet")
        )
        return [
            StylesheetAnalysis(
                href=sheet.get("href"),
                media=sheet.get("media"),
                inline=sheet.name == "style",
                size=len(sheet.get_text()),
            )
            for sheet in sheets
        ]

    def scan_structured_data(self, document: BeautifulSoup) -> list[StructuredDataItem]:
        items = []
        for script in document.find_all("script", attrs={"type": JSON_LD_TYPE}):
            try:
                data = json.loads(script.get_text())
            except (ValueError, RecursionError) as e:
                logger.debug("Invalid JSON-LD block", url=self.page_url, error=str(e))
                items.append(StructuredDataItem(type="Invalid", valid=False, errors=(INVALID_JSON_LD,)))
                continue

            items.append(self._structured_data_item(data))
        return items

    def _structured_data_item(self, data) -> StructuredDataItem:
        if isinstance(data, list):
            types = [str(self._schema_type(entry)) for entry in data if isinstance(entry, dict)]
            return StructuredDataItem(type=", ".join(types) or "Unknown", valid=True)

        if not isinstance(data, dict):
            return StructuredDataItem(type="Unknown", valid=True)

        warnings = () if "@context" in data else ("Missing @context",)
        return StructuredDataItem(type=self._schema_type(data), valid=True, warnings=warnings)

    def _schema_type(self, data: dict) -> str:
        schema_type = data.get("@type") or "Unknown"
        if isinstance(schema_type, list):
            return ", ".join(str(t) for t in schema_type)
        return str(schema_type)
