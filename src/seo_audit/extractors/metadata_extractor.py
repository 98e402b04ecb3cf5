"""Head-level metadata extractor."""

import re

from bs4 import BeautifulSoup

from ..models import MetaData
from .base import BaseExtractor

# MetaData field -> literal name/property value looked up in <meta> tags
META_KEYS = {
    "description": "description",
    "keywords": "keywords",
    "og_title": "og:title",
    "og_description": "og:description",
    "og_image": "og:image",
    "og_type": "og:type",
    "og_url": "og:url",
    "twitter_card": "twitter:card",
    "twitter_site": "twitter:site",
    "twitter_creator": "twitter:creator",
    "robots": "robots",
    "viewport": "viewport",
    "author": "author",
    "generator": "generator",
}

CHARSET_PATTERN = re.compile(r"charset=([^;]+)", re.IGNORECASE)


class MetadataExtractor(BaseExtractor):
    """Extracts title, meta tags, canonical URL, charset and language."""

    def extract(self, document: BeautifulSoup) -> MetaData:
        title_tag = document.find("title")
        canonical_tag = document.find("link", attrs={"rel": "canonical"})
        html_tag = document.find("html")

        return MetaData(
            title=title_tag.get_text() if title_tag else None,
            canonical=canonical_tag.get("href") if canonical_tag else None,
            charset=self._charset(document),
            language=html_tag.get("lang") if html_tag else None,
            **{field: self._meta_content(document, key) for field, key in META_KEYS.items()},
        )

    def _meta_content(self, document: BeautifulSoup, key: str) -> str | None:
        """Content of the first <meta> whose name or property equals ``key``."""
        tag = document.find(
            lambda t: t.name == "meta" and (t.get("name") == key or t.get("property") == key)
        )
        return tag.get("content") if tag else None

    def _charset(self, document: BeautifulSoup) -> str | None:
        charset_tag = document.find("meta", charset=True)
        if charset_tag and charset_tag["charset"]:
            return charset_tag["charset"]

        content_type = document.find(
            "meta",
            attrs={"http-equiv": lambda v: v is not None and v.lower() == "content-type"},
        )
        if content_type:
            match = CHARSET_PATTERN.search(content_type.get("content") or "")
            if match:
                return match.group(1).strip()

        return charset_tag["charset"] if charset_tag else None
