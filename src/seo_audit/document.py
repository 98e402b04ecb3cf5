"""HTML document loading."""

from bs4 import BeautifulSoup


def load_document(html: str) -> BeautifulSoup:
    """Parse raw HTML into a traversable tree.

    Multi-valued attribute splitting is disabled so values such as
    ``rel="canonical"`` stay plain strings and compare literally.
    """
    return BeautifulSoup(html or "", "html.parser", multi_valued_attributes=None)
