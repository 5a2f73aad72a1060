"""Derive title, description and excerpt from fetched HTML."""

import logging

from bs4 import BeautifulSoup

from .models import FetchResult, LinkMetadata
from .utils import collapse_whitespace, truncate

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 120
MAX_DESCRIPTION_LENGTH = 500

_DESCRIPTION_SELECTOR = 'meta[name="description"], meta[property="og:description"]'
_NON_TEXT_TAGS = ["script", "style", "noscript", "template", "head"]


def extract_metadata(url: str, page: FetchResult, max_chars: int = 2000) -> LinkMetadata:
    """Build LinkMetadata for url from a fetch result.

    Parse problems are logged and leave the affected fields empty. The URL
    stands in for the title when the page has none.
    """
    title = ""
    description = ""
    excerpt = ""

    if page.html:
        try:
            soup = BeautifulSoup(page.html, "html.parser")

            if soup.title and soup.title.get_text(strip=True):
                title = truncate(soup.title.get_text().strip(), MAX_TITLE_LENGTH)

            meta = soup.select_one(_DESCRIPTION_SELECTOR)
            content = meta.get("content") if meta else None
            if isinstance(content, str) and content.strip():
                description = truncate(content.strip(), MAX_DESCRIPTION_LENGTH)

            for tag in soup(_NON_TEXT_TAGS):
                tag.decompose()
            root = soup.body or soup
            text = collapse_whitespace(root.get_text(" "))
            if text:
                excerpt = truncate(text, max_chars)
        except Exception:
            logger.exception("Could not parse HTML for %s", url)

    if not title:
        title = truncate(url, MAX_TITLE_LENGTH)

    return LinkMetadata(
        url=url,
        title=title,
        description=description,
        excerpt=excerpt,
        http_status=page.status,
    )
