"""Find web links in note text."""

import re

MARKDOWN_LINK = re.compile(r"\[[^\]]*\]\((https?://[^\s)]+)\)")
BARE_URL = re.compile(r"(https?://[^\s<>()\"']+)")


def extract_links(content: str) -> list[str]:
    """Return distinct http(s) URLs in content, in order of first discovery.

    Markdown ``[label](url)`` links are collected before bare URLs. URLs are
    compared as exact strings; nothing is normalized.
    """
    found: dict[str, None] = {}
    for pattern in (MARKDOWN_LINK, BARE_URL):
        for match in pattern.finditer(content):
            found.setdefault(match.group(1), None)
    return list(found)
