"""Utility functions for linkclipper."""

import re
from typing import Optional
from urllib.parse import urlparse

ELLIPSIS = "…"

# Leaves room for a "-NN.md" suffix under the usual 255-byte name limit
MAX_NAME_BYTES = 200

# Longest tokens first so that "MMMM" wins over "MM"
_MOMENT_TOKENS = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "DD": "%d",
    "dddd": "%A",
    "ddd": "%a",
    "HH": "%H",
    "mm": "%M",
    "ss": "%S",
}
_MOMENT_PATTERN = re.compile(
    r"\[([^\]]*)\]|" + "|".join(sorted(_MOMENT_TOKENS, key=len, reverse=True))
)


def truncate(value: str, limit: int) -> str:
    """Cut value to at most limit characters, marking the cut with an ellipsis."""
    if not value or not limit or len(value) <= limit:
        return value or ""
    return value[: limit - 1] + ELLIPSIS


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space."""
    return re.sub(r"\s+", " ", text).strip()


def sanitize_filename(name: str, max_length: int = 80) -> str:
    """Turn a title into a filesystem-safe note name.

    The result is at most max_length characters and MAX_NAME_BYTES bytes of UTF-8.
    """
    name = re.sub(r'[\\/:*?"<>|#]', " ", name)
    name = collapse_whitespace(name)
    name = name[:max_length]
    while len(name.encode("utf-8")) > MAX_NAME_BYTES:
        name = name[:-1]
    name = name.strip()
    return name or "clipped-link"


def extract_host(url: str) -> Optional[str]:
    """Return the lower-cased host of url, without a leading www."""
    try:
        host = urlparse(url).netloc.lower()
    except ValueError:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host or None


def moment_to_strftime(pattern: str) -> str:
    """Convert a moment.js style date pattern into a strftime pattern.

    Supports the common year/month/day/weekday/time tokens and
    ``[literal]`` escapes.
    """
    parts = []
    pos = 0
    for match in _MOMENT_PATTERN.finditer(pattern):
        parts.append(pattern[pos : match.start()].replace("%", "%%"))
        token = match.group(0)
        if match.group(1) is not None:
            parts.append(match.group(1).replace("%", "%%"))
        else:
            parts.append(_MOMENT_TOKENS[token])
        pos = match.end()
    parts.append(pattern[pos:].replace("%", "%%"))
    return "".join(parts)
