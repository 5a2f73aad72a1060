"""YAML frontmatter and clip note formatting."""

import json
from datetime import datetime
from typing import Optional

from .models import Category, LinkMetadata
from .utils import collapse_whitespace

CAPTURED_FORMAT = "%Y-%m-%d %H:%M"


def _frontmatter_value(value: object) -> str:
    """Render a scalar as a double-quoted YAML string."""
    if value is None:
        return '""'
    return json.dumps(str(value), ensure_ascii=False)


def format_frontmatter(
    metadata: LinkMetadata,
    category: Category,
    origin: str,
    captured: Optional[datetime] = None,
) -> str:
    """Generate YAML frontmatter for a clip note."""
    captured = captured or datetime.now()
    lines = [
        "---",
        f"title: {_frontmatter_value(metadata.title or metadata.url)}",
        f"source: {_frontmatter_value(metadata.url)}",
        f"captured: {_frontmatter_value(captured.strftime(CAPTURED_FORMAT))}",
        f"category: {_frontmatter_value(category)}",
        f"origin: {_frontmatter_value(origin)}",
        "---",
    ]
    return "\n".join(lines)


def format_note(
    metadata: LinkMetadata,
    category: Category,
    origin: str,
    captured: Optional[datetime] = None,
) -> str:
    """Format a complete clip note with frontmatter and body."""
    lines = [format_frontmatter(metadata, category, origin, captured), ""]
    lines.append(f"# {collapse_whitespace(metadata.title or metadata.url)}")

    if metadata.description:
        lines.extend(["", f"> {collapse_whitespace(metadata.description)}"])

    if metadata.excerpt:
        lines.extend(["", metadata.excerpt])

    lines.extend(["", f"Original link: {metadata.url}"])
    return "\n".join(lines)
