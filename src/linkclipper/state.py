"""Persistent record of links already clipped per source document."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ProcessedLinkIndex:
    """Maps a document key to the URLs fully processed for it.

    ``reset`` forgets documents. ``discard`` only backs out an ``add``
    whose save failed.
    """

    links: dict[str, list[str]] = field(default_factory=dict)

    def processed_for(self, document: str) -> set[str]:
        return set(self.links.get(document, []))

    def is_processed(self, document: str, url: str) -> bool:
        return url in self.links.get(document, [])

    def add(self, document: str, url: str) -> None:
        urls = self.links.setdefault(document, [])
        if url not in urls:
            urls.append(url)

    def discard(self, document: str, url: str) -> None:
        urls = self.links.get(document)
        if not urls or url not in urls:
            return
        urls.remove(url)
        if not urls:
            del self.links[document]

    def reset(self, document: Optional[str] = None) -> None:
        if document is None:
            self.links.clear()
        else:
            self.links.pop(document, None)

    def to_dict(self) -> dict:
        return {"processedLinks": self.links}


def load_index(path: Path) -> ProcessedLinkIndex:
    """Load the index from path. Missing or corrupt files give an empty index."""
    if not path.exists():
        return ProcessedLinkIndex()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load processed-link index %s: %s", path, e)
        return ProcessedLinkIndex()

    raw = data.get("processedLinks") if isinstance(data, dict) else None
    if not isinstance(raw, dict):
        return ProcessedLinkIndex()
    links = {
        str(document): [u for u in urls if isinstance(u, str)]
        for document, urls in raw.items()
        if isinstance(urls, list)
    }
    return ProcessedLinkIndex(links=links)


def save_index(index: ProcessedLinkIndex, path: Path) -> None:
    """Write the index to path, creating parent folders as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(index.to_dict(), indent=2, ensure_ascii=False)
    path.write_text(payload + "\n", encoding="utf-8")
