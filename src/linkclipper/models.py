"""Data models for linkclipper."""

from dataclasses import dataclass, field
from typing import Literal

Category = Literal["product", "article"]

CATEGORIES: tuple[str, ...] = ("product", "article")

# Sentinel status for fetches that never produced a response
FETCH_FAILED_STATUS = 500


@dataclass(frozen=True)
class FetchResult:
    """Raw outcome of a single page fetch."""

    status: int
    html: str = ""

    @classmethod
    def failed(cls) -> "FetchResult":
        return cls(status=FETCH_FAILED_STATUS, html="")


@dataclass(frozen=True)
class LinkMetadata:
    """Metadata derived from one fetched page."""

    url: str
    title: str = ""
    description: str = ""
    excerpt: str = ""
    http_status: int = 0


@dataclass(frozen=True)
class LedgerEntry:
    """A single record in a category ledger."""

    title: str
    url: str
    clipped_note_path: str
    captured_at: str
    status: str  # wishlist, to-read

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "clippedNote": self.clipped_note_path,
            "captured": self.captured_at,
            "status": self.status,
        }


@dataclass
class ScanResult:
    """Outcome of one scan of a source document."""

    document: str
    clipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        return bool(self.failed)
