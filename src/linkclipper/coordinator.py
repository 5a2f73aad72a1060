"""Drive link intake for source documents.

A change event for a watched note arms a debounced scan. When the scan
runs, the note is re-read in full, its links are compared against the
processed-link index, and every new link goes through fetch, metadata
extraction, classification and writing, strictly one at a time. A link is
recorded as processed (and the index saved) only after its own pipeline
succeeded; failures are reported and retried on the next scan.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Optional

from .classifier import LinkClassifier
from .config import Config
from .credentials import ApiKeyResolver
from .debounce import DebouncedTasks, DocumentState
from .fetcher import fetch_page
from .formatter import format_note
from .links import extract_links
from .metadata import extract_metadata
from .models import FetchResult, LedgerEntry, ScanResult
from .state import ProcessedLinkIndex, load_index, save_index
from .writer import (
    append_to_ledger,
    ledger_path_for,
    ledger_status,
    vault_relative,
    write_clip_note,
)

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]
Fetcher = Callable[[str], Awaitable[FetchResult]]


class IntakeCoordinator:
    """Owns the processed-link index and the per-document debounce timers."""

    def __init__(
        self,
        config: Config,
        index: Optional[ProcessedLinkIndex] = None,
        *,
        classifier: Optional[LinkClassifier] = None,
        fetch: Optional[Fetcher] = None,
        notify: Optional[Notifier] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.index = index if index is not None else load_index(config.index_path)
        self._notify = notify or (lambda message: None)
        self.classifier = classifier or LinkClassifier(
            config, ApiKeyResolver(config, self._notify)
        )
        self._fetch = fetch or (lambda url: fetch_page(url, config))
        self._clock = clock
        self._debouncer = DebouncedTasks(config.debounce_seconds)
        self._lock = asyncio.Lock()

    def document_key(self, path: Path) -> str:
        return vault_relative(Path(path), self.config.vault_path)

    def is_watched(self, path: Path) -> bool:
        """Only today's daily note is watched for changes."""
        path = Path(path)
        if path.suffix != ".md":
            return False
        return path.resolve() == self.config.daily_note_path().resolve()

    def state(self, path: Path) -> DocumentState:
        return self._debouncer.state(self.document_key(path))

    def notify_changed(self, path: Path) -> bool:
        """Handle a modification event. Returns False when path is not watched."""
        if not self.is_watched(path):
            return False
        self.request_scan(path)
        return True

    def request_scan(self, path: Path) -> asyncio.Task:
        """Arm (or re-arm) the debounced scan of path."""
        path = Path(path)
        return self._debouncer.schedule(
            self.document_key(path), lambda: self._debounced_scan(path)
        )

    async def _debounced_scan(self, path: Path) -> Optional[ScanResult]:
        try:
            return await self.process_document(path)
        except Exception:
            logger.exception("Scan of %s failed", path)
            return None

    async def process_document(self, path: Path) -> ScanResult:
        """Scan path now and clip every link not yet processed for it."""
        path = Path(path)
        key = self.document_key(path)
        async with self._lock:
            content = path.read_text(encoding="utf-8")
            processed = self.index.processed_for(key)
            new_links = [url for url in extract_links(content) if url not in processed]
            result = ScanResult(document=key)
            if not new_links:
                logger.debug("No new links in %s", key)
                return result

            logger.info("Found %d new link(s) in %s", len(new_links), key)
            for url in new_links:
                try:
                    await self.handle_link(url, key)
                    self.commit(key, url)
                except Exception:
                    logger.exception("Failed to process link %s", url)
                    self._notify(f"Failed to process link: {url}")
                    result.failed.append(url)
                else:
                    result.clipped.append(url)
            return result

    async def handle_link(self, url: str, origin: str) -> str:
        """Run the full pipeline for one URL and return the clip note path."""
        logger.info("Clipping %s", url)
        page = await self._fetch(url)
        metadata = extract_metadata(url, page, self.config.max_page_chars)
        category = await self.classifier.classify(metadata)

        captured = self._clock()
        content = format_note(metadata, category, origin, captured)
        note_path = write_clip_note(
            Path(self.config.vault_path),
            self.config.clip_folder,
            metadata.title,
            url,
            content,
        )

        entry = LedgerEntry(
            title=metadata.title,
            url=url,
            clipped_note_path=note_path,
            captured_at=captured.astimezone().isoformat(timespec="seconds"),
            status=ledger_status(category),
        )
        append_to_ledger(ledger_path_for(category, self.config), entry)

        self._notify(f"Saved clip for {metadata.title or url}")
        return note_path

    def commit(self, document: str, url: str) -> None:
        """Mark url processed for document and persist the index.

        When the save fails the url is taken back out, so later scans retry it.
        """
        self.index.add(document, url)
        try:
            self.save()
        except Exception:
            self.index.discard(document, url)
            raise

    def save(self) -> None:
        save_index(self.index, self.config.index_path)

    async def wait_idle(self) -> None:
        """Wait until no scan is pending or running."""
        await self._debouncer.wait()

    async def close(self) -> None:
        """Cancel pending scans and let a running one finish."""
        self._debouncer.cancel_all()
        await self._debouncer.wait()
