"""Write clip notes and ledger entries to the vault filesystem."""

import json
import logging
from pathlib import Path

from .config import Config
from .exceptions import NoteWriteError
from .models import Category, LedgerEntry
from .utils import sanitize_filename

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 100

LEDGER_STATUS = {
    "product": "wishlist",
    "article": "to-read",
}


def vault_relative(path: Path, vault_path: Path) -> str:
    """Vault-relative POSIX form of path, or its POSIX form if outside the vault."""
    path, vault_path = Path(path), Path(vault_path)
    try:
        return path.relative_to(vault_path).as_posix()
    except ValueError:
        pass
    try:
        return path.resolve().relative_to(vault_path.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def clips_url(note: str, url: str) -> bool:
    """True when note is the clip of exactly url.

    Matches the whole `Original link:` line or the `source:` frontmatter line,
    so `https://x.com/a` does not claim the note for `https://x.com/ab`.
    """
    wanted = {f"Original link: {url}", f"source: {json.dumps(url, ensure_ascii=False)}"}
    return any(line.strip() in wanted for line in note.splitlines())


def ensure_folder(folder: Path) -> None:
    """Create folder and any missing parents."""
    folder.mkdir(parents=True, exist_ok=True)


def write_clip_note(
    vault_path: Path,
    clip_folder: str,
    title: str,
    url: str,
    content: str,
    max_attempts: int = MAX_NAME_ATTEMPTS,
) -> str:
    """Create or update the clip note for url.

    Candidate names are ``<title>.md``, ``<title>-1.md``, ``<title>-2.md`` and
    so on. A free name is taken; an existing clip of url (see ``clips_url``)
    is overwritten in place; any other existing note is skipped.

    Returns the vault-relative path of the written note.
    """
    folder = vault_path / clip_folder
    ensure_folder(folder)

    base_name = sanitize_filename(title or url)
    for attempt in range(max_attempts):
        suffix = f"-{attempt}" if attempt else ""
        candidate = folder / f"{base_name}{suffix}.md"

        if not candidate.exists():
            candidate.write_text(content, encoding="utf-8")
            return vault_relative(candidate, vault_path)

        if candidate.is_file():
            try:
                existing = candidate.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read existing clip %s: %s", candidate, e)
                continue
            if clips_url(existing, url):
                candidate.write_text(content, encoding="utf-8")
                return vault_relative(candidate, vault_path)

    raise NoteWriteError(
        f"Could not find a free clip note name for {url!r} "
        f"after {max_attempts} attempts"
    )


def ledger_status(category: Category) -> str:
    return LEDGER_STATUS[category]


def _read_ledger(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ledger %s is unreadable (%s); starting a fresh entry list", path, e)
        return {"entries": []}
    if not isinstance(data, dict):
        return {"entries": []}
    if not isinstance(data.get("entries"), list):
        data["entries"] = []
    return data


def _write_ledger(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def append_to_ledger(ledger_path: Path, entry: LedgerEntry) -> bool:
    """Append entry to the JSON ledger unless its URL is already recorded.

    Returns True when the entry was written.
    """
    ensure_folder(ledger_path.parent)

    if not ledger_path.exists():
        _write_ledger(ledger_path, {"entries": [entry.to_dict()]})
        return True

    data = _read_ledger(ledger_path)
    if any(
        isinstance(item, dict) and item.get("url") == entry.url
        for item in data["entries"]
    ):
        return False

    data["entries"].append(entry.to_dict())
    _write_ledger(ledger_path, data)
    return True


def ledger_path_for(category: Category, config: Config) -> Path:
    """Ledger document that records links of the given category."""
    relative = config.wishlist_path if category == "product" else config.reading_list_path
    return Path(config.vault_path) / relative
