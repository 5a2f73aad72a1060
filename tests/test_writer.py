"""Tests for clip note and ledger writing."""

import json
from pathlib import Path

import pytest

from linkclipper.config import Config
from linkclipper.exceptions import NoteWriteError
from linkclipper.models import LedgerEntry
from linkclipper.writer import (
    append_to_ledger,
    clips_url,
    ledger_path_for,
    ledger_status,
    vault_relative,
    write_clip_note,
)

CLIPS = "Attachments/Clippings"


def _note(url: str, marker: str = "") -> str:
    return f"# Note {marker}\n\nOriginal link: {url}"


def _entry(url: str, title: str = "T") -> LedgerEntry:
    return LedgerEntry(
        title=title,
        url=url,
        clipped_note_path="Attachments/Clippings/T.md",
        captured_at="2026-10-18T09:30:00+00:00",
        status="to-read",
    )


class TestWriteClipNote:
    def test_creates_folders_and_note(self, vault):
        path = write_clip_note(vault, CLIPS, "My Title", "https://a.com", _note("https://a.com"))
        assert path == "Attachments/Clippings/My Title.md"
        assert (vault / path).read_text(encoding="utf-8") == _note("https://a.com")

    def test_collision_with_other_url_gets_suffix(self, vault):
        first = write_clip_note(vault, CLIPS, "Same", "https://a.com", _note("https://a.com"))
        second = write_clip_note(vault, CLIPS, "Same", "https://b.com", _note("https://b.com"))
        assert first == "Attachments/Clippings/Same.md"
        assert second == "Attachments/Clippings/Same-1.md"

    def test_reprocessing_updates_in_place(self, vault):
        write_clip_note(vault, CLIPS, "Same", "https://a.com", _note("https://a.com", "v1"))
        write_clip_note(vault, CLIPS, "Same", "https://b.com", _note("https://b.com"))
        again = write_clip_note(
            vault, CLIPS, "Same", "https://a.com", _note("https://a.com", "v2")
        )
        assert again == "Attachments/Clippings/Same.md"
        assert "v2" in (vault / again).read_text(encoding="utf-8")
        assert len(list((vault / CLIPS).iterdir())) == 2

    def test_reprocessing_second_candidate(self, vault):
        write_clip_note(vault, CLIPS, "Same", "https://a.com", _note("https://a.com"))
        write_clip_note(vault, CLIPS, "Same", "https://b.com", _note("https://b.com", "v1"))
        again = write_clip_note(
            vault, CLIPS, "Same", "https://b.com", _note("https://b.com", "v2")
        )
        assert again == "Attachments/Clippings/Same-1.md"
        assert len(list((vault / CLIPS).iterdir())) == 2

    def test_sanitized_name(self, vault):
        path = write_clip_note(vault, CLIPS, "a/b: c?", "https://a.com", _note("https://a.com"))
        assert path == "Attachments/Clippings/a b c.md"

    def test_empty_title_fallback(self, vault):
        path = write_clip_note(vault, CLIPS, "", "", "body")
        assert path.endswith("clipped-link.md")

    def test_url_prefix_does_not_claim_note(self, vault):
        first = write_clip_note(
            vault, CLIPS, "Same", "https://x.com/ab", _note("https://x.com/ab")
        )
        second = write_clip_note(
            vault, CLIPS, "Same", "https://x.com/a", _note("https://x.com/a")
        )
        assert first == "Attachments/Clippings/Same.md"
        assert second == "Attachments/Clippings/Same-1.md"
        assert (vault / first).read_text(encoding="utf-8") == _note("https://x.com/ab")

    def test_wide_character_title_fits_filesystem(self, vault):
        path = write_clip_note(
            vault, CLIPS, "\U0001F389" * 80, "https://a.com", _note("https://a.com")
        )
        assert (vault / path).is_file()
        assert len(Path(path).name.encode("utf-8")) < 255

    def test_name_space_exhausted(self, vault):
        for i in range(3):
            url = f"https://{i}.com"
            write_clip_note(vault, CLIPS, "Same", url, _note(url), max_attempts=3)
        with pytest.raises(NoteWriteError):
            write_clip_note(
                vault, CLIPS, "Same", "https://new.com", _note("https://new.com"),
                max_attempts=3,
            )

    def test_folder_blocked_by_file(self, vault):
        (vault / "Attachments").write_text("not a folder", encoding="utf-8")
        with pytest.raises(OSError):
            write_clip_note(vault, CLIPS, "T", "https://a.com", _note("https://a.com"))


class TestAppendToLedger:
    def test_creates_ledger(self, vault):
        ledger = vault / "Bases" / "ReadingList.base"
        assert append_to_ledger(ledger, _entry("https://a.com")) is True
        raw = ledger.read_text(encoding="utf-8")
        assert raw.endswith("}\n")
        data = json.loads(raw)
        assert data == {
            "entries": [
                {
                    "title": "T",
                    "url": "https://a.com",
                    "clippedNote": "Attachments/Clippings/T.md",
                    "captured": "2026-10-18T09:30:00+00:00",
                    "status": "to-read",
                }
            ]
        }

    def test_same_url_not_appended_twice(self, vault):
        ledger = vault / "ReadingList.base"
        append_to_ledger(ledger, _entry("https://a.com"))
        append_to_ledger(ledger, _entry("https://b.com"))
        assert append_to_ledger(ledger, _entry("https://a.com", title="Other")) is False
        data = json.loads(ledger.read_text(encoding="utf-8"))
        assert [e["url"] for e in data["entries"]] == ["https://a.com", "https://b.com"]

    def test_corrupt_ledger_treated_as_empty(self, vault):
        ledger = vault / "Wishlist.base"
        ledger.write_text("{not json", encoding="utf-8")
        assert append_to_ledger(ledger, _entry("https://a.com")) is True
        data = json.loads(ledger.read_text(encoding="utf-8"))
        assert len(data["entries"]) == 1

    def test_undecodable_ledger_treated_as_empty(self, vault):
        ledger = vault / "ReadingList.base"
        ledger.write_bytes(b"\xff\xfe garbage")
        assert append_to_ledger(ledger, _entry("https://a.com")) is True
        data = json.loads(ledger.read_text(encoding="utf-8"))
        assert [e["url"] for e in data["entries"]] == ["https://a.com"]

    def test_missing_entries_array(self, vault):
        ledger = vault / "Wishlist.base"
        ledger.write_text(json.dumps({"views": ["table"], "entries": "oops"}), encoding="utf-8")
        append_to_ledger(ledger, _entry("https://a.com"))
        data = json.loads(ledger.read_text(encoding="utf-8"))
        assert data["views"] == ["table"]
        assert [e["url"] for e in data["entries"]] == ["https://a.com"]

    def test_non_ascii_kept(self, vault):
        ledger = vault / "Wishlist.base"
        append_to_ledger(ledger, _entry("https://a.com", title="Café crème"))
        assert "Café crème" in ledger.read_text(encoding="utf-8")


def test_ledger_status():
    assert ledger_status("product") == "wishlist"
    assert ledger_status("article") == "to-read"


def test_ledger_path_for(vault):
    config = Config(vault_path=vault)
    assert ledger_path_for("product", config) == vault / "Bases" / "Wishlist.base"
    assert ledger_path_for("article", config) == vault / "Bases" / "ReadingList.base"


def test_vault_relative(vault, tmp_path):
    assert vault_relative(vault / "Daily" / "x.md", vault) == "Daily/x.md"
    outside = tmp_path / "elsewhere.md"
    assert vault_relative(outside, vault) == outside.as_posix()


def test_clips_url_matches_whole_lines():
    note = '---\nsource: "https://x.com/a"\n---\n\n# A'
    assert clips_url(note, "https://x.com/a")
    assert not clips_url(note, "https://x.com/")
    assert clips_url("Original link: https://x.com/a", "https://x.com/a")
    assert not clips_url("Original link: https://x.com/ab", "https://x.com/a")
