"""Configuration loading and validation."""

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError
from .models import CATEGORIES
from .utils import moment_to_strftime

DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"


@dataclass
class Config:
    """Application configuration."""

    vault_path: Path = field(default_factory=Path.cwd)
    daily_folder: str = "Daily"
    daily_file_date_format: str = "YYYY-MM-DD"
    clip_folder: str = "Attachments/Clippings"
    wishlist_path: str = "Bases/Wishlist.base"
    reading_list_path: str = "Bases/ReadingList.base"
    openrouter_api_key: str = ""
    openrouter_key_path: str = ""
    model: str = DEFAULT_MODEL
    fetch_timeout: float = 20.0
    debounce_ms: int = 1500
    max_page_chars: int = 2000
    classification_fallback: str = "article"
    state_path: Optional[Path] = None
    verbose: bool = False

    @property
    def index_path(self) -> Path:
        """Where the processed-link index is persisted."""
        if self.state_path:
            return Path(self.state_path)
        return self.vault_path / ".linkclipper" / "processed.json"

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    def daily_note_path(self, day: Optional[date] = None) -> Path:
        """Path of the daily note for day (today by default)."""
        day = day or date.today()
        name = day.strftime(moment_to_strftime(self.daily_file_date_format))
        return self.vault_path / self.daily_folder / f"{name}.md"

    def validate(self) -> None:
        """Validate configuration values."""
        if self.classification_fallback not in CATEGORIES:
            raise ConfigError(
                f"Unknown fallback classification: {self.classification_fallback}. "
                "Use 'product' or 'article'."
            )
        if self.fetch_timeout <= 0:
            raise ConfigError("fetch_timeout must be positive.")
        if self.debounce_ms < 0:
            raise ConfigError("debounce_ms cannot be negative.")
        if self.max_page_chars < 0:
            raise ConfigError("max_page_chars cannot be negative.")
        for name in ("daily_folder", "clip_folder", "wishlist_path", "reading_list_path"):
            if not getattr(self, name).strip():
                raise ConfigError(f"{name} cannot be empty.")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from e


def load_config(
    vault_path: Optional[str] = None,
    model: Optional[str] = None,
    fetch_timeout: Optional[float] = None,
    debounce_ms: Optional[int] = None,
    classification_fallback: Optional[str] = None,
    verbose: bool = False,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    state_path = os.getenv("LINKCLIPPER_STATE_PATH", "")
    config = Config(
        vault_path=Path(vault_path) if vault_path else Path(
            os.getenv("OBSIDIAN_VAULT_PATH", str(Path.cwd()))
        ),
        daily_folder=os.getenv("LINKCLIPPER_DAILY_FOLDER", "Daily"),
        daily_file_date_format=os.getenv("LINKCLIPPER_DAILY_DATE_FORMAT", "YYYY-MM-DD"),
        clip_folder=os.getenv("LINKCLIPPER_CLIP_FOLDER", "Attachments/Clippings"),
        wishlist_path=os.getenv("LINKCLIPPER_WISHLIST_PATH", "Bases/Wishlist.base"),
        reading_list_path=os.getenv(
            "LINKCLIPPER_READING_LIST_PATH", "Bases/ReadingList.base"
        ),
        openrouter_api_key=os.getenv("LINKCLIPPER_OPENROUTER_API_KEY", ""),
        openrouter_key_path=os.getenv("LINKCLIPPER_OPENROUTER_KEY_PATH", ""),
        model=model or os.getenv("LINKCLIPPER_MODEL", DEFAULT_MODEL),
        fetch_timeout=(
            fetch_timeout if fetch_timeout is not None
            else _env_float("LINKCLIPPER_FETCH_TIMEOUT", 20.0)
        ),
        debounce_ms=(
            debounce_ms if debounce_ms is not None
            else _env_int("LINKCLIPPER_DEBOUNCE_MS", 1500)
        ),
        max_page_chars=_env_int("LINKCLIPPER_MAX_PAGE_CHARS", 2000),
        classification_fallback=(
            classification_fallback
            or os.getenv("LINKCLIPPER_CLASSIFICATION_FALLBACK", "article")
        ),
        state_path=Path(state_path) if state_path else None,
        verbose=verbose,
    )

    config.validate()
    return config
