"""OpenRouter API key resolution.

Keys are looked up in a fixed order: environment variables, then a key
file named in the configuration, then the literal configured value. An
empty result means no remote classification is attempted at all.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from .config import Config

logger = logging.getLogger(__name__)

ENV_VARS = ("OPENROUTER_API_KEY", "OPENROUTERKEY")


class ApiKeyResolver:
    """Resolves the classification API key, warning once about bad key files."""

    def __init__(self, config: Config, notify: Optional[Callable[[str], None]] = None):
        self._config = config
        self._notify = notify or (lambda message: None)
        self._empty_file_notified = False
        self._unreadable_file_notified = False

    def resolve_key_path(self, raw: str) -> Optional[Path]:
        """Expand ~ and anchor relative paths at the vault root."""
        candidate = raw.strip()
        if not candidate:
            return None
        path = Path(candidate).expanduser()
        if not path.is_absolute():
            path = Path(self._config.vault_path) / path
        return path

    def _read_key_file(self) -> str:
        path = self.resolve_key_path(self._config.openrouter_key_path)
        if path is None:
            return ""
        try:
            key = path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not read OpenRouter key file %s: %s", path, e)
            if not self._unreadable_file_notified:
                self._notify(
                    "Could not read the OpenRouter key file. Check the log for details."
                )
                self._unreadable_file_notified = True
            return ""
        if not key and not self._empty_file_notified:
            self._notify("OpenRouter key file is empty.")
            self._empty_file_notified = True
        return key

    def resolve(self) -> str:
        """Return the first non-empty key, or an empty string."""
        for variable in ENV_VARS:
            value = os.environ.get(variable, "").strip()
            if value:
                return value

        key = self._read_key_file()
        if key:
            return key

        return self._config.openrouter_api_key.strip()
