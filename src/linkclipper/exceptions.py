"""Custom exceptions for linkclipper."""


class LinkClipperError(Exception):
    """Base exception for linkclipper."""


class ConfigError(LinkClipperError):
    """Raised when configuration is missing or invalid."""


class LLMError(LinkClipperError):
    """Raised when the remote classification call fails."""


class NoteWriteError(LinkClipperError):
    """Raised when a clip note cannot be given a unique name."""
