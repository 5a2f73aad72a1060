"""Clip links from daily notes into an Obsidian vault."""

__version__ = "0.1.0"
