"""Shared fixtures for linkclipper tests."""

from __future__ import annotations

import os
from datetime import datetime

import pytest

from linkclipper.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials and settings out of every test."""
    for name in list(os.environ):
        if name.startswith("LINKCLIPPER_") or name in (
            "OPENROUTER_API_KEY",
            "OPENROUTERKEY",
            "OBSIDIAN_VAULT_PATH",
        ):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def vault(tmp_path):
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def config(vault):
    return Config(vault_path=vault, debounce_ms=10)


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2026, 10, 18, 9, 30)
