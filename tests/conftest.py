"""Shared test fixtures for the ansisgr test suite."""

from __future__ import annotations

import pytest

from ansisgr.core.models import Color, Format


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and ANSISGR_* variables out of every test."""
    import os

    for name in list(os.environ):
        if name.startswith("ANSISGR_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr("ansisgr.core.config.GLOBAL_CONFIG", tmp_path / "global" / "config.toml")
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def red():
    """Format with only a red foreground."""
    return Format(foreground=Color.RED)


@pytest.fixture
def styled():
    """Format with every attribute switched on."""
    return Format(
        foreground=Color.BRIGHT_CYAN,
        background=Color.BLUE,
        bold=True,
        italic=True,
        underline=True,
        strike=True,
        blink=True,
        reverse=True,
    )
