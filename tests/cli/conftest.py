"""CLI test isolation: no user config, fresh logging per test."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run every CLI test from an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setattr("exprlens.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    yield project
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
