# tests/conftest.py

"""Shared pytest fixtures for the catalog admin tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_logs_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point per-run log files at a temporary ``logs/`` directory."""
    logs_dir = tmp_path / "logs"
    with patch(
        "jewelry_admin.config.settings.Settings.LOGS_DIR", logs_dir
    ):
        yield logs_dir
