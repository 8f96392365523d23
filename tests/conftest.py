# ABOUTME: Shared fixtures for the inventory test suite
# ABOUTME: Builds on-disk site folders and keeps the cached config isolated between tests

from pathlib import Path

import pytest

from db_inventory.config import reload_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop any cached config so environment changes in one test don't leak."""
    reload_config()
    yield
    reload_config()


@pytest.fixture
def sites_root(tmp_path: Path) -> Path:
    root = tmp_path / "sites"
    root.mkdir()
    return root


@pytest.fixture
def make_site(sites_root: Path):
    """Create a site folder holding the given files and return its path."""

    def _make_site(folder: str, files: dict[str, str | bytes]) -> Path:
        site = sites_root / folder
        site.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            target = site / name
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return site

    return _make_site

