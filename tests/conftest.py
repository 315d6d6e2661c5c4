"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from devstack.core.context import RuntimeContext
from devstack.core.models.platform import Platform


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Return a temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def make_ctx(home_dir: Path):
    """Factory for a RuntimeContext on a given platform with an empty PATH."""

    def _make(platform: Platform = Platform.LINUX, path_entries=None) -> RuntimeContext:
        return RuntimeContext(
            platform=platform,
            home_dir=home_dir,
            path_entries=list(path_entries or ["/usr/bin"]),
        )

    return _make


@pytest.fixture
def linux_ctx(make_ctx) -> RuntimeContext:
    return make_ctx(Platform.LINUX)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo ``setup_logging`` calls made by the CLI under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
