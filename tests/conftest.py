# Dotfiler Test Fixtures
# Pytest fixtures for dotfiler tests

import tempfile
from collections.abc import Generator
from datetime import datetime
from io import StringIO
from pathlib import Path

import pytest
import yaml
from rich.console import Console

from dotfiler.logger import SyncLogger
from dotfiler.sync.context import SyncContext

SYNC_TIME = datetime(2024, 1, 2, 3, 4, 5)
SYNC_STAMP = "20240102030405"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def backup_dir(temp_dir: Path) -> Path:
    """Create an empty backup directory."""
    path = temp_dir / "backup"
    path.mkdir()
    return path


@pytest.fixture
def restore_dir(temp_dir: Path) -> Path:
    """Create an empty restore directory standing in for the home directory."""
    path = temp_dir / "restore"
    path.mkdir()
    return path


@pytest.fixture
def logger() -> SyncLogger:
    """Verbose logger writing to an in-memory buffer."""
    console = Console(file=StringIO(), no_color=True, width=1000)
    return SyncLogger(console, verbose=True)


@pytest.fixture
def ctx(backup_dir: Path, restore_dir: Path, logger: SyncLogger) -> SyncContext:
    """Context syncing between the temporary backup and restore directories."""
    return SyncContext.create(backup_dir, logger=logger, restore_root=restore_dir, sync_time=SYNC_TIME)


@pytest.fixture
def dry_ctx(backup_dir: Path, restore_dir: Path, logger: SyncLogger) -> SyncContext:
    """Dry-run variant of ctx."""
    return SyncContext.create(backup_dir, logger=logger, dry=True, restore_root=restore_dir, sync_time=SYNC_TIME)


@pytest.fixture
def config_file(backup_dir: Path, restore_dir: Path) -> Path:
    """Create a configuration file with one custom package restoring to restore_dir."""
    config = {
        "packages": ["tools"],
        "custom_packages": {
            "tools": {
                "name": "Tools",
                "description": "Test tools",
                "files": [".toolrc", {"path": ".tooldir"}],
            },
        },
        "options": {"restore_root": str(restore_dir)},
    }
    config_path = backup_dir / "dotfiler.yaml"
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False)
    return config_path
