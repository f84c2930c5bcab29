"""Shared test fixtures for dotseed tests."""
from typing import List, Optional, Tuple

import pytest


class RecordingStore:
    """In-memory stand-in for UserSecretsStore."""

    def __init__(self, existing: Optional[List[str]] = None, reject: Tuple[str, ...] = ()):
        self.existing = list(existing or [])
        self.reject = set(reject)
        self.sets: List[Tuple[str, str]] = []
        self.initialized = False

    def init(self) -> bool:
        self.initialized = True
        return True

    def list(self) -> List[str]:
        return list(self.existing)

    def set(self, key: str, value: str) -> bool:
        if key in self.reject:
            return False
        self.sets.append((key, value))
        return True


@pytest.fixture
def store():
    """Empty recording secret store."""
    return RecordingStore()


@pytest.fixture
def config_tree(tmp_path):
    """Directory tree with one file per supported format plus build output."""
    (tmp_path / "appsettings.json").write_text(
        '{"ConnectionStrings": {"Default": "Server=db;Database=app"}, '
        '"Api": {"Key": "YOUR_API_KEY", "Docs": "https://example.com/docs"}, '
        '"Debug": true}'
    )
    (tmp_path / ".env").write_text('STRIPE_KEY="sk_test_123"\n# DISABLED=1\n')
    settings_dir = tmp_path / "settings"
    settings_dir.mkdir()
    (settings_dir / "config.local.ini").write_text("[Smtp]\nPassword=hunter2\n")
    bin_dir = tmp_path / "bin" / "Debug"
    bin_dir.mkdir(parents=True)
    (bin_dir / "appsettings.json").write_text('{"Leaked": "from-build-output"}')
    return tmp_path


@pytest.fixture
def make_store():
    """Factory for recording stores with preset contents or rejected keys."""
    return RecordingStore
