from __future__ import annotations

import datetime
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from snapshot_manager.app import create_app
from snapshot_manager.snapshotter import Snapshotter
from snapshot_manager.whitelist import VolumeWhitelist


@pytest.fixture
def whitelist() -> VolumeWhitelist:
    return VolumeWhitelist(["tank/data", "tank/backup"])


@pytest.fixture
def run_mock(monkeypatch: pytest.MonkeyPatch) -> Mock:
    run = Mock(return_value=SimpleNamespace(returncode=0))
    monkeypatch.setattr("snapshot_manager.snapshotter.subprocess.run", run)
    return run


@pytest.fixture
def snapshotter() -> Snapshotter:
    return Snapshotter(today=lambda: datetime.date(2024, 3, 5))


@pytest.fixture
def client(whitelist: VolumeWhitelist, snapshotter: Snapshotter, run_mock: Mock):
    app = create_app(whitelist, snapshotter)
    app.testing = True
    return app.test_client()
