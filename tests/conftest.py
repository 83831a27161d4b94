"""Shared fixtures for widget and application tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QSettings  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from layoutconfig.config.settings import AppSettings  # noqa: E402
from layoutconfig.core.device_registry import DeviceRegistry  # noqa: E402
from layoutconfig.core.resource_snapshot import ResourceSnapshot, SnapshotContext  # noqa: E402
from layoutconfig.core.resources import StyleResourceValue  # noqa: E402
from layoutconfig.runtime_paths import builtin_devices_path  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    return QApplication.instance() or QApplication([])


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> AppSettings:
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    qsettings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qsettings)


@pytest.fixture
def registry(tmp_path: Path) -> DeviceRegistry:
    registry = DeviceRegistry(builtin_path=builtin_devices_path(), user_path=tmp_path / "devices.yaml")
    registry.reload()
    return registry


@pytest.fixture
def snapshot_context(registry: DeviceRegistry) -> SnapshotContext:
    snapshot = ResourceSnapshot(
        framework_styles={
            "Theme": StyleResourceValue("Theme"),
            "Theme.Light": StyleResourceValue("Theme.Light"),
        },
        project_styles={
            "MyTheme": StyleResourceValue("MyTheme", parent_style="@android:style/Theme"),
        },
        languages={"en": ["US"], "fr": []},
    )
    return SnapshotContext(snapshot, registry)
