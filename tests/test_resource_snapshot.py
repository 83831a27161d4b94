"""Tests for YAML resource snapshots and the snapshot-backed context."""

from pathlib import Path

import pytest

from layoutconfig.core.device_registry import DeviceRegistry
from layoutconfig.core.resource_snapshot import (
    ResourceSnapshotError,
    SnapshotContext,
    load_resource_snapshot,
)
from layoutconfig.core.resources import STYLE_TYPE_NAME, StyleResourceValue
from layoutconfig.core.themes import ThemeResolver

SNAPSHOT_YAML = """
framework:
  styles:
    Theme: null
    Theme.Light: null
    Widget: null
project:
  languages:
    en: [US, GB]
    fr: []
  styles:
    MyTheme: "@android:Theme"
    MyTheme.Big: null
    NotATheme: "@android:Widget"
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "resources.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_snapshot_builds_style_values(tmp_path: Path) -> None:
    snapshot = load_resource_snapshot(_write(tmp_path, SNAPSHOT_YAML))

    assert snapshot.project_styles["MyTheme"] == StyleResourceValue("MyTheme", parent_style="@android:Theme")
    assert snapshot.project_styles["MyTheme.Big"].parent_style is None
    assert snapshot.languages == {"en": ["US", "GB"], "fr": []}

    themes = ThemeResolver(snapshot.framework_styles, snapshot.project_styles).resolve()
    assert themes.project_themes == ("MyTheme", "MyTheme.Big")


def test_context_serves_snapshot_and_devices(tmp_path: Path) -> None:
    snapshot = load_resource_snapshot(_write(tmp_path, SNAPSHOT_YAML))
    registry = DeviceRegistry(builtin_path=tmp_path / "none.yaml", user_path=tmp_path / "none2.yaml")
    context = SnapshotContext(snapshot, registry)

    project = context.project_resources()
    assert project.languages() == ["en", "fr"]
    assert project.regions("en") == ["GB", "US"]
    assert set(context.configured_project_resources()[STYLE_TYPE_NAME]) == {"MyTheme", "MyTheme.Big", "NotATheme"}
    assert context.device_catalog() == []


def test_context_without_project_section(tmp_path: Path) -> None:
    snapshot = load_resource_snapshot(_write(tmp_path, "framework:\n  styles: {Theme: null}\n"))
    context = SnapshotContext(snapshot, DeviceRegistry(tmp_path / "a.yaml", tmp_path / "b.yaml"))

    assert context.project_resources() is None
    assert context.configured_project_resources() is None
    assert context.framework_resources() is not None


@pytest.mark.parametrize(
    "text",
    [
        "extra: 1\n",
        "project:\n  styles: [a, b]\n",
        "project:\n  languages: {en: US}\n",
        "framework:\n  styles: {Theme: 3}\n",
        "project: [oops\n",
    ],
)
def test_malformed_snapshot_rejected(tmp_path: Path, text: str) -> None:
    with pytest.raises(ResourceSnapshotError):
        load_resource_snapshot(_write(tmp_path, text))
