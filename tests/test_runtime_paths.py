from __future__ import annotations

from pathlib import Path

from layoutconfig import runtime_paths


def test_source_package_root_points_to_repo_package() -> None:
    root = runtime_paths.package_root()
    assert root.name == "layoutconfig"
    assert (root / "core").exists()


def test_builtin_devices_path_resolves() -> None:
    path = runtime_paths.builtin_devices_path()
    assert path.name == "builtin.yaml"
    assert path.exists()


def test_frozen_prefers_meipass_package_dir(tmp_path: Path, monkeypatch) -> None:
    bundle_root = tmp_path / "bundle"
    package_root = bundle_root / "layoutconfig"
    package_root.mkdir(parents=True)
    monkeypatch.setattr(runtime_paths.sys, "frozen", True, raising=False)
    monkeypatch.setattr(runtime_paths.sys, "_MEIPASS", str(bundle_root), raising=False)

    assert runtime_paths.package_root() == package_root
    assert runtime_paths.builtin_devices_path() == package_root / "devices" / "builtin.yaml"


def test_frozen_falls_back_to_meipass_when_package_missing(tmp_path: Path, monkeypatch) -> None:
    bundle_root = tmp_path / "bundle"
    bundle_root.mkdir(parents=True)
    monkeypatch.setattr(runtime_paths.sys, "frozen", True, raising=False)
    monkeypatch.setattr(runtime_paths.sys, "_MEIPASS", str(bundle_root), raising=False)

    assert runtime_paths.package_root() == bundle_root
