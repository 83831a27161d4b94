"""Tests for device catalog loading and the builtin/user registry."""

from __future__ import annotations

import math
from pathlib import Path

import pytest
import yaml

from layoutconfig.core.device_loader import DeviceValidationError, load_device_file
from layoutconfig.core.device_registry import DeviceRegistry
from layoutconfig.core.devices import CUSTOM_DEVICE_LABEL, Device, DeviceCatalog
from layoutconfig.core.qualifiers import Density, PixelDensityQualifier, QualifierSet
from layoutconfig.runtime_paths import builtin_devices_path


def _write_yaml(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


def _device(name: str, density: str = "mdpi", **extra: object) -> dict[str, object]:
    data: dict[str, object] = {
        "name": name,
        "configs": {
            "Portrait": {"orientation": "port", "density": density},
            "Landscape": {"orientation": "land", "density": density},
        },
    }
    data.update(extra)
    return data


class TestDeviceCatalog:
    def test_lookup_and_labels(self) -> None:
        catalog = DeviceCatalog([Device(name="A"), Device(name="B")])

        assert catalog.index_of("B") == 1
        assert catalog.index_of("C") == -1
        assert catalog.index_of(None) == -1
        assert catalog.labels() == ["A", "B", CUSTOM_DEVICE_LABEL]
        assert catalog.is_custom_index(2)

    def test_empty_catalog_offers_only_custom_slot(self) -> None:
        catalog = DeviceCatalog()
        assert catalog.labels() == [CUSTOM_DEVICE_LABEL]
        assert catalog.is_custom_index(0)

    def test_default_config_name_is_first(self) -> None:
        device = Device(name="A", configs={"Second": QualifierSet(), "First": QualifierSet()})
        assert device.default_config_name() == "Second"
        assert device.config_names() == ["Second", "First"]


class TestLoader:
    def test_load_valid_file_keeps_order(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path / "devices.yaml",
            {"schema_version": 1, "devices": [_device("Phone", "hdpi", xdpi=254, ydpi=254.5)]},
        )

        devices = load_device_file(path)

        assert len(devices) == 1
        phone = devices[0]
        assert phone.config_names() == ["Portrait", "Landscape"]
        assert phone.get_config("Portrait").pixel_density == PixelDensityQualifier(Density.HIGH)
        assert phone.x_dpi == 254.0
        assert phone.y_dpi == 254.5
        assert phone.is_builtin is False

    def test_missing_dpi_is_nan(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "devices.yaml", {"devices": [_device("Plain")]})
        device = load_device_file(path)[0]
        assert math.isnan(device.x_dpi)
        assert math.isnan(device.y_dpi)

    def test_empty_file_has_no_devices(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text("", encoding="utf-8")
        assert load_device_file(path) == []

    @pytest.mark.parametrize(
        "data",
        [
            {"devices": [_device("Phone", "superhdpi")]},
            {"devices": [{"name": "NoConfigs", "configs": {}}]},
            {"devices": [_device("Phone", extra_key=1)]},
            {"devices": [_device("Phone"), _device("Phone")]},
            {"devices": [_device(CUSTOM_DEVICE_LABEL)]},
            {"devices": [_device("Phone", xdpi="wide")]},
            {"schema_version": 2, "devices": []},
            {"devices": "Phone"},
        ],
    )
    def test_invalid_catalogs_rejected(self, tmp_path: Path, data: object) -> None:
        path = _write_yaml(tmp_path / "devices.yaml", data)
        with pytest.raises(DeviceValidationError):
            load_device_file(path)

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text("devices: [unclosed", encoding="utf-8")
        with pytest.raises(DeviceValidationError, match="Invalid YAML"):
            load_device_file(path)

    def test_builtin_catalog_is_valid(self) -> None:
        devices = load_device_file(builtin_devices_path(), is_builtin=True)
        assert devices
        assert all(device.is_builtin for device in devices)
        assert all(device.config_names() for device in devices)


class TestRegistry:
    def test_user_device_overrides_builtin_in_place(self, tmp_path: Path) -> None:
        builtin = _write_yaml(tmp_path / "builtin.yaml", {"devices": [_device("A"), _device("B")]})
        user = _write_yaml(tmp_path / "user.yaml", {"devices": [_device("A", "hdpi"), _device("C")]})

        registry = DeviceRegistry(builtin_path=builtin, user_path=user)
        registry.reload()

        assert [device.name for device in registry.devices()] == ["A", "B", "C"]
        overridden = registry.devices()[0]
        assert overridden.is_builtin is False
        assert overridden.get_config("Portrait").pixel_density == PixelDensityQualifier(Density.HIGH)
        assert any("overrides built-in" in msg for msg in registry.load_errors())

    def test_invalid_user_file_is_reported_not_raised(self, tmp_path: Path) -> None:
        builtin = _write_yaml(tmp_path / "builtin.yaml", {"devices": [_device("A")]})
        user = _write_yaml(tmp_path / "user.yaml", {"devices": [{"name": "Broken"}]})

        registry = DeviceRegistry(builtin_path=builtin, user_path=user)
        registry.reload()

        assert [device.name for device in registry.devices()] == ["A"]
        assert len(registry.load_errors()) == 1

    def test_missing_user_file_is_ignored(self, tmp_path: Path) -> None:
        builtin = _write_yaml(tmp_path / "builtin.yaml", {"devices": [_device("A")]})
        registry = DeviceRegistry(builtin_path=builtin, user_path=tmp_path / "missing.yaml")
        registry.reload()
        assert registry.load_errors() == []

    def test_ensure_user_file_writes_loadable_template(self, tmp_path: Path) -> None:
        user = tmp_path / "nested" / "devices.yaml"
        registry = DeviceRegistry(builtin_path=tmp_path / "none.yaml", user_path=user)

        path = registry.ensure_user_file()

        assert path.exists()
        assert load_device_file(path) == []
