"""Application settings via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("LayoutConfig", "LayoutConfig")

    # -- last selection --

    @property
    def device_name(self) -> str:
        return self._clean(self._qs.value("selection/device", "", type=str))

    @device_name.setter
    def device_name(self, value: str) -> None:
        self._qs.setValue("selection/device", self._clean(value))

    @property
    def device_config_name(self) -> str:
        return self._clean(self._qs.value("selection/device_config", "", type=str))

    @device_config_name.setter
    def device_config_name(self, value: str) -> None:
        self._qs.setValue("selection/device_config", self._clean(value))

    @property
    def locale_label(self) -> str:
        return self._clean(self._qs.value("selection/locale", "", type=str))

    @locale_label.setter
    def locale_label(self, value: str) -> None:
        self._qs.setValue("selection/locale", self._clean(value))

    @property
    def theme_name(self) -> str:
        return self._clean(self._qs.value("selection/theme", "", type=str))

    @theme_name.setter
    def theme_name(self, value: str) -> None:
        self._qs.setValue("selection/theme", self._clean(value))

    # -- rendering --

    @property
    def clipping(self) -> bool:
        return self._qs.value("render/clipping", True, type=bool)

    @clipping.setter
    def clipping(self, value: bool) -> None:
        self._qs.setValue("render/clipping", bool(value))

    # -- resources --

    @property
    def resource_snapshot_path(self) -> str:
        return self._clean(self._qs.value("resources/snapshot_path", "", type=str))

    @resource_snapshot_path.setter
    def resource_snapshot_path(self, value: str) -> None:
        self._qs.setValue("resources/snapshot_path", self._clean(value))

    # -- window geometry --

    @property
    def window_geometry(self) -> bytes | None:
        return self._qs.value("ui/window_geometry")

    @window_geometry.setter
    def window_geometry(self, value: bytes) -> None:
        self._qs.setValue("ui/window_geometry", value)

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def user_devices_path(self) -> Path:
        return self.app_data_dir / "devices.yaml"

    @staticmethod
    def _clean(value: str | None) -> str:
        return (value or "").strip()

    @staticmethod
    def _app_data_dir() -> Path:
        import os
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "layoutconfig"
