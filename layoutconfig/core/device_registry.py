"""Builtin and user device catalog registry."""

from __future__ import annotations

from pathlib import Path

import yaml

from layoutconfig.core.device_loader import DEVICE_SCHEMA_VERSION, DeviceValidationError, load_device_file
from layoutconfig.core.devices import Device


class DeviceRegistry:
    """Loads devices from the builtin catalog and the user's catalog file."""

    def __init__(self, builtin_path: Path, user_path: Path) -> None:
        self._builtin_path = builtin_path
        self._user_path = user_path
        self._devices: list[Device] = []
        self._load_errors: list[str] = []

    def reload(self) -> None:
        self._devices = []
        self._load_errors = []
        self._load_from_file(self._builtin_path, is_builtin=True)
        self._load_from_file(self._user_path, is_builtin=False)

    def devices(self) -> list[Device]:
        return list(self._devices)

    def load_errors(self) -> list[str]:
        return list(self._load_errors)

    def ensure_user_file(self) -> Path:
        """Create an empty user catalog if none exists yet and return its path."""
        if not self._user_path.exists():
            self._user_path.parent.mkdir(parents=True, exist_ok=True)
            template = {"schema_version": DEVICE_SCHEMA_VERSION, "devices": []}
            self._user_path.write_text(
                yaml.safe_dump(template, default_flow_style=False, sort_keys=False),
                encoding="utf-8",
            )
        return self._user_path

    def _load_from_file(self, path: Path, *, is_builtin: bool) -> None:
        if not path.exists():
            return
        if path.is_symlink() and not is_builtin:
            self._load_errors.append(f"Skipping symlink device catalog: {path}")
            return
        try:
            loaded = load_device_file(path, is_builtin=is_builtin)
        except DeviceValidationError as exc:
            self._load_errors.append(str(exc))
            return

        for device in loaded:
            index = self._index_of(device.name)
            if index == -1:
                self._devices.append(device)
                continue
            if is_builtin:
                self._load_errors.append(
                    f"Duplicate builtin device {device.name!r} in {path}; skipping."
                )
                continue
            self._load_errors.append(f"User device {device.name!r} overrides built-in device.")
            self._devices[index] = device

    def _index_of(self, name: str) -> int:
        for index, device in enumerate(self._devices):
            if device.name == name:
                return index
        return -1
