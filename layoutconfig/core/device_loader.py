"""Device catalog file parsing and validation."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Mapping

import yaml

from layoutconfig.core.devices import CUSTOM_DEVICE_LABEL, Device
from layoutconfig.core.qualifiers import QualifierSet

DEVICE_SCHEMA_VERSION = 1

_MAX_CATALOG_BYTES = 256 * 1024
_MAX_DEVICES = 128
_MAX_CONFIGS_PER_DEVICE = 32
_MAX_NAME_LEN = 80
_MAX_DPI = 2000.0


class DeviceValidationError(ValueError):
    """Raised when a device catalog file fails validation."""


def load_device_file(path: Path, *, is_builtin: bool = False) -> list[Device]:
    """Load and validate a YAML device catalog file."""
    content = _read_text_limited(path, max_bytes=_MAX_CATALOG_BYTES)
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DeviceValidationError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, dict):
        raise DeviceValidationError(f"Expected a mapping at the top of {path}")
    return parse_device_catalog(data, context=str(path), is_builtin=is_builtin)


def parse_device_catalog(
    data: Mapping[str, object],
    *,
    context: str,
    is_builtin: bool = False,
) -> list[Device]:
    _reject_unknown_keys(data, allowed={"schema_version", "devices"}, context=context)

    schema_version = data.get("schema_version", DEVICE_SCHEMA_VERSION)
    if schema_version != DEVICE_SCHEMA_VERSION:
        raise DeviceValidationError(
            f"{context}: unsupported schema_version {schema_version!r}; "
            f"expected {DEVICE_SCHEMA_VERSION!r}"
        )

    raw_devices = data.get("devices") or []
    if not isinstance(raw_devices, list):
        raise DeviceValidationError(f"{context}: 'devices' must be a list")
    if len(raw_devices) > _MAX_DEVICES:
        raise DeviceValidationError(f"{context}: more than {_MAX_DEVICES} devices defined")

    devices: list[Device] = []
    seen: set[str] = set()
    for position, raw in enumerate(raw_devices):
        if not isinstance(raw, dict):
            raise DeviceValidationError(f"{context}: device #{position + 1} must be a mapping")
        device = _parse_device(raw, context=f"{context}: device #{position + 1}", is_builtin=is_builtin)
        if device.name in seen:
            raise DeviceValidationError(f"{context}: duplicate device name {device.name!r}")
        seen.add(device.name)
        devices.append(device)
    return devices


def _parse_device(data: Mapping[str, object], *, context: str, is_builtin: bool) -> Device:
    _reject_unknown_keys(data, allowed={"name", "xdpi", "ydpi", "configs"}, context=context)
    name = _required_str(data, "name", context, max_len=_MAX_NAME_LEN)
    if name == CUSTOM_DEVICE_LABEL:
        raise DeviceValidationError(f"{context}: device name {name!r} is reserved")

    raw_configs = data.get("configs")
    if not isinstance(raw_configs, dict) or not raw_configs:
        raise DeviceValidationError(f"{context}: 'configs' must be a non-empty mapping")
    if len(raw_configs) > _MAX_CONFIGS_PER_DEVICE:
        raise DeviceValidationError(
            f"{context}: more than {_MAX_CONFIGS_PER_DEVICE} configs defined for {name!r}"
        )

    configs: dict[str, QualifierSet] = {}
    for config_name, raw_qualifiers in raw_configs.items():
        if not isinstance(config_name, str) or not config_name.strip():
            raise DeviceValidationError(f"{context}: config names must be non-empty strings")
        if raw_qualifiers is None:
            raw_qualifiers = {}
        if not isinstance(raw_qualifiers, dict):
            raise DeviceValidationError(
                f"{context}: config {config_name!r} must map qualifier keys to values"
            )
        try:
            configs[config_name.strip()] = QualifierSet.from_mapping(raw_qualifiers)
        except ValueError as exc:
            raise DeviceValidationError(f"{context}: config {config_name!r}: {exc}") from exc

    return Device(
        name=name,
        configs=configs,
        x_dpi=_optional_dpi(data, "xdpi", context),
        y_dpi=_optional_dpi(data, "ydpi", context),
        is_builtin=is_builtin,
    )


def _optional_dpi(data: Mapping[str, object], key: str, context: str) -> float:
    value = data.get(key)
    if value is None:
        return math.nan
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DeviceValidationError(f"{context}: field {key!r} must be a number")
    dpi = float(value)
    if not 0.0 < dpi <= _MAX_DPI:
        raise DeviceValidationError(f"{context}: field {key!r} must be between 0 and {_MAX_DPI:g}")
    return dpi


def _required_str(data: Mapping[str, object], key: str, context: str, *, max_len: int) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise DeviceValidationError(f"{context}: field {key!r} must be a non-empty string")
    cleaned = value.strip()
    if len(cleaned) > max_len:
        raise DeviceValidationError(f"{context}: field {key!r} exceeds max length {max_len}")
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise DeviceValidationError(f"{context}: field {key!r} must be a single line string")
    return cleaned


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(str(key) for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise DeviceValidationError(f"{context}: unsupported keys found: {joined}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise DeviceValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise DeviceValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DeviceValidationError(f"Unable to read {path}: {exc}") from exc
