"""Device, device-config and locale resolution into one qualifier set."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable

from layoutconfig.core.devices import Device, DeviceCatalog
from layoutconfig.core.locales import LocaleEntry
from layoutconfig.core.qualifiers import (
    Density,
    QualifierKind,
    QualifierSet,
    ScreenOrientation,
    VersionQualifier,
)
from layoutconfig.errors import NotFoundError

logger = logging.getLogger(__name__)

# Qualifiers chosen by the user; everything else comes from the device config.
PRESERVED_KINDS: tuple[QualifierKind, ...] = (
    QualifierKind.LANGUAGE,
    QualifierKind.REGION,
    QualifierKind.VERSION,
)

DEFAULT_SCREEN_DIMENSION: tuple[int, int] = (480, 320)


@dataclass(frozen=True, slots=True)
class DeviceSelected:
    device: Device | None


@dataclass(frozen=True, slots=True)
class CustomDeviceRequested:
    """The custom-device slot was chosen; the host must create a device and reload."""

    previous_device: Device | None


DeviceSelection = DeviceSelected | CustomDeviceRequested


class ConfigurationResolver:
    """Owns the effective qualifier set and the device it was derived from.

    ``notify`` is called after every change to the effective set.
    """

    def __init__(
        self,
        devices: Iterable[Device] = (),
        notify: Callable[[], None] | None = None,
    ) -> None:
        self._catalog = DeviceCatalog(devices)
        self._notify = notify
        self._current_device: Device | None = None
        self._current_config = QualifierSet()
        self._variant_names: list[str] = []
        self._selected_variant: str | None = None

    # -- state --

    @property
    def catalog(self) -> DeviceCatalog:
        return self._catalog

    @property
    def current_device(self) -> Device | None:
        return self._current_device

    @property
    def current_config(self) -> QualifierSet:
        return self._current_config

    @property
    def variant_names(self) -> list[str]:
        return list(self._variant_names)

    @property
    def selected_variant(self) -> str | None:
        return self._selected_variant

    @property
    def variant_selection_enabled(self) -> bool:
        return len(self._variant_names) > 1

    def device_labels(self) -> list[str]:
        return self._catalog.labels()

    def copy_current_config(self, target: QualifierSet) -> None:
        target.replace_all(self._current_config)

    # -- device selection --

    def set_devices(self, devices: Iterable[Device]) -> None:
        self._catalog = DeviceCatalog(devices)

    def select_device(self, index: int) -> DeviceSelection:
        """Select ``catalog[index]`` and reset the variant list to its configs.

        Indexes at or past the end of the catalog address the custom-device
        slot and change nothing. A negative index clears the device.
        """
        if self._catalog.is_custom_index(index):
            logger.debug("custom device requested at index %d", index)
            return CustomDeviceRequested(previous_device=self._current_device)
        return self._apply_device(index)

    def _apply_device(self, index: int) -> DeviceSelected:
        self._current_device = self._catalog[index] if index >= 0 else None
        if self._current_device is None:
            self._variant_names = []
            self._selected_variant = None
        else:
            self._variant_names = self._current_device.config_names()
            self._selected_variant = self._current_device.default_config_name()
        return DeviceSelected(self._current_device)

    def reload_devices(self, devices: Iterable[Device]) -> DeviceSelected:
        """Replace the catalog and re-select the previous device by name, else the first."""
        previous = self._current_device
        self.set_devices(devices)
        index = self._catalog.index_of(previous.name if previous is not None else None)
        if index == -1:
            index = 0 if len(self._catalog) else -1
        return self._apply_device(index)

    def select_config_variant(self, name: str | None = None) -> None:
        """Apply a device variant, keeping the user's language, region and version.

        With no name the currently selected variant is re-applied.
        """
        device = self._current_device
        if device is None:
            return
        if name is None:
            name = self._selected_variant
        variant = device.get_config(name) if name is not None else None
        if variant is None:
            raise NotFoundError(
                message=f"Device {device.name!r} has no configuration named {name!r}",
                details={"device": device.name, "config": name},
            )

        preserved = {kind: self._current_config.get(kind) for kind in PRESERVED_KINDS}
        self._current_config.replace_all(variant)
        for kind, qualifier in preserved.items():
            self._current_config.set(kind, qualifier)
        self._selected_variant = name
        self._changed()

    # -- user overrides --

    def set_locale(self, entry: LocaleEntry) -> None:
        self._current_config.set(QualifierKind.LANGUAGE, entry.language)
        self._current_config.set(QualifierKind.REGION, entry.region)
        self._changed()

    def set_version(self, version: VersionQualifier | None) -> None:
        self._current_config.set(QualifierKind.VERSION, version)
        self._changed()

    # -- derived values --

    def density(self) -> Density:
        """Density of the effective config; never NODPI, MEDIUM when unknown."""
        qualifier = self._current_config.pixel_density
        if qualifier is not None and qualifier.value is not Density.NODPI:
            return qualifier.value
        return Density.MEDIUM

    def x_dpi(self) -> float:
        if self._current_device is not None and not math.isnan(self._current_device.x_dpi):
            return self._current_device.x_dpi
        return float(self.density().dpi_value)

    def y_dpi(self) -> float:
        if self._current_device is not None and not math.isnan(self._current_device.y_dpi):
            return self._current_device.y_dpi
        return float(self.density().dpi_value)

    def screen_bounds(self) -> tuple[int, int]:
        """Screen ``(width, height)`` in pixels for the current orientation."""
        orientation_qualifier = self._current_config.screen_orientation
        orientation = (
            orientation_qualifier.value if orientation_qualifier is not None else ScreenOrientation.PORTRAIT
        )
        dimension = self._current_config.screen_dimension
        if dimension is not None:
            s1, s2 = dimension.value1, dimension.value2
        else:
            s1, s2 = DEFAULT_SCREEN_DIMENSION

        if orientation is ScreenOrientation.LANDSCAPE:
            return s1, s2
        if orientation is ScreenOrientation.SQUARE:
            return s1, s1
        return s2, s1

    def _changed(self) -> None:
        if self._notify is not None:
            self._notify()
