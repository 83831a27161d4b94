"""Layout devices and their named configuration variants."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from layoutconfig.core.qualifiers import QualifierSet

CUSTOM_DEVICE_LABEL = "Custom..."


@dataclass(frozen=True, slots=True)
class Device:
    """A read-only device snapshot.

    ``configs`` keeps the catalog order of the variants; the first entry is the
    default variant. A NaN ``x_dpi``/``y_dpi`` means the value is derived from
    the density qualifier of the active configuration.
    """

    name: str
    configs: Mapping[str, QualifierSet] = field(default_factory=dict)
    x_dpi: float = math.nan
    y_dpi: float = math.nan
    is_builtin: bool = True

    def config_names(self) -> list[str]:
        return list(self.configs.keys())

    def default_config_name(self) -> str | None:
        for name in self.configs:
            return name
        return None

    def get_config(self, name: str) -> QualifierSet | None:
        return self.configs.get(name)


class DeviceCatalog:
    """Ordered list of devices with lookup by name."""

    def __init__(self, devices: Iterable[Device] = ()) -> None:
        self._devices: list[Device] = list(devices)

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices)

    def __getitem__(self, index: int) -> Device:
        return self._devices[index]

    def names(self) -> list[str]:
        return [device.name for device in self._devices]

    def labels(self) -> list[str]:
        """Device names followed by the trailing custom-device entry."""
        return [*self.names(), CUSTOM_DEVICE_LABEL]

    def index_of(self, name: str | None) -> int:
        if name is None:
            return -1
        for index, device in enumerate(self._devices):
            if device.name == name:
                return index
        return -1

    def is_custom_index(self, index: int) -> bool:
        return index >= len(self._devices)
