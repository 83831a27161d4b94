"""Resource values and the collaborator ports the configuration bar consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Protocol, Sequence

from layoutconfig.core.devices import Device

STYLE_TYPE_NAME = "style"

ResourceMap = Mapping[str, Mapping[str, "ResourceValue"]]


@dataclass(frozen=True, slots=True)
class ResourceValue:
    """A named, already-parsed resource value."""

    name: str
    value: str | None = None


@dataclass(frozen=True, slots=True)
class StyleResourceValue(ResourceValue):
    """A style resource with its raw parent reference (``@android:style/Theme``, ...)."""

    parent_style: str | None = None


class ResourceRepository(Protocol):
    """Locale information for a project's resources."""

    def languages(self) -> Iterable[str]: ...

    def regions(self, language: str) -> Iterable[str]: ...


class ConfigContext(Protocol):
    """Supplies resources and devices to the configuration bar.

    Any of the resource accessors may return None when the edited file has no
    framework or project context; callers degrade to empty results.
    """

    def framework_resources(self) -> ResourceRepository | None: ...

    def project_resources(self) -> ResourceRepository | None: ...

    def configured_framework_resources(self) -> ResourceMap | None: ...

    def configured_project_resources(self) -> ResourceMap | None: ...

    def device_catalog(self) -> Sequence[Device]: ...


class ConfigListener(Protocol):
    """Receives configuration bar notifications."""

    def on_configuration_change(self) -> None: ...

    def on_theme_change(self) -> None: ...

    def on_create(self) -> None: ...

    def on_clipping_change(self) -> None: ...


def style_map(resources: ResourceMap | None) -> Mapping[str, ResourceValue]:
    if resources is None:
        return {}
    return resources.get(STYLE_TYPE_NAME) or {}
