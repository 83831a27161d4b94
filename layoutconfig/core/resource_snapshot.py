"""Static, YAML-described resource snapshots for hosting the configuration bar."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import yaml

from layoutconfig.core.device_registry import DeviceRegistry
from layoutconfig.core.devices import Device
from layoutconfig.core.resources import STYLE_TYPE_NAME, ResourceMap, ResourceValue, StyleResourceValue

_MAX_SNAPSHOT_BYTES = 1024 * 1024


class ResourceSnapshotError(ValueError):
    """Raised when a resource snapshot file is malformed."""


class StaticResourceRepository:
    """Languages and regions held in memory."""

    def __init__(self, languages: Mapping[str, Iterable[str]] | None = None) -> None:
        self._languages: dict[str, list[str]] = {
            language: sorted(set(regions or ())) for language, regions in (languages or {}).items()
        }

    def languages(self) -> list[str]:
        return sorted(self._languages)

    def regions(self, language: str) -> list[str]:
        return list(self._languages.get(language, []))


@dataclass(slots=True)
class ResourceSnapshot:
    """Framework and project resources; a None side means no such context."""

    framework_styles: dict[str, ResourceValue] | None = None
    project_styles: dict[str, ResourceValue] | None = None
    languages: dict[str, list[str]] = field(default_factory=dict)


def load_resource_snapshot(path: Path) -> ResourceSnapshot:
    """Load a snapshot file of the form::

        framework:
          styles: {Theme: null, Theme.Light: null}
        project:
          languages: {en: [US, GB], fr: []}
          styles: {MyTheme: "@android:style/Theme"}

    Each style maps to its raw parent reference, or null for none.
    """
    try:
        if path.stat().st_size > _MAX_SNAPSHOT_BYTES:
            raise ResourceSnapshotError(f"{path}: file exceeds max size ({_MAX_SNAPSHOT_BYTES} bytes)")
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ResourceSnapshotError(f"Invalid YAML in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceSnapshotError(f"Unable to read {path}: {exc}") from exc
    if data is None:
        return ResourceSnapshot()
    if not isinstance(data, dict):
        raise ResourceSnapshotError(f"Expected a mapping at the top of {path}")
    return parse_resource_snapshot(data, context=str(path))


def parse_resource_snapshot(data: Mapping[str, object], *, context: str) -> ResourceSnapshot:
    unknown = sorted(str(key) for key in data if key not in {"framework", "project"})
    if unknown:
        raise ResourceSnapshotError(f"{context}: unsupported keys found: {', '.join(unknown)}")

    snapshot = ResourceSnapshot()
    framework = data.get("framework")
    if framework is not None:
        section = _section(framework, f"{context}: framework")
        snapshot.framework_styles = _parse_styles(section.get("styles"), f"{context}: framework")
    project = data.get("project")
    if project is not None:
        section = _section(project, f"{context}: project")
        snapshot.project_styles = _parse_styles(section.get("styles"), f"{context}: project")
        snapshot.languages = _parse_languages(section.get("languages"), f"{context}: project")
    return snapshot


def _section(raw: object, context: str) -> Mapping[str, object]:
    if not isinstance(raw, dict):
        raise ResourceSnapshotError(f"{context} must be a mapping")
    return raw


def _parse_styles(raw: object, context: str) -> dict[str, ResourceValue]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ResourceSnapshotError(f"{context}: styles must map style names to parents")
    styles: dict[str, ResourceValue] = {}
    for name, parent in raw.items():
        if not isinstance(name, str) or not name.strip():
            raise ResourceSnapshotError(f"{context}: style names must be non-empty strings")
        if parent is not None and not isinstance(parent, str):
            raise ResourceSnapshotError(f"{context}: parent of {name!r} must be a string or null")
        styles[name] = StyleResourceValue(name=name, parent_style=parent)
    return styles


def _parse_languages(raw: object, context: str) -> dict[str, list[str]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ResourceSnapshotError(f"{context}: languages must map a language to its regions")
    languages: dict[str, list[str]] = {}
    for language, regions in raw.items():
        if not isinstance(language, str):
            raise ResourceSnapshotError(f"{context}: language codes must be strings")
        if regions is None:
            regions = []
        if not isinstance(regions, list) or not all(isinstance(region, str) for region in regions):
            raise ResourceSnapshotError(f"{context}: regions of {language!r} must be a list of strings")
        languages[language] = list(regions)
    return languages


class SnapshotContext:
    """Serves a resource snapshot and the registry's devices to the configuration bar."""

    def __init__(self, snapshot: ResourceSnapshot, registry: DeviceRegistry) -> None:
        self._snapshot = snapshot
        self._registry = registry

    def framework_resources(self) -> StaticResourceRepository | None:
        if self._snapshot.framework_styles is None:
            return None
        return StaticResourceRepository()

    def project_resources(self) -> StaticResourceRepository | None:
        if self._snapshot.project_styles is None:
            return None
        return StaticResourceRepository(self._snapshot.languages)

    def configured_framework_resources(self) -> ResourceMap | None:
        if self._snapshot.framework_styles is None:
            return None
        return {STYLE_TYPE_NAME: dict(self._snapshot.framework_styles)}

    def configured_project_resources(self) -> ResourceMap | None:
        if self._snapshot.project_styles is None:
            return None
        return {STYLE_TYPE_NAME: dict(self._snapshot.project_styles)}

    def device_catalog(self) -> Sequence[Device]:
        return self._registry.devices()
