"""Theme discovery from framework and project style maps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from layoutconfig.core.resources import ResourceValue, StyleResourceValue

logger = logging.getLogger(__name__)

THEME_SEPARATOR = "----------"
FRAMEWORK_THEME_ROOT = "Theme"

_RESOURCE_PREFIX = "@"
_FRAMEWORK_PREFIX = "android:"
_STYLE_PREFIX = "style/"


def is_framework_theme_name(name: str) -> bool:
    return name == FRAMEWORK_THEME_ROOT or name.startswith(FRAMEWORK_THEME_ROOT + ".")


def normalize_parent_style(raw: str) -> tuple[str, bool]:
    """Strip ``@``, ``android:`` and ``style/`` from a parent reference.

    Returns the bare style name and whether it points at a framework style.
    """
    parent = raw
    if parent.startswith(_RESOURCE_PREFIX):
        parent = parent[len(_RESOURCE_PREFIX):]
    is_framework = False
    if parent.startswith(_FRAMEWORK_PREFIX):
        is_framework = True
        parent = parent[len(_FRAMEWORK_PREFIX):]
    if parent.startswith(_STYLE_PREFIX):
        parent = parent[len(_STYLE_PREFIX):]
    return parent, is_framework


def implied_parent_style(name: str) -> str | None:
    """``Theme.Light.Fullscreen`` implies ``Theme.Light``; undotted names imply nothing."""
    index = name.rfind(".")
    if index == -1:
        return None
    return name[:index]


def is_theme(
    value: ResourceValue,
    styles: Mapping[str, ResourceValue],
    _visited: frozenset[str] = frozenset(),
) -> bool:
    """Return True when ``value`` is a style inheriting from a framework theme.

    Project parents are looked up in ``styles`` and followed recursively.
    Dangling parents and parent cycles resolve to False.
    """
    if not isinstance(value, StyleResourceValue):
        return False
    if value.name in _visited:
        logger.debug("style parent cycle through %r", value.name)
        return False

    is_framework = False
    if value.parent_style is not None:
        parent, is_framework = normalize_parent_style(value.parent_style)
    else:
        parent = implied_parent_style(value.name)

    if parent is None:
        return False
    if is_framework:
        return is_framework_theme_name(parent)

    parent_value = styles.get(parent)
    if parent_value is None:
        return False
    return is_theme(parent_value, styles, _visited | {value.name})


@dataclass(frozen=True, slots=True)
class ThemeList:
    """Sorted framework themes, an optional separator, then sorted project themes."""

    framework_themes: tuple[str, ...] = ()
    project_themes: tuple[str, ...] = ()

    @property
    def framework_theme_count(self) -> int:
        return len(self.framework_themes)

    @property
    def project_theme_count(self) -> int:
        return len(self.project_themes)

    @property
    def has_separator(self) -> bool:
        return bool(self.framework_themes) and bool(self.project_themes)

    @property
    def project_start(self) -> int:
        return self.framework_theme_count + (1 if self.has_separator else 0)

    def items(self) -> list[str]:
        rows = list(self.framework_themes)
        if self.has_separator:
            rows.append(THEME_SEPARATOR)
        rows.extend(self.project_themes)
        return rows

    def __len__(self) -> int:
        return self.project_start + self.project_theme_count

    def is_separator_index(self, index: int) -> bool:
        return self.has_separator and index == self.framework_theme_count

    def is_project_index(self, index: int) -> bool:
        return index >= self.project_start

    def name_at(self, index: int) -> str | None:
        if index < 0 or index >= len(self):
            return None
        return self.items()[index]

    def index_of(self, name: str | None) -> int:
        if name is None or name == THEME_SEPARATOR:
            return -1
        items = self.items()
        return items.index(name) if name in items else -1


def pick_theme_index(themes: ThemeList, previous: int) -> int:
    """Selection after a rebuild: keep ``previous`` when valid, else the first theme."""
    if len(themes) == 0:
        return -1
    if previous < 0 or previous >= len(themes):
        return 0
    if themes.is_separator_index(previous):
        return 0
    return previous


class ThemeResolver:
    """Classifies framework and project styles as themes."""

    def __init__(
        self,
        framework_styles: Mapping[str, ResourceValue] | None = None,
        project_styles: Mapping[str, ResourceValue] | None = None,
    ) -> None:
        self._framework_styles = framework_styles or {}
        self._project_styles = project_styles or {}

    def framework_themes(self) -> list[str]:
        return sorted(
            value.name
            for value in self._framework_styles.values()
            if is_framework_theme_name(value.name)
        )

    def project_themes(self) -> list[str]:
        return sorted(
            value.name
            for value in self._project_styles.values()
            if is_theme(value, self._project_styles)
        )

    def resolve(self) -> ThemeList:
        return ThemeList(
            framework_themes=tuple(self.framework_themes()),
            project_themes=tuple(self.project_themes()),
        )
