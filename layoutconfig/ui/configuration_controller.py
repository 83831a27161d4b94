"""Configuration bar state: device, config, locale, theme, clipping."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from PySide6.QtCore import QObject, Signal

from layoutconfig.core.locales import LocaleCatalog
from layoutconfig.core.qualifiers import Density, QualifierSet
from layoutconfig.core.resolver import ConfigurationResolver, CustomDeviceRequested, DeviceSelection
from layoutconfig.core.resources import ConfigContext, ConfigListener, style_map
from layoutconfig.core.themes import ThemeList, ThemeResolver, pick_theme_index

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT_LABEL = "(Default)"
CLIPPING_TOOLTIP = "Toggles screen clipping on/off"
CLIPPING_UNSUPPORTED_TOOLTIP = "Non clipped rendering is not supported"


class ConfigurationController(QObject):
    """Resolves the editor configuration and reports changes through signals.

    Selection calls made while updates are suspended are ignored, so widgets
    can repopulate their choices without echoing selections back.
    """

    configuration_changed = Signal()
    theme_changed = Signal()
    create_requested = Signal()
    clipping_changed = Signal()
    custom_device_requested = Signal()

    devices_reloaded = Signal(list, int)        # labels, selected index
    variants_reloaded = Signal(list, int, bool)  # names, selected index, enabled
    locales_reloaded = Signal(list, int)        # labels, selected index
    themes_reloaded = Signal(list, int)         # items, selected index
    device_selected = Signal(int)
    variant_selected = Signal(int)
    locale_selected = Signal(int)
    theme_selected = Signal(int)
    current_layout_changed = Signal(str)
    clipping_support_changed = Signal(bool, str)  # supported, tooltip
    create_enabled_changed = Signal(bool)

    def __init__(
        self,
        context: ConfigContext | None = None,
        listener: ConfigListener | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._context = context
        self._resolver = ConfigurationResolver(notify=self.configuration_changed.emit)
        self._locales = LocaleCatalog()
        self._locale_index = -1
        self._themes = ThemeList()
        self._theme_index = -1
        self._clipping = True
        self._clipping_supported = True
        self._create_enabled = True
        self._current_layout_label = DEFAULT_LAYOUT_LABEL
        self._updates_disabled = False
        if listener is not None:
            self.connect_listener(listener)

    def connect_listener(self, listener: ConfigListener) -> None:
        self.configuration_changed.connect(listener.on_configuration_change)
        self.theme_changed.connect(listener.on_theme_change)
        self.create_requested.connect(listener.on_create)
        self.clipping_changed.connect(listener.on_clipping_change)

    # -- update guard --

    @property
    def updates_disabled(self) -> bool:
        return self._updates_disabled

    @contextmanager
    def updates_suspended(self) -> Iterator[None]:
        previous = self._updates_disabled
        self._updates_disabled = True
        try:
            yield
        finally:
            self._updates_disabled = previous

    # -- configuration --

    @property
    def resolver(self) -> ConfigurationResolver:
        return self._resolver

    @property
    def current_config(self) -> QualifierSet:
        return self._resolver.current_config

    def copy_current_config(self, target: QualifierSet) -> None:
        self._resolver.copy_current_config(target)

    def density(self) -> Density:
        return self._resolver.density()

    def x_dpi(self) -> float:
        return self._resolver.x_dpi()

    def y_dpi(self) -> float:
        return self._resolver.y_dpi()

    def screen_bounds(self) -> tuple[int, int]:
        return self._resolver.screen_bounds()

    @property
    def current_layout_label(self) -> str:
        return self._current_layout_label

    def set_configuration(self, config: QualifierSet) -> None:
        """Show the folder configuration of the edited layout file."""
        with self.updates_suspended():
            self._current_layout_label = config.to_display_string() or DEFAULT_LAYOUT_LABEL
        self.current_layout_changed.emit(self._current_layout_label)

    # -- devices --

    def reload_devices(self, notify: bool = True) -> None:
        devices = list(self._context.device_catalog()) if self._context is not None else []
        self._resolver.reload_devices(devices)
        index = self._device_index()
        logger.debug("loaded %d devices, selected index %d", len(devices), index)
        self.devices_reloaded.emit(self._resolver.device_labels(), index)
        self._after_device_selected(recompute=notify)

    def select_device(self, index: int, recompute: bool = True) -> DeviceSelection | None:
        if self._updates_disabled:
            return None
        selection = self._resolver.select_device(index)
        self.device_selected.emit(self._device_index())
        if isinstance(selection, CustomDeviceRequested):
            self.custom_device_requested.emit()
            return selection
        self._after_device_selected(recompute=recompute)
        return selection

    def select_device_by_name(self, name: str) -> bool:
        index = self._resolver.catalog.index_of(name)
        if index == -1:
            return False
        self.select_device(index)
        return True

    def select_config_variant(self, name: str) -> None:
        if self._updates_disabled:
            return
        self._resolver.select_config_variant(name)
        names = self._resolver.variant_names
        if name in names:
            self.variant_selected.emit(names.index(name))

    def _device_index(self) -> int:
        device = self._resolver.current_device
        return self._resolver.catalog.index_of(device.name if device is not None else None)

    def _after_device_selected(self, *, recompute: bool) -> None:
        names = self._resolver.variant_names
        selected = self._resolver.selected_variant
        index = names.index(selected) if selected in names else -1
        self.variants_reloaded.emit(names, index, self._resolver.variant_selection_enabled)
        if recompute and self._resolver.selected_variant is not None:
            self._resolver.select_config_variant()

    # -- resources --

    def update_from_resources(self) -> None:
        """Rebuild the theme and locale choices from the context's resources."""
        if self._context is None:
            return

        framework_styles = None
        if self._context.framework_resources() is not None:
            framework_styles = style_map(self._context.configured_framework_resources())
        project = self._context.project_resources()
        project_styles = None
        if project is not None:
            project_styles = style_map(self._context.configured_project_resources())

        previous_theme = self.theme()
        config = self._resolver.current_config
        with self.updates_suspended():
            self._themes = ThemeResolver(framework_styles, project_styles).resolve()
            self._theme_index = pick_theme_index(self._themes, self._theme_index)
            self._locales = LocaleCatalog.from_repository(project)
            self._locale_index = self._locales.index_of(config.language, config.region)

        logger.debug(
            "resources rebuilt: %d framework themes, %d project themes, %d locales",
            self._themes.framework_theme_count,
            self._themes.project_theme_count,
            len(self._locales),
        )
        self.themes_reloaded.emit(self._themes.items(), self._theme_index)
        self.locales_reloaded.emit(self._locales.labels(), self._locale_index)
        if self._theme_index != -1 and self.theme() != previous_theme:
            self.theme_changed.emit()

    # -- locale --

    @property
    def locale_catalog(self) -> LocaleCatalog:
        return self._locales

    @property
    def locale_index(self) -> int:
        return self._locale_index

    def select_locale(self, index: int) -> None:
        if self._updates_disabled:
            return
        if index < 0 or index >= len(self._locales):
            return
        self._locale_index = index
        self.locale_selected.emit(index)
        self._resolver.set_locale(self._locales[index])

    # -- theme --

    @property
    def theme_list(self) -> ThemeList:
        return self._themes

    @property
    def theme_index(self) -> int:
        return self._theme_index

    @property
    def theme_selection_enabled(self) -> bool:
        return len(self._themes) > 0

    def theme(self) -> str | None:
        """Selected theme name, or None when no theme is selected."""
        return self._themes.name_at(self._theme_index)

    def is_project_theme(self) -> bool:
        """True when the selection is a project theme; meaningless if theme() is None."""
        return self._themes.is_project_index(self._theme_index)

    def select_theme(self, index: int) -> None:
        if self._updates_disabled:
            return
        if index < 0 or index >= len(self._themes):
            return
        if self._themes.is_separator_index(index):
            index = 0
        self._theme_index = index
        self.theme_selected.emit(index)
        self.theme_changed.emit()

    def select_theme_by_name(self, name: str) -> bool:
        index = self._themes.index_of(name)
        if index == -1:
            return False
        self.select_theme(index)
        return True

    # -- clipping --

    @property
    def clipping(self) -> bool:
        return self._clipping

    @property
    def clipping_supported(self) -> bool:
        return self._clipping_supported

    @property
    def clipping_tooltip(self) -> str:
        return CLIPPING_TOOLTIP if self._clipping_supported else CLIPPING_UNSUPPORTED_TOOLTIP

    def set_clipping(self, enabled: bool) -> None:
        self._clipping = bool(enabled) or not self._clipping_supported
        self.clipping_changed.emit()

    def set_clipping_support(self, supported: bool) -> None:
        self._clipping_supported = supported
        if not supported:
            self._clipping = True
        self.clipping_support_changed.emit(supported, self.clipping_tooltip)

    # -- create --

    @property
    def create_enabled(self) -> bool:
        return self._create_enabled

    def set_create_enabled(self, enabled: bool) -> None:
        self._create_enabled = enabled
        self.create_enabled_changed.emit(enabled)

    def request_create(self) -> None:
        if self._create_enabled:
            self.create_requested.emit()
