"""Configuration bar widget: device, config, locale and theme choosers."""

from __future__ import annotations

from typing import Sequence

from PySide6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from layoutconfig.ui.configuration_controller import ConfigurationController
from layoutconfig.ui.toggles import CustomToggle, create_toggle_button


class ConfigurationBar(QWidget):
    """Two-row bar bound to a ConfigurationController."""

    def __init__(
        self,
        controller: ConfigurationController,
        custom_toggles: Sequence[CustomToggle] = (),
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._setup_ui(custom_toggles)
        self._connect_controller()

    def _setup_ui(self, custom_toggles: Sequence[CustomToggle]) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # Current layout row
        top_row = QHBoxLayout()
        top_row.setContentsMargins(0, 0, 0, 0)
        self._current_layout_label = QLabel(self._controller.current_layout_label)
        self._current_layout_label.setObjectName("StatusDetail")
        top_row.addWidget(QLabel("Current configuration:"))
        top_row.addWidget(self._current_layout_label, 1)

        for toggle in custom_toggles:
            top_row.addWidget(create_toggle_button(parent=self, toggle=toggle))

        self._clipping_button = create_toggle_button(
            parent=self,
            toggle=CustomToggle(
                label="Clip",
                tooltip=self._controller.clipping_tooltip,
                on_selected=self._controller.set_clipping,
                checked=self._controller.clipping,
            ),
        )
        top_row.addWidget(self._clipping_button)

        self._create_btn = QPushButton("Create...")
        self._create_btn.setToolTip("Create a new layout folder for the current configuration")
        self._create_btn.setEnabled(self._controller.create_enabled)
        self._create_btn.clicked.connect(self._controller.request_create)
        top_row.addWidget(self._create_btn)
        layout.addLayout(top_row)

        # Choosers row
        chooser_row = QHBoxLayout()
        chooser_row.setContentsMargins(0, 0, 0, 0)
        self._device_combo = QComboBox()
        self._device_combo.setMinimumContentsLength(14)
        self._config_combo = QComboBox()
        self._config_combo.setMinimumContentsLength(14)
        self._locale_combo = QComboBox()
        self._locale_combo.setMinimumContentsLength(8)
        self._theme_combo = QComboBox()
        self._theme_combo.setMinimumContentsLength(20)
        self._theme_combo.setEnabled(False)

        chooser_row.addWidget(QLabel("Devices:"))
        chooser_row.addWidget(self._device_combo, 1)
        chooser_row.addWidget(QLabel("Config:"))
        chooser_row.addWidget(self._config_combo, 1)
        chooser_row.addWidget(QLabel("Locale:"))
        chooser_row.addWidget(self._locale_combo)
        chooser_row.addWidget(self._theme_combo, 1)
        layout.addLayout(chooser_row)

        # activated fires for user picks only, including re-picking the shown item
        self._device_combo.activated.connect(self._controller.select_device)
        self._config_combo.textActivated.connect(self._on_config_text_activated)
        self._locale_combo.activated.connect(self._controller.select_locale)
        self._theme_combo.activated.connect(self._controller.select_theme)

    def _connect_controller(self) -> None:
        c = self._controller
        c.devices_reloaded.connect(self._on_devices_reloaded)
        c.variants_reloaded.connect(self._on_variants_reloaded)
        c.locales_reloaded.connect(self._on_locales_reloaded)
        c.themes_reloaded.connect(self._on_themes_reloaded)
        c.device_selected.connect(lambda index: self._select_index(self._device_combo, index))
        c.variant_selected.connect(lambda index: self._select_index(self._config_combo, index))
        c.locale_selected.connect(lambda index: self._select_index(self._locale_combo, index))
        c.theme_selected.connect(lambda index: self._select_index(self._theme_combo, index))
        c.current_layout_changed.connect(self._current_layout_label.setText)
        c.clipping_changed.connect(self._on_clipping_changed)
        c.clipping_support_changed.connect(self._on_clipping_support_changed)
        c.create_enabled_changed.connect(self._create_btn.setEnabled)

    def _on_config_text_activated(self, name: str) -> None:
        if name:
            self._controller.select_config_variant(name)

    def _refill(self, combo: QComboBox, items: list[str], index: int) -> None:
        with self._controller.updates_suspended():
            combo.clear()
            combo.addItems(items)
            combo.setCurrentIndex(index)

    def _on_devices_reloaded(self, labels: list[str], index: int) -> None:
        self._refill(self._device_combo, labels, index)

    def _on_variants_reloaded(self, names: list[str], index: int, enabled: bool) -> None:
        self._refill(self._config_combo, names, index)
        self._config_combo.setEnabled(enabled)

    def _on_locales_reloaded(self, labels: list[str], index: int) -> None:
        self._refill(self._locale_combo, labels, index)

    def _on_themes_reloaded(self, items: list[str], index: int) -> None:
        self._refill(self._theme_combo, items, index)
        self._theme_combo.setEnabled(self._controller.theme_selection_enabled)

    def _select_index(self, combo: QComboBox, index: int) -> None:
        with self._controller.updates_suspended():
            combo.setCurrentIndex(index)

    def _on_clipping_changed(self) -> None:
        self._clipping_button.blockSignals(True)
        self._clipping_button.setChecked(self._controller.clipping)
        self._clipping_button.blockSignals(False)

    def _on_clipping_support_changed(self, supported: bool, tooltip: str) -> None:
        self._clipping_button.setEnabled(supported)
        self._clipping_button.setToolTip(tooltip)
        self._on_clipping_changed()
