"""Tests for ConfigurationBar combos following the controller."""

from __future__ import annotations

import pytest

from layoutconfig.core.qualifiers import ScreenOrientation
from layoutconfig.ui.configuration_bar import ConfigurationBar
from layoutconfig.ui.configuration_controller import ConfigurationController


@pytest.fixture
def controller(snapshot_context) -> ConfigurationController:
    return ConfigurationController(snapshot_context)


@pytest.fixture
def bar(qapp, controller) -> ConfigurationBar:
    bar = ConfigurationBar(controller)
    controller.reload_devices()
    controller.update_from_resources()
    return bar


def _combo_texts(bar: ConfigurationBar) -> tuple[str, str, str, str]:
    return (
        bar._device_combo.currentText(),
        bar._config_combo.currentText(),
        bar._locale_combo.currentText(),
        bar._theme_combo.currentText(),
    )


class TestControllerToCombos:
    def test_reload_fills_combos(self, bar) -> None:
        assert bar._device_combo.count() == 4
        assert bar._device_combo.itemText(3) == "Custom..."
        assert _combo_texts(bar) == ("ADP1", "Portrait, closed", "", "Theme")
        assert bar._locale_combo.count() == 4

    def test_programmatic_selection_moves_combos(self, bar, controller) -> None:
        controller.select_device_by_name("Nexus One")
        controller.select_config_variant("Landscape")
        controller.select_locale(2)
        controller.select_theme_by_name("MyTheme")

        assert _combo_texts(bar) == ("Nexus One", "Landscape", "fr", "MyTheme")

    def test_clipping_button_follows_controller(self, bar, controller) -> None:
        controller.set_clipping(False)
        assert bar._clipping_button.isChecked() is False

        controller.set_clipping_support(False)

        assert bar._clipping_button.isChecked() is True
        assert bar._clipping_button.isEnabled() is False


class TestUserPicks:
    def test_activated_device_selects_it(self, bar, controller) -> None:
        bar._device_combo.activated.emit(1)

        assert controller.resolver.current_device.name == "Nexus One"
        assert bar._config_combo.currentText() == "Portrait"

    def test_repicking_shown_device_resets_variant(self, bar, controller) -> None:
        controller.select_device_by_name("Nexus One")
        controller.select_config_variant("Landscape")

        bar._device_combo.activated.emit(bar._device_combo.currentIndex())

        assert controller.resolver.selected_variant == "Portrait"
        assert bar._config_combo.currentText() == "Portrait"
        orientation = controller.current_config.screen_orientation
        assert orientation.value is ScreenOrientation.PORTRAIT

    def test_custom_slot_snaps_combo_back(self, bar, controller) -> None:
        requested: list[bool] = []
        controller.custom_device_requested.connect(lambda: requested.append(True))
        bar._device_combo.setCurrentIndex(3)

        bar._device_combo.activated.emit(3)

        assert requested == [True]
        assert bar._device_combo.currentText() == "ADP1"

    def test_separator_pick_snaps_to_first_theme(self, bar, controller) -> None:
        bar._theme_combo.setCurrentIndex(2)

        bar._theme_combo.activated.emit(2)

        assert controller.theme() == "Theme"
        assert bar._theme_combo.currentIndex() == 0

    def test_config_text_selects_variant(self, bar, controller) -> None:
        bar._config_combo.textActivated.emit("Landscape, open")

        assert controller.resolver.selected_variant == "Landscape, open"
        assert bar._config_combo.currentText() == "Landscape, open"
