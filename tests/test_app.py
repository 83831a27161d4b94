"""Tests for session startup and selection persistence."""

from __future__ import annotations

import logging

import pytest

from layoutconfig.app import SavedSelection, start_session

logger = logging.getLogger(__name__)


@pytest.fixture
def window_factory(qapp, settings, registry, snapshot_context):
    windows = []

    def _start():
        window = start_session(settings, registry, snapshot_context, logger)
        windows.append(window)
        return window

    yield _start
    for window in windows:
        window.deleteLater()


def _save_selection(settings) -> None:
    settings.device_name = "Nexus One"
    settings.device_config_name = "Landscape"
    settings.locale_label = "fr"
    settings.theme_name = "MyTheme"
    settings.clipping = False


def test_saved_selection_reads_settings(settings) -> None:
    _save_selection(settings)

    assert SavedSelection.from_settings(settings) == SavedSelection(
        device_name="Nexus One",
        config_name="Landscape",
        locale_label="fr",
        theme_name="MyTheme",
        clipping=False,
    )


def test_start_restores_previous_selection(settings, window_factory) -> None:
    _save_selection(settings)

    window = window_factory()

    controller = window._controller
    assert controller.resolver.current_device.name == "Nexus One"
    assert controller.resolver.selected_variant == "Landscape"
    assert controller.locale_catalog[controller.locale_index].label == "fr"
    assert controller.theme() == "MyTheme"
    assert controller.clipping is False


def test_start_keeps_persisted_selection(settings, window_factory) -> None:
    _save_selection(settings)

    window_factory()

    assert (
        settings.device_name,
        settings.device_config_name,
        settings.locale_label,
        settings.theme_name,
        settings.clipping,
    ) == ("Nexus One", "Landscape", "fr", "MyTheme", False)


def test_start_shows_restored_selection_in_bar(settings, window_factory) -> None:
    _save_selection(settings)

    bar = window_factory()._bar

    assert bar._device_combo.currentText() == "Nexus One"
    assert bar._config_combo.currentText() == "Landscape"
    assert bar._locale_combo.currentText() == "fr"
    assert bar._theme_combo.currentText() == "MyTheme"


def test_fresh_start_uses_and_persists_defaults(settings, window_factory) -> None:
    window = window_factory()

    assert window._controller.resolver.current_device.name == "ADP1"
    assert settings.device_name == "ADP1"
    assert settings.device_config_name == "Portrait, closed"
    assert settings.theme_name == "Theme"


def test_unknown_saved_device_falls_back_to_first(settings, window_factory) -> None:
    settings.device_name = "Retired phone"
    settings.device_config_name = "Landscape"

    window = window_factory()

    assert window._controller.resolver.current_device.name == "ADP1"
    assert window._controller.resolver.selected_variant == "Portrait, closed"


def test_later_changes_are_persisted(settings, window_factory) -> None:
    window = window_factory()

    window._controller.select_device_by_name("QVGA")
    window._controller.select_theme_by_name("Theme.Light")

    assert settings.device_name == "QVGA"
    assert settings.device_config_name == "Portrait"
    assert settings.theme_name == "Theme.Light"
