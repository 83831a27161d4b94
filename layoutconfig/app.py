"""QApplication bootstrap."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QMessageBox, QVBoxLayout, QWidget

from layoutconfig.config.settings import AppSettings
from layoutconfig.core.device_registry import DeviceRegistry
from layoutconfig.core.resource_snapshot import (
    ResourceSnapshot,
    ResourceSnapshotError,
    SnapshotContext,
    load_resource_snapshot,
)
from layoutconfig.errors import classify_exception, format_error_for_user
from layoutconfig.runtime_paths import builtin_devices_path, is_frozen, package_root
from layoutconfig.ui.configuration_bar import ConfigurationBar
from layoutconfig.ui.configuration_controller import ConfigurationController


def _configure_startup_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("layoutconfig.startup")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "startup.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


class PreviewWindow(QMainWindow):
    """Hosts the configuration bar and shows the resolved configuration."""

    def __init__(
        self,
        settings: AppSettings,
        controller: ConfigurationController,
        registry: DeviceRegistry,
        logger: logging.Logger,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._controller = controller
        self._registry = registry
        self._logger = logger
        self.setWindowTitle("Layout Configuration")
        self.setMinimumSize(720, 240)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        self._bar = ConfigurationBar(controller)
        layout.addWidget(self._bar)
        self._summary = QLabel("")
        self._summary.setWordWrap(True)
        layout.addWidget(self._summary, 1)

        controller.configuration_changed.connect(self._on_configuration_changed)
        controller.theme_changed.connect(self._on_theme_changed)
        controller.clipping_changed.connect(self._on_clipping_changed)
        controller.custom_device_requested.connect(self._on_custom_device_requested)
        self._restore_state()

    def _on_configuration_changed(self) -> None:
        resolver = self._controller.resolver
        if resolver.current_device is not None:
            self._settings.device_name = resolver.current_device.name
        self._settings.device_config_name = resolver.selected_variant or ""
        index = self._controller.locale_index
        if index != -1:
            self._settings.locale_label = self._controller.locale_catalog[index].label
        self._refresh_summary()

    def _on_theme_changed(self) -> None:
        self._settings.theme_name = self._controller.theme() or ""
        self._refresh_summary()

    def _on_clipping_changed(self) -> None:
        self._settings.clipping = self._controller.clipping
        self._refresh_summary()

    def _on_custom_device_requested(self) -> None:
        path = self._registry.ensure_user_file()
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(path)))
        QMessageBox.information(
            self,
            "Custom Devices",
            f"Add your devices to:\n{path}\n\nPress OK to reload the device list.",
        )
        self._registry.reload()
        for message in self._registry.load_errors():
            self._logger.warning("device catalog: %s", message)
        self._controller.reload_devices(notify=True)

    def _refresh_summary(self) -> None:
        c = self._controller
        width, height = c.screen_bounds()
        theme = c.theme() or "(none)"
        owner = "project" if c.is_project_theme() else "framework"
        self._summary.setText(
            f"Qualifiers: {c.current_config.to_display_string() or '(default)'}\n"
            f"Screen: {width}x{height}  Density: {c.density().folder_value}  "
            f"DPI: {c.x_dpi():g} x {c.y_dpi():g}\n"
            f"Theme: {theme} ({owner})  Clipping: {'on' if c.clipping else 'off'}"
        )

    def _restore_state(self) -> None:
        geo = self._settings.window_geometry
        if geo:
            self.restoreGeometry(geo)

    def closeEvent(self, event) -> None:
        self._settings.window_geometry = self.saveGeometry()
        super().closeEvent(event)


def _load_snapshot(path_text: str, logger: logging.Logger) -> ResourceSnapshot:
    if not path_text:
        return ResourceSnapshot()
    path = Path(path_text)
    try:
        return load_resource_snapshot(path)
    except ResourceSnapshotError as exc:
        error = classify_exception(exc, path)
        logger.warning("resource snapshot rejected: %s", error.to_dict())
        QMessageBox.warning(None, "Resources", format_error_for_user(error))
        return ResourceSnapshot()


@dataclass(frozen=True, slots=True)
class SavedSelection:
    """The selection persisted by the previous session."""

    device_name: str = ""
    config_name: str = ""
    locale_label: str = ""
    theme_name: str = ""
    clipping: bool = True

    @classmethod
    def from_settings(cls, settings: AppSettings) -> SavedSelection:
        return cls(
            device_name=settings.device_name,
            config_name=settings.device_config_name,
            locale_label=settings.locale_label,
            theme_name=settings.theme_name,
            clipping=settings.clipping,
        )


def _restore_selection(controller: ConfigurationController, saved: SavedSelection) -> None:
    if saved.device_name:
        controller.select_device_by_name(saved.device_name)
    if saved.config_name in controller.resolver.variant_names:
        controller.select_config_variant(saved.config_name)
    if saved.locale_label:
        index = controller.locale_catalog.index_of_label(saved.locale_label)
        if index != -1:
            controller.select_locale(index)
    if saved.theme_name:
        controller.select_theme_by_name(saved.theme_name)
    controller.set_clipping(saved.clipping)


def start_session(
    settings: AppSettings,
    registry: DeviceRegistry,
    context: SnapshotContext,
    logger: logging.Logger,
) -> PreviewWindow:
    """Build the window and restore the previous selection into it."""
    # Populating the bar emits changes that the window persists.
    saved = SavedSelection.from_settings(settings)
    controller = ConfigurationController(context)
    window = PreviewWindow(settings, controller, registry, logger)
    controller.reload_devices(notify=True)
    controller.update_from_resources()
    _restore_selection(controller, saved)
    return window


def run_app() -> int:
    """Initialize and run the application."""
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("LayoutConfig")
    app.setOrganizationName("LayoutConfig")
    settings = AppSettings()
    logger = _configure_startup_logger(settings)
    logger.info("startup mode frozen=%s package_root=%s", is_frozen(), package_root())

    builtin_devices = builtin_devices_path()
    if not builtin_devices.exists():
        logger.warning("builtin device catalog missing at %s", builtin_devices)

    registry = DeviceRegistry(builtin_path=builtin_devices, user_path=settings.user_devices_path)
    registry.reload()
    errors = registry.load_errors()
    if errors:
        logger.warning("device load warnings: %s", " | ".join(errors[:6]))

    snapshot_arg = sys.argv[1] if len(sys.argv) > 1 else settings.resource_snapshot_path
    snapshot = _load_snapshot(snapshot_arg, logger)
    if len(sys.argv) > 1:
        settings.resource_snapshot_path = snapshot_arg
    context = SnapshotContext(snapshot, registry)
    window = start_session(settings, registry, context, logger)
    window.show()

    exit_code = app.exec()
    return exit_code
