"""Configuration resolution engine exports."""

from layoutconfig.core.devices import CUSTOM_DEVICE_LABEL, Device, DeviceCatalog
from layoutconfig.core.locales import LocaleCatalog, LocaleEntry
from layoutconfig.core.qualifiers import Density, QualifierKind, QualifierSet, ScreenOrientation
from layoutconfig.core.resolver import ConfigurationResolver, CustomDeviceRequested, DeviceSelected
from layoutconfig.core.themes import THEME_SEPARATOR, ThemeList, ThemeResolver

__all__ = [
    "CUSTOM_DEVICE_LABEL",
    "ConfigurationResolver",
    "CustomDeviceRequested",
    "Density",
    "Device",
    "DeviceCatalog",
    "DeviceSelected",
    "LocaleCatalog",
    "LocaleEntry",
    "QualifierKind",
    "QualifierSet",
    "ScreenOrientation",
    "THEME_SEPARATOR",
    "ThemeList",
    "ThemeResolver",
]
