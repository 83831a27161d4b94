"""Typed resource qualifiers and the qualifier set that groups them."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Iterable, Iterator, Mapping

_LANGUAGE_RE = re.compile(r"^(?:[a-z]{2}|__)$")
_REGION_RE = re.compile(r"^r?([A-Z]{2}|__)$")
_VERSION_RE = re.compile(r"^v?(\d+)$")
_DIMENSION_RE = re.compile(r"^(\d+)x(\d+)$")
_MCC_RE = re.compile(r"^(?:mcc)?(\d{3})$")
_MNC_RE = re.compile(r"^(?:mnc)?(\d{1,3})$")


class QualifierKind(Enum):
    """Qualifier dimensions, declared in resource-folder order."""

    COUNTRY_CODE = "mcc"
    NETWORK_CODE = "mnc"
    LANGUAGE = "language"
    REGION = "region"
    SCREEN_SIZE = "screen_size"
    SCREEN_RATIO = "screen_ratio"
    SCREEN_ORIENTATION = "orientation"
    PIXEL_DENSITY = "density"
    TOUCH_TYPE = "touch"
    KEYBOARD_STATE = "keyboard"
    TEXT_INPUT_METHOD = "text_input"
    NAVIGATION_METHOD = "navigation"
    SCREEN_DIMENSION = "dimension"
    VERSION = "version"


_KIND_ORDER: dict[QualifierKind, int] = {kind: index for index, kind in enumerate(QualifierKind)}


class _FolderValueEnum(Enum):
    """Enum whose value is the token used in resource folder names."""

    @property
    def folder_value(self) -> str:
        return self.value

    @classmethod
    def from_folder_value(cls, text: str):
        for member in cls:
            if member.value == text:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__} value {text!r}; expected one of: {allowed}")


class Density(_FolderValueEnum):
    LOW = "ldpi"
    MEDIUM = "mdpi"
    HIGH = "hdpi"
    NODPI = "nodpi"

    @property
    def dpi_value(self) -> int:
        return _DENSITY_DPI[self]


_DENSITY_DPI: dict[Density, int] = {
    Density.LOW: 120,
    Density.MEDIUM: 160,
    Density.HIGH: 240,
    Density.NODPI: 0,
}


class ScreenOrientation(_FolderValueEnum):
    PORTRAIT = "port"
    LANDSCAPE = "land"
    SQUARE = "square"


class ScreenSize(_FolderValueEnum):
    SMALL = "small"
    NORMAL = "normal"
    LARGE = "large"


class ScreenRatio(_FolderValueEnum):
    LONG = "long"
    NOTLONG = "notlong"


class TouchScreenType(_FolderValueEnum):
    NOTOUCH = "notouch"
    STYLUS = "stylus"
    FINGER = "finger"


class KeyboardState(_FolderValueEnum):
    EXPOSED = "keysexposed"
    HIDDEN = "keyshidden"
    SOFT = "keyssoft"


class TextInputMethod(_FolderValueEnum):
    NOKEY = "nokeys"
    QWERTY = "qwerty"
    TWELVEKEYS = "12key"


class NavigationMethod(_FolderValueEnum):
    NONAV = "nonav"
    DPAD = "dpad"
    TRACKBALL = "trackball"
    WHEEL = "wheel"


# -- qualifiers --


@dataclass(frozen=True, slots=True)
class ResourceQualifier(ABC):
    """One value of one qualifier kind."""

    kind: ClassVar[QualifierKind]

    @abstractmethod
    def folder_segment(self) -> str:
        """Text of this qualifier in a resource folder name."""


@dataclass(frozen=True, slots=True)
class CountryCodeQualifier(ResourceQualifier):
    code: int
    kind: ClassVar[QualifierKind] = QualifierKind.COUNTRY_CODE

    def folder_segment(self) -> str:
        return f"mcc{self.code}"


@dataclass(frozen=True, slots=True)
class NetworkCodeQualifier(ResourceQualifier):
    code: int
    kind: ClassVar[QualifierKind] = QualifierKind.NETWORK_CODE

    def folder_segment(self) -> str:
        return f"mnc{self.code}"


@dataclass(frozen=True, slots=True)
class LanguageQualifier(ResourceQualifier):
    value: str
    kind: ClassVar[QualifierKind] = QualifierKind.LANGUAGE

    def folder_segment(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RegionQualifier(ResourceQualifier):
    value: str
    kind: ClassVar[QualifierKind] = QualifierKind.REGION

    def folder_segment(self) -> str:
        return f"r{self.value}"


@dataclass(frozen=True, slots=True)
class ScreenSizeQualifier(ResourceQualifier):
    value: ScreenSize
    kind: ClassVar[QualifierKind] = QualifierKind.SCREEN_SIZE

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class ScreenRatioQualifier(ResourceQualifier):
    value: ScreenRatio
    kind: ClassVar[QualifierKind] = QualifierKind.SCREEN_RATIO

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class ScreenOrientationQualifier(ResourceQualifier):
    value: ScreenOrientation
    kind: ClassVar[QualifierKind] = QualifierKind.SCREEN_ORIENTATION

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class PixelDensityQualifier(ResourceQualifier):
    value: Density
    kind: ClassVar[QualifierKind] = QualifierKind.PIXEL_DENSITY

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class TouchTypeQualifier(ResourceQualifier):
    value: TouchScreenType
    kind: ClassVar[QualifierKind] = QualifierKind.TOUCH_TYPE

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class KeyboardStateQualifier(ResourceQualifier):
    value: KeyboardState
    kind: ClassVar[QualifierKind] = QualifierKind.KEYBOARD_STATE

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class TextInputMethodQualifier(ResourceQualifier):
    value: TextInputMethod
    kind: ClassVar[QualifierKind] = QualifierKind.TEXT_INPUT_METHOD

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class NavigationMethodQualifier(ResourceQualifier):
    value: NavigationMethod
    kind: ClassVar[QualifierKind] = QualifierKind.NAVIGATION_METHOD

    def folder_segment(self) -> str:
        return self.value.folder_value


@dataclass(frozen=True, slots=True)
class ScreenDimensionQualifier(ResourceQualifier):
    """Screen size in pixels; ``value1`` is always the larger side."""

    value1: int
    value2: int
    kind: ClassVar[QualifierKind] = QualifierKind.SCREEN_DIMENSION

    def __post_init__(self) -> None:
        if self.value1 < self.value2:
            larger, smaller = self.value2, self.value1
            object.__setattr__(self, "value1", larger)
            object.__setattr__(self, "value2", smaller)

    def folder_segment(self) -> str:
        return f"{self.value1}x{self.value2}"


@dataclass(frozen=True, slots=True)
class VersionQualifier(ResourceQualifier):
    api_level: int
    kind: ClassVar[QualifierKind] = QualifierKind.VERSION

    def folder_segment(self) -> str:
        return f"v{self.api_level}"


# -- parsing --


def _match(pattern: re.Pattern[str], text: str, kind: QualifierKind) -> re.Match[str]:
    match = pattern.match(text)
    if match is None:
        raise ValueError(f"Invalid {kind.value} qualifier value {text!r}")
    return match


def _parse_dimension(text: str) -> ScreenDimensionQualifier:
    match = _match(_DIMENSION_RE, text, QualifierKind.SCREEN_DIMENSION)
    return ScreenDimensionQualifier(int(match.group(1)), int(match.group(2)))


_PARSERS: dict[QualifierKind, Callable[[str], ResourceQualifier]] = {
    QualifierKind.COUNTRY_CODE: lambda text: CountryCodeQualifier(
        int(_match(_MCC_RE, text, QualifierKind.COUNTRY_CODE).group(1))
    ),
    QualifierKind.NETWORK_CODE: lambda text: NetworkCodeQualifier(
        int(_match(_MNC_RE, text, QualifierKind.NETWORK_CODE).group(1))
    ),
    QualifierKind.LANGUAGE: lambda text: LanguageQualifier(
        _match(_LANGUAGE_RE, text, QualifierKind.LANGUAGE).group(0)
    ),
    QualifierKind.REGION: lambda text: RegionQualifier(
        _match(_REGION_RE, text, QualifierKind.REGION).group(1)
    ),
    QualifierKind.SCREEN_SIZE: lambda text: ScreenSizeQualifier(ScreenSize.from_folder_value(text)),
    QualifierKind.SCREEN_RATIO: lambda text: ScreenRatioQualifier(ScreenRatio.from_folder_value(text)),
    QualifierKind.SCREEN_ORIENTATION: lambda text: ScreenOrientationQualifier(
        ScreenOrientation.from_folder_value(text)
    ),
    QualifierKind.PIXEL_DENSITY: lambda text: PixelDensityQualifier(Density.from_folder_value(text)),
    QualifierKind.TOUCH_TYPE: lambda text: TouchTypeQualifier(TouchScreenType.from_folder_value(text)),
    QualifierKind.KEYBOARD_STATE: lambda text: KeyboardStateQualifier(
        KeyboardState.from_folder_value(text)
    ),
    QualifierKind.TEXT_INPUT_METHOD: lambda text: TextInputMethodQualifier(
        TextInputMethod.from_folder_value(text)
    ),
    QualifierKind.NAVIGATION_METHOD: lambda text: NavigationMethodQualifier(
        NavigationMethod.from_folder_value(text)
    ),
    QualifierKind.SCREEN_DIMENSION: _parse_dimension,
    QualifierKind.VERSION: lambda text: VersionQualifier(
        int(_match(_VERSION_RE, text, QualifierKind.VERSION).group(1))
    ),
}


def parse_qualifier(kind: QualifierKind, text: object) -> ResourceQualifier:
    """Build a qualifier of ``kind`` from its folder-name text (``"land"``, ``"v4"``, ...)."""
    if isinstance(text, bool) or not isinstance(text, (str, int)):
        raise ValueError(f"{kind.value} qualifier value must be a string or integer")
    return _PARSERS[kind](str(text).strip())


def kind_for_key(key: str) -> QualifierKind:
    try:
        return QualifierKind(key)
    except ValueError:
        allowed = ", ".join(kind.value for kind in QualifierKind)
        raise ValueError(f"Unknown qualifier key {key!r}; expected one of: {allowed}") from None


# -- qualifier set --


class QualifierSet:
    """Mapping of qualifier kind to at most one qualifier.

    This is the resolved folder configuration: the set of qualifiers that
    describes one concrete device/locale context. Setting a qualifier always
    replaces any previous qualifier of the same kind.
    """

    __slots__ = ("_qualifiers",)

    def __init__(self, qualifiers: Iterable[ResourceQualifier] = ()) -> None:
        self._qualifiers: dict[QualifierKind, ResourceQualifier] = {}
        for qualifier in qualifiers:
            self.add_qualifier(qualifier)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> QualifierSet:
        """Build a set from ``{kind key: folder text}`` pairs, e.g. ``{"density": "hdpi"}``."""
        result = cls()
        for key, text in data.items():
            kind = kind_for_key(key)
            result.set(kind, parse_qualifier(kind, text))
        return result

    def get(self, kind: QualifierKind) -> ResourceQualifier | None:
        return self._qualifiers.get(kind)

    def set(self, kind: QualifierKind, qualifier: ResourceQualifier | None) -> None:
        if qualifier is None:
            self._qualifiers.pop(kind, None)
            return
        if qualifier.kind is not kind:
            raise ValueError(f"Cannot store a {qualifier.kind.value} qualifier as {kind.value}")
        self._qualifiers[kind] = qualifier

    def add_qualifier(self, qualifier: ResourceQualifier) -> None:
        self.set(qualifier.kind, qualifier)

    def replace_all(self, other: QualifierSet) -> None:
        self._qualifiers = dict(other._qualifiers)

    def copy(self) -> QualifierSet:
        result = QualifierSet()
        result.replace_all(self)
        return result

    def is_default(self) -> bool:
        return not self._qualifiers

    def to_display_string(self) -> str | None:
        """Folder-style qualifier string such as ``en-rUS-land-hdpi``, or None when empty."""
        if not self._qualifiers:
            return None
        return "-".join(qualifier.folder_segment() for qualifier in self)

    # -- typed accessors --

    @property
    def language(self) -> LanguageQualifier | None:
        return self._qualifiers.get(QualifierKind.LANGUAGE)

    @property
    def region(self) -> RegionQualifier | None:
        return self._qualifiers.get(QualifierKind.REGION)

    @property
    def version(self) -> VersionQualifier | None:
        return self._qualifiers.get(QualifierKind.VERSION)

    @property
    def pixel_density(self) -> PixelDensityQualifier | None:
        return self._qualifiers.get(QualifierKind.PIXEL_DENSITY)

    @property
    def screen_orientation(self) -> ScreenOrientationQualifier | None:
        return self._qualifiers.get(QualifierKind.SCREEN_ORIENTATION)

    @property
    def screen_dimension(self) -> ScreenDimensionQualifier | None:
        return self._qualifiers.get(QualifierKind.SCREEN_DIMENSION)

    # -- container protocol --

    def __iter__(self) -> Iterator[ResourceQualifier]:
        for kind in sorted(self._qualifiers, key=_KIND_ORDER.__getitem__):
            yield self._qualifiers[kind]

    def __len__(self) -> int:
        return len(self._qualifiers)

    def __contains__(self, kind: object) -> bool:
        return kind in self._qualifiers

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QualifierSet):
            return NotImplemented
        return self._qualifiers == other._qualifiers

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"QualifierSet({self.to_display_string() or '(default)'})"
