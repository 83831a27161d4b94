"""Selectable locale list built from a project's languages and regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from layoutconfig.core.qualifiers import LanguageQualifier, RegionQualifier
from layoutconfig.core.resources import ResourceRepository

FAKE_LOCALE_VALUE = "__"
OTHER_LOCALE_LABEL = "Other"
ANY_LOCALE_LABEL = "Any"


@dataclass(frozen=True, slots=True)
class LocaleEntry:
    """A language with an optional region, as shown in the locale chooser."""

    label: str
    language: LanguageQualifier
    region: RegionQualifier | None = None

    @property
    def is_sentinel(self) -> bool:
        return self.language.value == FAKE_LOCALE_VALUE


def locale_label(language: str, region: str | None = None) -> str:
    if region is None:
        return language
    return f"{language}_{region}"


def sentinel_entry(has_locales: bool) -> LocaleEntry:
    """Entry for a locale absent from the project, used to test default resources."""
    return LocaleEntry(
        label=OTHER_LOCALE_LABEL if has_locales else ANY_LOCALE_LABEL,
        language=LanguageQualifier(FAKE_LOCALE_VALUE),
        region=RegionQualifier(FAKE_LOCALE_VALUE),
    )


class LocaleCatalog:
    """Ordered locale entries; the last entry is always the sentinel."""

    def __init__(self, entries: Iterable[LocaleEntry] | None = None) -> None:
        self._entries: list[LocaleEntry] = list(entries) if entries is not None else [sentinel_entry(False)]

    @classmethod
    def build(cls, languages: Mapping[str, Iterable[str]] | None) -> LocaleCatalog:
        entries: list[LocaleEntry] = []
        for language in sorted(languages or {}):
            language_qualifier = LanguageQualifier(language)
            entries.append(LocaleEntry(label=language, language=language_qualifier))
            for region in sorted(languages[language] or ()):
                entries.append(
                    LocaleEntry(
                        label=locale_label(language, region),
                        language=language_qualifier,
                        region=RegionQualifier(region),
                    )
                )
        entries.append(sentinel_entry(bool(entries)))
        return cls(entries)

    @classmethod
    def from_repository(cls, repository: ResourceRepository | None) -> LocaleCatalog:
        if repository is None:
            return cls.build(None)
        languages = {language: list(repository.regions(language)) for language in repository.languages()}
        return cls.build(languages)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LocaleEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> LocaleEntry:
        return self._entries[index]

    def labels(self) -> list[str]:
        return [entry.label for entry in self._entries]

    def index_of(self, language: LanguageQualifier | None, region: RegionQualifier | None) -> int:
        for index, entry in enumerate(self._entries):
            if entry.language == language and entry.region == region:
                return index
        return -1

    def index_of_label(self, label: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.label == label:
                return index
        return -1
