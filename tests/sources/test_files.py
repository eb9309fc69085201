"""Tests for directory-backed locale sources."""

from __future__ import annotations

import pytest

from locgen.sources import DirectorySource, SourceError
from tests._fixtures.locale_builder import LocaleBuilder


def test_each_file_is_one_locale_entry(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en.json", {"hello": "Hello {0:user}"})
    locale_builder.yaml("i18n/fr.yml", {"hello": "Bonjour {0:user}", "bye": "Salut"})
    locale_builder.text("i18n/notes.txt", "ignored")
    locale_builder.json("i18n/.hidden.json", {"secret": "x"})

    entries = list(DirectorySource(locale_builder.path("i18n")).entries())

    assert entries == [
        ("en", {"hello": "Hello {0:user}"}),
        ("fr", {"hello": "Bonjour {0:user}", "bye": "Salut"}),
    ]


def test_locale_directories_nest_files_by_name(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en/common.json", {"ok": "OK"})
    locale_builder.yaml("i18n/en/admin/users.yaml", {"ban": "Ban {0:user}"})

    entries = list(DirectorySource(locale_builder.path("i18n")).entries())

    assert entries == [
        ("en", {"admin": {"users": {"ban": "Ban {0:user}"}}, "common": {"ok": "OK"}}),
    ]


def test_shape_merges_all_entries(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en.json", {"a": "A", "b": "B"})
    locale_builder.json("i18n/fr.json", {"c": "C", "b": "B {0}"})

    shape = DirectorySource(locale_builder.path("i18n")).shape()

    assert shape == {"a": "A", "b": "B {0}", "c": "C"}


def test_empty_files_contribute_empty_trees(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("i18n/en.yml", "")

    assert list(DirectorySource(locale_builder.path("i18n")).entries()) == [("en", {})]


def test_non_string_values_are_dropped(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en.json", {"count": 3, "flag": None, "ok": "OK"})

    assert list(DirectorySource(locale_builder.path("i18n")).entries()) == [("en", {"ok": "OK"})]


def test_missing_directory_raises(locale_builder: LocaleBuilder) -> None:
    source = DirectorySource(locale_builder.path("missing"))

    with pytest.raises(SourceError, match="not found"):
        list(source.entries())


def test_non_mapping_root_raises(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en.json", ["not", "a", "mapping"])  # type: ignore[arg-type]

    with pytest.raises(SourceError, match="mapping"):
        list(DirectorySource(locale_builder.path("i18n")).entries())


def test_invalid_json_raises(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("i18n/en.json", "{not json")

    with pytest.raises(SourceError, match="Failed to parse"):
        list(DirectorySource(locale_builder.path("i18n")).entries())


def test_undecodable_file_raises_source_error(locale_builder: LocaleBuilder) -> None:
    locale_builder.raw("i18n/en.json", b'{"hello": "\xff\xfe"}')

    with pytest.raises(SourceError, match="Failed to read"):
        list(DirectorySource(locale_builder.path("i18n")).entries())
