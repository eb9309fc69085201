"""Tests for module-backed locale sources and source resolution."""

from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

from locgen.sources import (
    CatalogSource,
    DirectorySource,
    MappingSource,
    SourceError,
    resolve_source,
    resolve_sources,
    template_from_callable,
)
from tests._fixtures.locale_builder import LocaleBuilder

CATALOG_MODULE = """
from types import SimpleNamespace


class Content:
    def __init__(self, data):
        self.data = data


class Locale:
    def __init__(self, *trees):
        self.contents = {index: Content(tree) for index, tree in enumerate(trees)}


class Catalog:
    def __init__(self, locales):
        self.locales = locales


web = Catalog({
    "en": Locale({"hello": "Hello {0:user}"}, {"menu": {"open": "Open"}}),
    "fr": Locale({"bye": "Salut"}),
})
clients = [Catalog({"en": {"admin": "Admin {0} {1}"}})]
_private = Catalog({"en": {"hidden": "x"}})
helper = SimpleNamespace(name="not a catalog")
"""


def test_module_catalogs_are_discovered_in_order(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("catalogs.py", CATALOG_MODULE)

    sources = resolve_source("catalogs.py", locale_builder.path())

    assert [type(source) for source in sources] == [CatalogSource, CatalogSource]
    assert sources[0].identity.endswith(":web")
    assert sources[1].identity.endswith(":clients[0]")
    assert sources[0].shape() == {"hello": "Hello {0:user}", "menu": {"open": "Open"}, "bye": "Salut"}
    assert sources[1].shape() == {"admin": "Admin {0} {1}"}


def test_attribute_spec_selects_one_catalog(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("catalogs.py", CATALOG_MODULE)

    sources = resolve_source("catalogs.py:web", locale_builder.path())

    assert len(sources) == 1
    assert "bye" in sources[0].shape()


def test_exported_adapters_are_used_directly(locale_builder: LocaleBuilder) -> None:
    locale_builder.text(
        "adapters.py",
        """
        from locgen.sources import MappingSource

        SOURCE = MappingSource({"en": {"title": "Title"}}, name="exported")
        """,
    )

    sources = resolve_source("adapters.py", locale_builder.path())

    assert len(sources) == 1
    assert isinstance(sources[0], MappingSource)
    assert sources[0].identity == "exported"


def test_content_records_are_unwrapped_to_their_data() -> None:
    catalog = SimpleNamespace(
        locales={
            "en": SimpleNamespace(
                contents={
                    "common": {"language": "en", "data": {"hello": "Hi {0:user}"}},
                    "admin": {"title": "Admin"},
                }
            )
        }
    )

    source = CatalogSource(catalog, name="records")

    assert source.shape() == {"hello": "Hi {0:user}", "title": "Admin"}


def test_reloading_a_module_file_does_not_accumulate_modules(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("catalogs.py", CATALOG_MODULE)
    before = set(sys.modules)

    for _ in range(5):
        sources = resolve_source("catalogs.py", locale_builder.path(), fresh=True)
        assert len(sources) == 2

    assert not [name for name in set(sys.modules) - before if name.startswith("_locgen_source_")]


def test_module_files_may_define_dataclasses(locale_builder: LocaleBuilder) -> None:
    locale_builder.text(
        "typed.py",
        """
        from dataclasses import dataclass, field


        @dataclass
        class Catalog:
            locales: dict = field(default_factory=dict)


        catalog = Catalog({"en": {"title": "Title {0:name}"}})
        """,
    )

    (source,) = resolve_source("typed.py", locale_builder.path())

    assert source.shape() == {"title": "Title {0:name}"}


def test_compiled_messages_fall_back_to_positional_templates(locale_builder: LocaleBuilder) -> None:
    locale_builder.text(
        "compiled.py",
        """
        class Locale:
            def __init__(self, content):
                self.content = content


        class Catalog:
            def __init__(self):
                self.locales = {
                    "en": Locale({
                        "plain": lambda: "Hi",
                        "greet": lambda name, role: f"{name} {role}",
                        "nested": {"optional": lambda first, second="x": first},
                    }),
                }


        catalog = Catalog()
        """,
    )

    (source,) = resolve_source("compiled.py", locale_builder.path())

    assert source.shape() == {
        "plain": "",
        "greet": "{0} {1}",
        "nested": {"optional": "{0}"},
    }


def test_template_from_builtin_callable_is_best_effort() -> None:
    assert template_from_callable(len) in {"", "{0}"}


def test_module_without_catalogs_raises(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("empty.py", "VALUE = 1\n")

    with pytest.raises(SourceError, match="Available exports: VALUE"):
        resolve_source("empty.py", locale_builder.path())


def test_missing_module_file_raises(locale_builder: LocaleBuilder) -> None:
    with pytest.raises(SourceError, match="not found"):
        resolve_source("missing.py", locale_builder.path())


def test_unknown_dotted_module_raises(locale_builder: LocaleBuilder) -> None:
    with pytest.raises(SourceError, match="Cannot import"):
        resolve_source("locgen_no_such_module_xyz", locale_builder.path())


def test_module_import_errors_are_reported(locale_builder: LocaleBuilder) -> None:
    locale_builder.text("broken.py", "raise RuntimeError('boom')\n")

    with pytest.raises(SourceError, match="boom"):
        resolve_source("broken.py", locale_builder.path())


def test_directories_resolve_to_directory_sources(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en.json", {"x": "X"})

    (source,) = resolve_source("i18n", locale_builder.path())

    assert isinstance(source, DirectorySource)


def test_missing_paths_raise(locale_builder: LocaleBuilder) -> None:
    with pytest.raises(SourceError, match="not found"):
        resolve_source("does/not/exist", locale_builder.path())


def test_resolve_sources_concatenates_in_order(locale_builder: LocaleBuilder) -> None:
    locale_builder.json("i18n/en.json", {"x": "X"})
    locale_builder.text("catalogs.py", CATALOG_MODULE)

    sources = resolve_sources(["catalogs.py", "i18n"], locale_builder.path())

    assert [type(source) for source in sources] == [CatalogSource, CatalogSource, DirectorySource]


def test_resolve_sources_requires_specs(locale_builder: LocaleBuilder) -> None:
    with pytest.raises(SourceError):
        resolve_sources([], locale_builder.path())
