"""Tests for signature rendering and identifier handling."""

from __future__ import annotations

from locgen.models import Parameter
from locgen.signatures import (
    generate_signature,
    property_key,
    render_signature,
    safe_identifier,
)


def test_zero_parameters_render_as_thunk() -> None:
    assert render_signature([]) == "() => string"
    assert generate_signature("Hello world") == "() => string"


def test_indexed_template_signature() -> None:
    assert generate_signature("{0} is now a {1}") == "(_0: string, _1: string) => string"


def test_labelled_template_signature() -> None:
    assert generate_signature("{0:user} is now a {1:role}") == "(user: string, role: string) => string"


def test_render_keeps_supplied_order() -> None:
    parameters = [Parameter(name="b"), Parameter(name="a")]
    assert render_signature(parameters) == "(b: string, a: string) => string"


def test_safe_identifier_leaves_valid_names_alone() -> None:
    assert safe_identifier("user") == "user"
    assert safe_identifier("_0") == "_0"
    assert safe_identifier("$count") == "$count"


def test_safe_identifier_rewrites_invalid_names() -> None:
    assert safe_identifier("first-name") == "first_name"
    assert safe_identifier("user name") == "user_name"
    assert safe_identifier("9lives") == "_9lives"
    assert safe_identifier("class") == "_class"


def test_sanitized_collisions_get_numeric_suffixes() -> None:
    signature = generate_signature("{0:first-name} {1:first name} {2:first_name}")
    assert signature == "(first_name: string, first_name_2: string, first_name_3: string) => string"


def test_property_key_quotes_non_identifiers() -> None:
    assert property_key("greeting") == "greeting"
    assert property_key("default") == "default"
    assert property_key("not-found") == '"not-found"'
    assert property_key("404") == '"404"'
    assert property_key('say "hi"') == '"say \\"hi\\""'
