"""Tests for locale tree merging."""

from __future__ import annotations

from locgen.merge import merge_into, merge_trees, merge_trees_with_report
from locgen.models import MergeConflict


def test_merge_of_nothing_is_empty() -> None:
    assert merge_trees([]) == {}


def test_root_key_order_is_first_seen() -> None:
    merged = merge_trees([{"a": "A1", "b": "B1"}, {"c": "C2", "b": "B2"}])

    assert list(merged) == ["a", "b", "c"]
    assert merged["b"] == "B2"


def test_nested_branches_are_merged_recursively() -> None:
    merged = merge_trees(
        [
            {"menu": {"open": "Open", "close": "Close"}},
            {"menu": {"save": "Save {0}"}},
        ]
    )

    assert merged == {"menu": {"open": "Open", "close": "Close", "save": "Save {0}"}}


def test_later_leaf_replaces_earlier_branch() -> None:
    merged = merge_trees([{"errors": {"missing": "Missing"}}, {"errors": "Errors"}])

    assert merged == {"errors": "Errors"}


def test_later_branch_replaces_earlier_leaf() -> None:
    merged = merge_trees([{"errors": "Errors"}, {"errors": {"missing": "Missing"}}])

    assert merged == {"errors": {"missing": "Missing"}}


def test_keys_missing_from_incoming_are_untouched() -> None:
    target = {"keep": "kept", "nested": {"x": "1"}}
    merge_into(target, {"nested": {"y": "2"}})

    assert target == {"keep": "kept", "nested": {"x": "1", "y": "2"}}


def test_inputs_are_not_mutated() -> None:
    first = {"menu": {"open": "Open"}}
    second = {"menu": {"close": "Close"}}

    merge_trees([first, second])

    assert first == {"menu": {"open": "Open"}}
    assert second == {"menu": {"close": "Close"}}


def test_lists_are_treated_as_scalars() -> None:
    merged = merge_trees([{"items": ["a"]}, {"items": ["b", "c"]}])

    assert merged == {"items": ["b", "c"]}


def test_report_lists_kind_changes_without_changing_result() -> None:
    trees = [
        {"errors": {"missing": "Missing"}, "title": "Title"},
        {"errors": "Errors", "title": {"short": "T"}},
        {"title": {"long": "Long title"}},
    ]

    report = merge_trees_with_report(trees)

    assert report.tree == merge_trees(trees)
    assert report.conflicts == [
        MergeConflict(path=("errors",), previous="branch", incoming="leaf"),
        MergeConflict(path=("title",), previous="leaf", incoming="branch"),
    ]


def test_report_ignores_plain_leaf_overwrites() -> None:
    report = merge_trees_with_report([{"hello": "Hello"}, {"hello": "Bonjour"}])

    assert report.tree == {"hello": "Bonjour"}
    assert report.conflicts == []


def test_conflict_paths_are_nested() -> None:
    report = merge_trees_with_report([{"a": {"b": {"c": "x"}}}, {"a": {"b": "y"}}])

    assert report.conflicts[0].path == ("a", "b")
    assert report.conflicts[0].describe() == "a.b: branch replaced by leaf"
