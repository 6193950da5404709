"""Tests for the compact member signature parser."""

from __future__ import annotations

import pytest

from implgen.models import TypeRef
from implgen.resolvers.signatures import (
    SignatureSyntaxError,
    parse_member,
    split_top_level,
    type_parameter_bounds,
)


def test_split_top_level_respects_angle_brackets() -> None:
    assert split_top_level("java.util.Map<K, V> a, int b", ",") == ["java.util.Map<K, V> a", "int b"]
    assert split_top_level("final  java.util.List<A, B>   items", None) == [
        "final",
        "java.util.List<A, B>",
        "items",
    ]


def test_type_parameter_bounds_erase_to_first_bound() -> None:
    bounds = type_parameter_bounds("<T, N extends java.lang.Number & java.lang.Comparable<N>>")
    assert bounds == {"T": "java.lang.Object", "N": "java.lang.Number"}


def test_parse_generic_method() -> None:
    parsed = parse_member(
        "public abstract <T extends java.lang.CharSequence> T[] pick(java.util.List<T> items, T... rest) "
        "throws java.io.IOException;"
    )
    assert parsed.name == "pick"
    assert parsed.modifiers == frozenset({"public", "abstract"})
    assert parsed.return_type == TypeRef("java.lang.CharSequence", 1)
    assert [param.type for param in parsed.parameters] == [
        TypeRef("java.util.List"),
        TypeRef("java.lang.CharSequence", 1),
    ]
    assert [param.name for param in parsed.parameters] == ["items", "rest"]
    assert parsed.exceptions == (TypeRef("java.io.IOException"),)


def test_parse_uses_enclosing_bounds() -> None:
    parsed = parse_member("E next()", bounds={"E": "java.lang.Object"})
    assert parsed.return_type == TypeRef("java.lang.Object")


def test_parse_parameter_variants() -> None:
    parsed = parse_member("void f(final int values[], @Deprecated java.lang.String, long)")
    assert [(param.type.canonical_name, param.name) for param in parsed.parameters] == [
        ("int[]", "values"),
        ("java.lang.String", "arg1"),
        ("long", "arg2"),
    ]


def test_parse_constructor() -> None:
    parsed = parse_member("protected Widget(int size)", constructor=True)
    assert parsed.name == "Widget"
    assert parsed.return_type is None
    assert parsed.modifiers == frozenset({"protected"})


@pytest.mark.parametrize(
    "text",
    [
        "int size",
        "size()",
        "int ()",
        "int size() extra",
        "int 9lives()",
    ],
)
def test_malformed_signatures_raise(text: str) -> None:
    with pytest.raises(SignatureSyntaxError):
        parse_member(text)


def test_constructor_with_return_type_raises() -> None:
    with pytest.raises(SignatureSyntaxError):
        parse_member("public void Widget()", constructor=True)


def test_method_return_type_is_required_for_methods() -> None:
    assert parse_member("long count()").method_return_type() == TypeRef("long")
    with pytest.raises(SignatureSyntaxError, match="constructor"):
        parse_member("Widget()", constructor=True).method_return_type()
