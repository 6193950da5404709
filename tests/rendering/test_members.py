"""Tests for method and constructor rendering."""

from __future__ import annotations

import pytest

from implgen.models import Parameter, TypeRef
from implgen.rendering import default_return, render_constructor, render_method
from implgen.rendering.members import parameter_names, render_modifiers

from tests._fixtures.type_builder import constructor, method


@pytest.mark.parametrize(
    ("type_name", "dimensions", "statement"),
    [
        ("boolean", 0, "return true;"),
        ("void", 0, "return;"),
        ("int", 0, "return 0;"),
        ("char", 0, "return 0;"),
        ("double", 0, "return 0;"),
        ("java.lang.String", 0, "return null;"),
        ("java.util.List", 0, "return null;"),
        ("int", 1, "return null;"),
        ("boolean", 2, "return null;"),
    ],
)
def test_default_return_by_category(type_name: str, dimensions: int, statement: str) -> None:
    assert default_return(TypeRef(type_name, dimensions)) == statement


def test_modifiers_are_forced_public_in_canonical_order() -> None:
    rendered = render_modifiers({"synchronized", "protected", "abstract", "native", "final", "default"})
    assert rendered == "public final synchronized"


def test_render_method_block() -> None:
    text = render_method(
        method(
            "protected abstract java.lang.String[] describe(java.util.Map<K, V> values, int count) "
            "throws java.io.IOException, java.lang.InterruptedException"
        )
    )
    assert text == (
        "    public java.lang.String[] describe(java.util.Map values, int count)"
        " throws java.io.IOException, java.lang.InterruptedException {\n"
        "        return null;\n"
        "    }\n"
    )


def test_render_method_without_parameter_names_uses_positions() -> None:
    text = render_method(method("abstract boolean test(java.lang.Object, int...)"))
    assert "public boolean test(java.lang.Object arg0, int[] arg1) {" in text
    assert "return true;" in text


def test_parameter_names_never_collide() -> None:
    parameters = [
        Parameter(TypeRef("int"), "value"),
        Parameter(TypeRef("int"), "value"),
        Parameter(TypeRef("int"), "arg1"),
        Parameter(TypeRef("int"), ""),
    ]
    names = parameter_names(parameters)
    assert names == ["value", "arg1", "arg2", "arg3"]
    assert len(set(names)) == len(names)


def test_parameter_names_escalate_on_repeated_collisions() -> None:
    parameters = [
        Parameter(TypeRef("int"), "arg1"),
        Parameter(TypeRef("int"), "arg1"),
    ]
    assert parameter_names(parameters) == ["arg1", "_arg1"]


def test_render_constructor_forwards_arguments() -> None:
    ctor = constructor("protected Widget(java.lang.String name, int size) throws java.io.IOException", owner="p.Widget")
    assert render_constructor(ctor, "WidgetImpl") == (
        "    public WidgetImpl(java.lang.String name, int size) throws java.io.IOException {\n"
        "        super(name, size);\n"
        "    }\n"
    )


def test_render_no_arg_constructor() -> None:
    ctor = constructor("public Widget()", owner="p.Widget")
    assert render_constructor(ctor, "WidgetImpl") == (
        "    public WidgetImpl() {\n        super();\n    }\n"
    )
