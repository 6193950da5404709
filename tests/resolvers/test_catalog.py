"""Tests for YAML type catalogs."""

from __future__ import annotations

from pathlib import Path

import pytest

from implgen.errors import CatalogError
from implgen.models import TypeRef
from implgen.resolvers import CatalogSource

from tests._fixtures.type_builder import TypeWorkspace


def test_catalog_parses_string_and_mapping_members(workspace: TypeWorkspace) -> None:
    path = workspace.catalog(
        "types.yml",
        """
        location: classes
        types:
          - name: com.example.Repository<T extends java.lang.Comparable>
            kind: interface
            extends: [java.lang.AutoCloseable]
            methods:
              - T find(java.lang.String id) throws java.io.IOException
              - name: count
                returns: long
                parameters:
                  - type: java.util.Map<java.lang.String, T>
                    name: filter
                  - int
              - default boolean isEmpty()
        """,
    )
    source = CatalogSource([path])
    declaration = source.declaration("com.example.Repository")

    assert declaration is not None
    assert declaration.kind == "interface"
    assert declaration.package == "com.example"
    assert declaration.superclass is None
    assert declaration.interfaces == ["java.lang.AutoCloseable"]
    assert declaration.code_location == workspace.root.resolve() / "classes"

    find, count, is_empty = declaration.methods
    assert find.return_type == TypeRef("java.lang.Comparable")
    assert find.exceptions == (TypeRef("java.io.IOException"),)
    assert find.modifiers == frozenset({"public", "abstract"})
    assert [(p.type.name, p.name) for p in count.parameters] == [
        ("java.util.Map", "filter"),
        ("int", "arg1"),
    ]
    assert count.return_type == TypeRef("long")
    assert is_empty.modifiers == frozenset({"public", "default"})
    assert not is_empty.is_abstract


def test_class_without_constructors_gets_implicit_one(workspace: TypeWorkspace) -> None:
    path = workspace.catalog(
        "types.yml",
        """
        types:
          - name: com.example.Base
            modifiers: [public, abstract]
            extends: com.example.Root
            methods:
              - protected abstract void run()
        """,
    )
    declaration = CatalogSource([path]).declaration("com.example.Base")
    assert declaration is not None
    assert declaration.superclass == "com.example.Root"
    (ctor,) = declaration.constructors
    assert ctor.parameters == ()
    assert ctor.modifiers == frozenset({"public"})


def test_constructor_name_must_match(workspace: TypeWorkspace) -> None:
    path = workspace.catalog(
        "types.yml",
        """
        types:
          - name: com.example.Base
            constructors:
              - public Other()
        """,
    )
    with pytest.raises(CatalogError, match="expected 'Base'"):
        CatalogSource([path])


@pytest.mark.parametrize(
    "body",
    [
        "types: {}",
        "types:\n  - kind: class",
        "types:\n  - name: a.B\n    kind: struct",
        "types:\n  - name: a.B\n    modifiers: [public, magic]",
        "types:\n  - name: a.B\n    extends: [a.C, a.D]",
        "types:\n  - name: a.B\n    package: x",
        "types:\n  - name: a.B\n    methods:\n      - not a signature",
        "types: [unclosed",
        "- a list",
    ],
)
def test_malformed_catalogs_raise(workspace: TypeWorkspace, body: str) -> None:
    path = workspace.catalog("bad.yml", body + "\n")
    with pytest.raises(CatalogError):
        CatalogSource([path])


def test_missing_catalog_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogError, match="Failed to read"):
        CatalogSource([tmp_path / "absent.yml"])


def test_later_catalog_redefines_type() -> None:
    source = CatalogSource()
    source.load_text("types:\n  - name: a.B\n", origin="first")
    source.load_text("types:\n  - name: a.B\n    kind: interface\n", origin="second")
    declaration = source.declaration("a.B")
    assert declaration is not None
    assert declaration.kind == "interface"
    assert source.names() == ["a.B"]
