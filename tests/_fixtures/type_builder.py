"""Helpers for building type descriptors and on-disk type sources in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from implgen.constants import KIND_CLASS, KIND_INTERFACE
from implgen.models import ConstructorInfo, MethodInfo, TypeDescriptor
from implgen.resolvers import TypeIndex, build_index, member_modifiers
from implgen.resolvers.signatures import parse_member


def method(signature: str, *, owner: str = "", kind: str = KIND_CLASS) -> MethodInfo:
    """Build a MethodInfo from a compact signature such as ``public abstract int size()``."""
    parsed = parse_member(signature)
    return MethodInfo(
        name=parsed.name,
        return_type=parsed.method_return_type(),
        parameters=parsed.parameters,
        exceptions=parsed.exceptions,
        modifiers=member_modifiers(parsed.modifiers, kind=kind),
        declaring_type=owner,
    )


def constructor(signature: str, *, owner: str) -> ConstructorInfo:
    parsed = parse_member(signature, constructor=True)
    return ConstructorInfo(
        parameters=parsed.parameters,
        exceptions=parsed.exceptions,
        modifiers=parsed.modifiers,
        declaring_type=owner,
    )


def interface(
    name: str,
    methods: Iterable[str] = (),
    *,
    extends: Sequence[TypeDescriptor] = (),
) -> TypeDescriptor:
    """Build a public interface descriptor with the given method signatures."""
    return TypeDescriptor(
        canonical_name=name,
        package=name.rpartition(".")[0],
        kind=KIND_INTERFACE,
        modifiers=frozenset({"public", "abstract"}),
        interfaces=tuple(extends),
        methods=tuple(method(text, owner=name, kind=KIND_INTERFACE) for text in methods),
    )


def klass(
    name: str,
    methods: Iterable[str] = (),
    *,
    modifiers: Iterable[str] = ("public", "abstract"),
    superclass: TypeDescriptor | None = None,
    interfaces: Sequence[TypeDescriptor] = (),
    constructors: Iterable[str] = (),
) -> TypeDescriptor:
    """Build a class descriptor; ``superclass`` defaults to nothing at all."""
    simple = name.rsplit(".", 1)[-1]
    return TypeDescriptor(
        canonical_name=name,
        package=name.rpartition(".")[0],
        kind=KIND_CLASS,
        modifiers=frozenset(modifiers),
        superclass=superclass,
        interfaces=tuple(interfaces),
        methods=tuple(method(text, owner=name) for text in methods),
        constructors=tuple(
            constructor(text.replace("<init>", simple), owner=name) for text in constructors
        ),
    )


class TypeWorkspace:
    """Writes catalogs and Java sources below a temporary directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "workspace"
        self.root.mkdir()
        self.source_root = self.root / "src"
        self.source_root.mkdir()

    def catalog(self, name: str, content: str) -> Path:
        """Write a YAML catalog and return its path."""
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    def java(self, files: Mapping[str, str]) -> None:
        """Write ``relative path -> source`` entries below the source root."""
        for relative, content in files.items():
            path = self.source_root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def index(self, *catalogs: Path, sources: bool = False) -> TypeIndex:
        return build_index(catalogs, [self.source_root] if sources else [])


__all__ = ["TypeWorkspace", "constructor", "interface", "klass", "method"]
