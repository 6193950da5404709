"""Type metadata front-ends and the index that links them."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .base import DeclarationSource, implicit_constructor, member_modifiers
from .builtin import BuiltinSource
from .catalog import CatalogSource
from .index import TypeIndex
from .java_source import JavaSourceSource


def build_index(
    catalogs: Sequence[Path] = (),
    source_paths: Sequence[Path] = (),
) -> TypeIndex:
    """Create an index over Java sources, catalogs and the bundled platform types.

    Source roots win over catalogs, which win over the bundled catalog.
    """
    sources: List[DeclarationSource] = []
    if source_paths:
        sources.append(JavaSourceSource(source_paths))
    if catalogs:
        sources.append(CatalogSource(catalogs))
    return TypeIndex(sources)


__all__ = [
    "BuiltinSource",
    "CatalogSource",
    "DeclarationSource",
    "JavaSourceSource",
    "TypeIndex",
    "build_index",
    "implicit_constructor",
    "member_modifiers",
]
