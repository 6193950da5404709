"""Primitive pseudo-types and the bundled catalog of platform types."""

from __future__ import annotations

from importlib import resources
from typing import Optional

from ..constants import KIND_PRIMITIVE, PRIMITIVE_TYPES
from ..models import TypeDeclaration
from .base import DeclarationSource
from .catalog import CatalogSource

_BUNDLED_CATALOG = "jdk.yml"


class BuiltinSource(DeclarationSource):
    """Knows the primitives and the JDK types listed in ``data/jdk.yml``."""

    def __init__(self) -> None:
        self._catalog = CatalogSource()
        resource = resources.files(__package__) / "data" / _BUNDLED_CATALOG
        self._catalog.load_text(
            resource.read_text(encoding="utf-8"), origin=f"<builtin {_BUNDLED_CATALOG}>"
        )

    def declaration(self, name: str) -> Optional[TypeDeclaration]:
        if name in PRIMITIVE_TYPES:
            return TypeDeclaration(
                canonical_name=name,
                package="",
                kind=KIND_PRIMITIVE,
                modifiers=frozenset({"public", "abstract", "final"}),
            )
        return self._catalog.declaration(name)


__all__ = ["BuiltinSource"]
