"""Base classes for type metadata front-ends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, Optional

from ..constants import ACCESS_MODIFIERS, KIND_ANNOTATION, KIND_INTERFACE
from ..models import ConstructorInfo, TypeDeclaration


class DeclarationSource(ABC):
    """Contract for front-ends that describe types by canonical name."""

    @abstractmethod
    def declaration(self, name: str) -> Optional[TypeDeclaration]:
        """Return the unlinked declaration for ``name`` or None when unknown."""


def member_modifiers(modifiers: Iterable[str], *, kind: str) -> FrozenSet[str]:
    """Apply the implicit modifiers Java gives to members of ``kind`` types.

    Interface methods are public unless private, and abstract unless they are
    default, static or private.
    """
    result = set(modifiers)
    if kind in {KIND_INTERFACE, KIND_ANNOTATION}:
        if not result & {"default", "static", "private"}:
            result.add("abstract")
        if "private" not in result:
            result.add("public")
    return frozenset(result)


def implicit_constructor(declaration: TypeDeclaration) -> ConstructorInfo:
    """Return the default constructor the compiler adds to a class without one."""
    return ConstructorInfo(
        modifiers=frozenset(declaration.modifiers & ACCESS_MODIFIERS),
        declaring_type=declaration.canonical_name,
    )


__all__ = ["DeclarationSource", "implicit_constructor", "member_modifiers"]
