"""Links declarations from every source into resolved type descriptors."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from ..constants import (
    ENUM_TYPE,
    KIND_CLASS,
    KIND_ENUM,
    KIND_INTERFACE,
    KIND_RECORD,
    RECORD_TYPE,
    ROOT_TYPE,
)
from ..errors import UnresolvableTargetError
from ..logging import get_logger
from ..models import TypeDeclaration, TypeDescriptor
from .base import DeclarationSource
from .builtin import BuiltinSource

logger = get_logger("resolvers.index")


class TypeIndex:
    """Resolves type names to linked descriptors, querying sources in order."""

    def __init__(
        self,
        sources: Iterable[DeclarationSource] = (),
        *,
        include_builtins: bool = True,
    ) -> None:
        self._sources: List[DeclarationSource] = list(sources)
        if include_builtins:
            self._sources.append(BuiltinSource())
        self._cache: Dict[str, TypeDescriptor] = {}
        self._linking: Set[str] = set()

    def resolve(self, name: str) -> TypeDescriptor:
        """Return the descriptor for ``name`` or raise UnresolvableTargetError."""
        descriptor = self.find(name)
        if descriptor is None:
            raise UnresolvableTargetError(name, "no declaration found")
        return descriptor

    def find(self, name: str) -> Optional[TypeDescriptor]:
        """Return the descriptor for ``name`` or None when no source knows it."""
        for candidate in _candidate_names(name):
            cached = self._cache.get(candidate)
            if cached is not None:
                return cached
            declaration = self._declaration(candidate)
            if declaration is not None:
                return self._link(declaration)
        return None

    # ------------------------------------------------------------------
    # Internals

    def _declaration(self, name: str) -> Optional[TypeDeclaration]:
        for source in self._sources:
            declaration = source.declaration(name)
            if declaration is not None:
                return declaration
        return None

    def _link(self, declaration: TypeDeclaration) -> TypeDescriptor:
        name = declaration.canonical_name
        if name in self._linking:
            raise UnresolvableTargetError(name, "cyclic inheritance")
        self._linking.add(name)
        try:
            superclass_name = declaration.superclass or _implicit_superclass(declaration)
            superclass = (
                self._supertype(superclass_name, dependent=name, kind=KIND_CLASS)
                if superclass_name
                else None
            )
            interfaces = tuple(
                self._supertype(interface, dependent=name, kind=KIND_INTERFACE)
                for interface in declaration.interfaces
            )
        finally:
            self._linking.discard(name)

        descriptor = TypeDescriptor(
            canonical_name=name,
            package=declaration.package,
            kind=declaration.kind,
            modifiers=frozenset(declaration.modifiers),
            superclass=superclass,
            interfaces=interfaces,
            methods=tuple(declaration.methods),
            constructors=tuple(declaration.constructors),
            code_location=declaration.code_location,
            internal=declaration.internal,
        )
        self._cache[name] = descriptor
        return descriptor

    def _supertype(self, name: str, *, dependent: str, kind: str) -> TypeDescriptor:
        found = self.find(name)
        if found is not None:
            return found
        logger.warning(
            "Supertype %s of %s is unknown; treating it as a %s without members",
            name,
            dependent,
            kind,
        )
        opaque = TypeDescriptor(
            canonical_name=name,
            package=name.rpartition(".")[0],
            kind=kind,
            modifiers=frozenset({"public"}),
            superclass=self.find(ROOT_TYPE) if kind == KIND_CLASS else None,
            opaque=True,
        )
        self._cache[name] = opaque
        return opaque


def _implicit_superclass(declaration: TypeDeclaration) -> Optional[str]:
    if declaration.kind == KIND_CLASS and declaration.canonical_name != ROOT_TYPE:
        return ROOT_TYPE
    if declaration.kind == KIND_ENUM:
        return ENUM_TYPE
    if declaration.kind == KIND_RECORD:
        return RECORD_TYPE
    return None


def _candidate_names(name: str) -> List[str]:
    """Return lookup keys for ``name``, accepting binary names like ``a.Outer$Inner``."""
    cleaned = name.strip()
    candidates = [cleaned]
    if "$" in cleaned:
        candidates.append(cleaned.replace("$", "."))
    return candidates


__all__ = ["TypeIndex"]
