"""Core data models shared across implgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, Tuple

from .constants import (
    IMPL_SUFFIX,
    KIND_ANNOTATION,
    KIND_CLASS,
    KIND_INTERFACE,
    KIND_PRIMITIVE,
    PRIMITIVE_TYPES,
    ROOT_TYPE,
)


def erase_generics(text: str) -> str:
    """Drop every ``<...>`` type-argument group from a type expression."""
    result: List[str] = []
    depth = 0
    for char in text:
        if char == "<":
            depth += 1
            continue
        if char == ">":
            depth = max(depth - 1, 0)
            continue
        if depth == 0:
            result.append(char)
    return "".join(result)


@dataclass(frozen=True)
class TypeRef:
    """Erased reference to a Java type such as ``int`` or ``java.lang.String[]``."""

    name: str
    dimensions: int = 0

    @classmethod
    def parse(cls, text: str) -> "TypeRef":
        """Parse ``java.util.List<String>[]`` or ``String...`` style text."""
        cleaned = erase_generics(text).strip()
        dimensions = 0
        if cleaned.endswith("..."):
            cleaned = cleaned[:-3].rstrip()
            dimensions += 1
        while cleaned.endswith("[]"):
            cleaned = cleaned[:-2].rstrip()
            dimensions += 1
        cleaned = "".join(cleaned.split())
        if not cleaned:
            raise ValueError(f"Empty type expression: {text!r}")
        return cls(name=cleaned, dimensions=dimensions)

    @property
    def canonical_name(self) -> str:
        return self.name + "[]" * self.dimensions

    @property
    def is_primitive(self) -> bool:
        return self.dimensions == 0 and self.name in PRIMITIVE_TYPES

    @property
    def is_void(self) -> bool:
        return self.dimensions == 0 and self.name == "void"

    @property
    def is_boolean(self) -> bool:
        return self.dimensions == 0 and self.name == "boolean"

    def __str__(self) -> str:
        return self.canonical_name


@dataclass(frozen=True)
class Parameter:
    """A single formal parameter."""

    type: TypeRef
    name: str


@dataclass(frozen=True)
class MethodInfo:
    """A method declared on a type."""

    name: str
    return_type: TypeRef
    parameters: Tuple[Parameter, ...] = ()
    exceptions: Tuple[TypeRef, ...] = ()
    modifiers: FrozenSet[str] = frozenset()
    declaring_type: str = ""

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers

    @property
    def parameter_types(self) -> Tuple[str, ...]:
        return tuple(parameter.type.canonical_name for parameter in self.parameters)

    @property
    def override_key(self) -> Tuple[str, Tuple[str, ...]]:
        """Name plus parameter types: what Java uses to decide overriding."""
        return self.name, self.parameter_types


@dataclass(frozen=True)
class ConstructorInfo:
    """A constructor declared on a class."""

    parameters: Tuple[Parameter, ...] = ()
    exceptions: Tuple[TypeRef, ...] = ()
    modifiers: FrozenSet[str] = frozenset()
    declaring_type: str = ""

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers


@dataclass(frozen=True)
class MemberSignature:
    """Normalized identity of a method used to deduplicate abstract obligations."""

    return_type: str
    name: str
    parameter_types: Tuple[str, ...]

    @classmethod
    def of(cls, method: MethodInfo) -> "MemberSignature":
        return cls(
            return_type=method.return_type.canonical_name,
            name=method.name,
            parameter_types=method.parameter_types,
        )


@dataclass
class TypeDeclaration:
    """Unlinked type metadata as produced by a declaration source."""

    canonical_name: str
    package: str
    kind: str = KIND_CLASS
    modifiers: FrozenSet[str] = frozenset()
    superclass: Optional[str] = None
    interfaces: List[str] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    constructors: List[ConstructorInfo] = field(default_factory=list)
    code_location: Optional[Path] = None
    internal: bool = False

    @property
    def simple_name(self) -> str:
        return self.canonical_name.rsplit(".", 1)[-1]


@dataclass(frozen=True, eq=False)
class TypeDescriptor:
    """Linked, read-only structural metadata for a class or interface."""

    canonical_name: str
    package: str = ""
    kind: str = KIND_CLASS
    modifiers: FrozenSet[str] = frozenset()
    superclass: Optional["TypeDescriptor"] = None
    interfaces: Tuple["TypeDescriptor", ...] = ()
    methods: Tuple[MethodInfo, ...] = ()
    constructors: Tuple[ConstructorInfo, ...] = ()
    code_location: Optional[Path] = None
    internal: bool = False
    opaque: bool = False

    @property
    def simple_name(self) -> str:
        return self.canonical_name.rsplit(".", 1)[-1]

    @property
    def impl_name(self) -> str:
        return self.simple_name + IMPL_SUFFIX

    @property
    def is_interface(self) -> bool:
        return self.kind in (KIND_INTERFACE, KIND_ANNOTATION)

    @property
    def is_primitive(self) -> bool:
        return self.kind == KIND_PRIMITIVE or self.canonical_name in PRIMITIVE_TYPES

    @property
    def is_root(self) -> bool:
        return self.canonical_name == ROOT_TYPE

    def class_chain(self) -> Iterator["TypeDescriptor"]:
        """Yield this type followed by each superclass up to the root."""
        current: Optional[TypeDescriptor] = self
        while current is not None:
            yield current
            current = current.superclass

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.canonical_name!r}, kind={self.kind!r})"


@dataclass(frozen=True)
class BuildArtifact:
    """A compiled class file and the archive entry it is stored under."""

    class_file: Path
    entry_name: str


__all__ = [
    "BuildArtifact",
    "ConstructorInfo",
    "MemberSignature",
    "MethodInfo",
    "Parameter",
    "TypeDeclaration",
    "TypeDescriptor",
    "TypeRef",
    "erase_generics",
]
