"""Tree-sitter powered front-end reading type declarations from Java sources."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from ..constants import (
    JAVA_LANG_TYPES,
    KIND_ANNOTATION,
    KIND_CLASS,
    KIND_ENUM,
    KIND_INTERFACE,
    KIND_RECORD,
    KNOWN_MODIFIERS,
    PRIMITIVE_TYPES,
    ROOT_TYPE,
    SOURCE_EXTENSION,
    WELL_KNOWN_TYPES,
)
from ..errors import CatalogError
from ..logging import get_logger
from ..models import ConstructorInfo, MethodInfo, Parameter, TypeDeclaration, TypeRef
from .base import DeclarationSource, implicit_constructor, member_modifiers
from .signatures import split_top_level

logger = get_logger("resolvers.java_source")

JAVA_LANGUAGE = Language(tree_sitter_java.language())

ANNOTATION_TYPE = "java.lang.annotation.Annotation"

_DECLARATION_KINDS = {
    "class_declaration": KIND_CLASS,
    "interface_declaration": KIND_INTERFACE,
    "enum_declaration": KIND_ENUM,
    "record_declaration": KIND_RECORD,
    "annotation_type_declaration": KIND_ANNOTATION,
}
_TYPE_NODES = {
    "type_identifier",
    "scoped_type_identifier",
    "generic_type",
    "array_type",
    "integral_type",
    "floating_point_type",
    "boolean_type",
    "void_type",
}
_ANNOTATION_PATTERN = re.compile(r"@[\w.]+(\s*\([^()]*\))?")


@dataclass
class _CompilationUnit:
    """Name-resolution context for one source file."""

    package: str
    root: Path
    single_imports: Dict[str, str] = field(default_factory=dict)
    on_demand_imports: List[str] = field(default_factory=list)
    local_types: Dict[str, str] = field(default_factory=dict)


class JavaSourceSource(DeclarationSource):
    """Reads declarations from ``<root>/<package path>/<Outer>.java`` files."""

    def __init__(self, roots: Sequence[Path] = ()) -> None:
        self._roots = [Path(root) for root in roots]
        self._parser = Parser(JAVA_LANGUAGE)
        self._declarations: Dict[str, TypeDeclaration] = {}
        self._parsed: set = set()

    def declaration(self, name: str) -> Optional[TypeDeclaration]:
        known = self._declarations.get(name)
        if known is not None:
            return known
        for root, path in self._candidate_files(name):
            self._parse_file(path, root)
            known = self._declarations.get(name)
            if known is not None:
                return known
        return None

    def parse_text(self, text: str, *, root: Path) -> List[TypeDeclaration]:
        """Register every type declared in ``text`` and return them in source order."""
        source = text.encode("utf-8")
        tree = self._parser.parse(source)
        program = tree.root_node
        unit = _CompilationUnit(package=_package_of(program), root=root)
        for child in program.named_children:
            if child.type == "import_declaration":
                _register_import(child, unit)

        found: List[Tuple[Node, str, Optional[str]]] = []
        for child in program.named_children:
            if child.type in _DECLARATION_KINDS:
                _collect_declarations(child, unit.package, None, found)
        for _, canonical, _ in found:
            simple = canonical.rsplit(".", 1)[-1]
            unit.local_types.setdefault(simple, canonical)

        declarations = [
            self._build_declaration(node, canonical, outer_kind, unit)
            for node, canonical, outer_kind in found
        ]
        for declaration in declarations:
            self._declarations[declaration.canonical_name] = declaration
        return declarations

    # ------------------------------------------------------------------
    # File lookup

    def _candidate_files(self, name: str) -> Iterable[Tuple[Path, Path]]:
        parts = name.split(".")
        for root in self._roots:
            # Outer types first, then progressively nested names.
            for length in range(1, len(parts) + 1):
                directory = root.joinpath(*parts[: length - 1]) if length > 1 else root
                candidate = directory / f"{parts[length - 1]}{SOURCE_EXTENSION}"
                if candidate.is_file():
                    yield root, candidate

    def _parse_file(self, path: Path, root: Path) -> None:
        resolved = path.resolve()
        if resolved in self._parsed:
            return
        self._parsed.add(resolved)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CatalogError(f"Failed to read Java source {path}: {exc}") from exc
        declarations = self.parse_text(text, root=root)
        logger.debug("Parsed %d type(s) from %s", len(declarations), path)

    def _source_exists(self, canonical: str) -> bool:
        relative = Path(*canonical.split(".")).with_suffix(SOURCE_EXTENSION)
        return any((root / relative).is_file() for root in self._roots)

    # ------------------------------------------------------------------
    # Declarations

    def _build_declaration(
        self,
        node: Node,
        canonical: str,
        outer_kind: Optional[str],
        unit: _CompilationUnit,
    ) -> TypeDeclaration:
        kind = _DECLARATION_KINDS[node.type]
        modifiers = set(_modifiers(node))
        if outer_kind in {KIND_INTERFACE, KIND_ANNOTATION}:
            modifiers |= {"public", "static"}
        if kind in {KIND_INTERFACE, KIND_ANNOTATION}:
            modifiers.add("abstract")
            if outer_kind is not None:
                modifiers.add("static")
        if kind in {KIND_ENUM, KIND_RECORD}:
            modifiers.add("final")
            if outer_kind is not None:
                modifiers.add("static")

        scope = _TypeScope(self, unit, _type_parameters(node.child_by_field_name("type_parameters")))

        superclass: Optional[str] = None
        interfaces: List[str] = []
        if node.type == "class_declaration":
            superclass_node = node.child_by_field_name("superclass")
            if superclass_node is not None:
                superclass = scope.qualify(_first_type(superclass_node)).name
            interfaces = _type_list(node.child_by_field_name("interfaces"), scope)
        elif node.type in {"enum_declaration", "record_declaration"}:
            interfaces = _type_list(node.child_by_field_name("interfaces"), scope)
        elif node.type == "interface_declaration":
            interfaces = _type_list(_child_of_type(node, "extends_interfaces"), scope)
        else:
            interfaces = [ANNOTATION_TYPE]

        declaration = TypeDeclaration(
            canonical_name=canonical,
            package=unit.package,
            kind=kind,
            modifiers=frozenset(modifiers),
            superclass=superclass,
            interfaces=interfaces,
            code_location=unit.root,
        )
        for member in _body_members(node):
            if member.type == "method_declaration":
                declaration.methods.append(self._method(member, declaration, scope))
            elif member.type == "annotation_type_element_declaration":
                declaration.methods.append(self._annotation_element(member, declaration, scope))
            elif member.type == "constructor_declaration":
                declaration.constructors.append(self._constructor(member, declaration, scope))
        if kind == KIND_CLASS and not declaration.constructors:
            declaration.constructors.append(implicit_constructor(declaration))
        return declaration

    def _method(self, node: Node, declaration: TypeDeclaration, scope: "_TypeScope") -> MethodInfo:
        local = scope.nested(_type_parameters(node.child_by_field_name("type_parameters")))
        modifiers = _modifiers(node)
        return_type = local.qualify(_text(node.child_by_field_name("type")))
        dimensions = node.child_by_field_name("dimensions")
        if dimensions is not None:
            return_type = TypeRef(return_type.name, return_type.dimensions + _text(dimensions).count("["))
        return MethodInfo(
            name=_text(node.child_by_field_name("name")),
            return_type=return_type,
            parameters=_parameters(node.child_by_field_name("parameters"), local),
            exceptions=_throws(node, local),
            modifiers=member_modifiers(modifiers, kind=declaration.kind),
            declaring_type=declaration.canonical_name,
        )

    def _annotation_element(
        self, node: Node, declaration: TypeDeclaration, scope: "_TypeScope"
    ) -> MethodInfo:
        return MethodInfo(
            name=_text(node.child_by_field_name("name")),
            return_type=scope.qualify(_text(node.child_by_field_name("type"))),
            modifiers=member_modifiers(_modifiers(node), kind=declaration.kind),
            declaring_type=declaration.canonical_name,
        )

    def _constructor(
        self, node: Node, declaration: TypeDeclaration, scope: "_TypeScope"
    ) -> ConstructorInfo:
        local = scope.nested(_type_parameters(node.child_by_field_name("type_parameters")))
        return ConstructorInfo(
            parameters=_parameters(node.child_by_field_name("parameters"), local),
            exceptions=_throws(node, local),
            modifiers=frozenset(_modifiers(node)),
            declaring_type=declaration.canonical_name,
        )


class _TypeScope:
    """Resolves simple type names the way the Java compiler would."""

    def __init__(
        self,
        source: JavaSourceSource,
        unit: _CompilationUnit,
        variables: Mapping[str, str],
        parent: Optional["_TypeScope"] = None,
    ) -> None:
        self._source = source
        self._unit = unit
        self._variables = dict(variables)
        self._parent = parent

    def nested(self, variables: Mapping[str, str]) -> "_TypeScope":
        return _TypeScope(self._source, self._unit, variables, parent=self)

    def qualify(self, text: str) -> TypeRef:
        ref = TypeRef.parse(_strip_annotations(text))
        if ref.name in PRIMITIVE_TYPES:
            return ref
        bound = self._variable(ref.name)
        if bound is not None:
            base = self.qualify(bound) if bound != ref.name else TypeRef(ROOT_TYPE)
            return TypeRef(base.name, base.dimensions + ref.dimensions)
        head, _, rest = ref.name.partition(".")
        qualified = self._simple(head)
        if qualified is None:
            return ref
        return TypeRef(f"{qualified}.{rest}" if rest else qualified, ref.dimensions)

    def _variable(self, name: str) -> Optional[str]:
        scope: Optional[_TypeScope] = self
        while scope is not None:
            if name in scope._variables:
                return scope._variables[name]
            scope = scope._parent
        return None

    def _simple(self, name: str) -> Optional[str]:
        unit = self._unit
        if name in unit.local_types:
            return unit.local_types[name]
        if name in unit.single_imports:
            return unit.single_imports[name]
        same_package = f"{unit.package}.{name}" if unit.package else name
        if self._source._source_exists(same_package):
            return same_package
        for package in unit.on_demand_imports:
            candidate = f"{package}.{name}"
            if candidate in WELL_KNOWN_TYPES or self._source._source_exists(candidate):
                return candidate
        if name in JAVA_LANG_TYPES:
            return f"java.lang.{name}"
        if name[:1].isupper():
            return self._unlisted(name, same_package)
        # Lowercase head: already a package-qualified name.
        return None

    def _unlisted(self, name: str, same_package: str) -> str:
        """Place a type found in neither the source roots nor the known JDK names."""
        packages = self._unit.on_demand_imports
        if not packages:
            return same_package
        if len(packages) == 1:
            return f"{packages[0]}.{name}"
        raise CatalogError(
            f"Cannot tell which of {', '.join(packages)} declares {name}; import it explicitly"
        )


def _collect_declarations(
    node: Node,
    prefix: str,
    outer_kind: Optional[str],
    found: List[Tuple[Node, str, Optional[str]]],
) -> None:
    name = _text(node.child_by_field_name("name"))
    canonical = f"{prefix}.{name}" if prefix else name
    found.append((node, canonical, outer_kind))
    kind = _DECLARATION_KINDS[node.type]
    for member in _body_members(node):
        if member.type in _DECLARATION_KINDS:
            _collect_declarations(member, canonical, kind, found)


def _body_members(node: Node) -> List[Node]:
    body = node.child_by_field_name("body")
    if body is None:
        return []
    members: List[Node] = []
    for child in body.named_children:
        if child.type == "enum_body_declarations":
            members.extend(child.named_children)
        else:
            members.append(child)
    return members


def _package_of(program: Node) -> str:
    for child in program.named_children:
        if child.type == "package_declaration":
            for part in child.named_children:
                if part.type in {"identifier", "scoped_identifier"}:
                    return _text(part)
    return ""


def _register_import(node: Node, unit: _CompilationUnit) -> None:
    is_static = any(child.type == "static" for child in node.children)
    on_demand = any(child.type == "asterisk" for child in node.children)
    target = next(
        (child for child in node.named_children if child.type in {"identifier", "scoped_identifier"}),
        None,
    )
    if target is None:
        return
    name = _text(target)
    if on_demand:
        if not is_static:
            unit.on_demand_imports.append(name)
        return
    # A static single import may name a nested type; members are irrelevant here.
    unit.single_imports[name.rsplit(".", 1)[-1]] = name


def _modifiers(node: Node) -> frozenset:
    modifiers_node = _child_of_type(node, "modifiers")
    if modifiers_node is None:
        return frozenset()
    return frozenset(
        child.type for child in modifiers_node.children if child.type in KNOWN_MODIFIERS
    )


def _type_parameters(node: Optional[Node]) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    if node is None:
        return variables
    for parameter in node.named_children:
        if parameter.type != "type_parameter":
            continue
        name_node = next(
            (child for child in parameter.named_children if child.type in {"type_identifier", "identifier"}),
            None,
        )
        if name_node is None:
            continue
        bound_node = _child_of_type(parameter, "type_bound")
        if bound_node is not None and bound_node.named_children:
            variables[_text(name_node)] = _text(bound_node.named_children[0])
        else:
            variables[_text(name_node)] = ROOT_TYPE
    return variables


def _type_list(node: Optional[Node], scope: _TypeScope) -> List[str]:
    if node is None:
        return []
    holder = _child_of_type(node, "type_list") or node
    return [
        scope.qualify(_text(child)).name
        for child in holder.named_children
        if child.type in _TYPE_NODES
    ]


def _first_type(node: Node) -> str:
    for child in node.named_children:
        if child.type in _TYPE_NODES:
            return _text(child)
    return _text(node)


def _parameters(node: Optional[Node], scope: _TypeScope) -> Tuple[Parameter, ...]:
    if node is None:
        return ()
    parameters: List[Parameter] = []
    for child in node.named_children:
        if child.type == "formal_parameter":
            type_ref = scope.qualify(_text(child.child_by_field_name("type")))
            name = _text(child.child_by_field_name("name"))
            dimensions = child.child_by_field_name("dimensions")
            if dimensions is not None:
                type_ref = TypeRef(type_ref.name, type_ref.dimensions + _text(dimensions).count("["))
        elif child.type == "spread_parameter":
            type_ref = scope.qualify(_first_type(child))
            type_ref = TypeRef(type_ref.name, type_ref.dimensions + 1)
            declarator = _child_of_type(child, "variable_declarator")
            name = _text(declarator.child_by_field_name("name")) if declarator else ""
        else:
            continue
        parameters.append(Parameter(type=type_ref, name=name or f"arg{len(parameters)}"))
    return tuple(parameters)


def _throws(node: Node, scope: _TypeScope) -> Tuple[TypeRef, ...]:
    throws = _child_of_type(node, "throws")
    if throws is None:
        return ()
    return tuple(
        scope.qualify(_text(child)) for child in throws.named_children if child.type in _TYPE_NODES
    )


def _child_of_type(node: Node, type_name: str) -> Optional[Node]:
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def _strip_annotations(text: str) -> str:
    stripped = _ANNOTATION_PATTERN.sub(" ", text)
    return " ".join(split_top_level(stripped, None))


def _text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8")


__all__ = ["JAVA_LANGUAGE", "JavaSourceSource"]
