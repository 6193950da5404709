"""YAML/JSON catalogs describing types, their members and constructors."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from ..constants import KIND_ANNOTATION, KIND_CLASS, KIND_INTERFACE, KNOWN_MODIFIERS, TYPE_KINDS
from ..errors import CatalogError
from ..logging import get_logger
from ..models import ConstructorInfo, MethodInfo, Parameter, TypeDeclaration, TypeRef
from .base import DeclarationSource, implicit_constructor, member_modifiers
from .signatures import (
    parse_member,
    resolve_type,
    split_top_level,
    type_parameter_bounds,
)

logger = get_logger("resolvers.catalog")


class CatalogSource(DeclarationSource):
    """Serves type declarations loaded from catalog files.

    A catalog is a mapping with a ``types`` list and an optional ``location``
    (the directory or jar holding the compiled originals, relative to the
    catalog file)::

        location: ../build/classes
        types:
          - name: com.example.Shape
            kind: interface
            modifiers: [public]
            extends: [com.example.Named]
            methods:
              - double area()
              - "java.lang.String describe(java.util.Locale locale) throws java.io.IOException"
    """

    def __init__(self, paths: Sequence[Path] = ()) -> None:
        self._declarations: Dict[str, TypeDeclaration] = {}
        for path in paths:
            self.load(path)

    def load(self, path: Path) -> None:
        """Read one catalog file and register its types."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"Failed to read catalog {path}: {exc}") from exc
        self.load_text(text, origin=str(path), base_dir=path.parent.resolve())

    def load_text(self, text: str, *, origin: str, base_dir: Path | None = None) -> None:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise CatalogError(f"Failed to parse catalog {origin}: {exc}") from exc
        self.load_data(data or {}, origin=origin, base_dir=base_dir)

    def load_data(
        self, data: Mapping[str, Any], *, origin: str, base_dir: Path | None = None
    ) -> None:
        if not isinstance(data, Mapping):
            raise CatalogError(f"Catalog {origin} must contain a mapping at the root")
        entries = data.get("types", [])
        if not isinstance(entries, list):
            raise CatalogError(f"Catalog {origin}: 'types' must be a list")
        location = _location(data.get("location"), base_dir)
        for index, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise CatalogError(f"Catalog {origin}: type #{index} must be a mapping")
            declaration = self._parse_type(entry, origin=origin, base_dir=base_dir, location=location)
            if declaration.canonical_name in self._declarations:
                logger.debug("Catalog %s redefines %s", origin, declaration.canonical_name)
            self._declarations[declaration.canonical_name] = declaration
        logger.debug("Loaded %d type(s) from %s", len(entries), origin)

    def declaration(self, name: str) -> Optional[TypeDeclaration]:
        return self._declarations.get(name)

    def names(self) -> List[str]:
        return sorted(self._declarations)

    # ------------------------------------------------------------------
    # Parsing helpers

    def _parse_type(
        self,
        entry: Mapping[str, Any],
        *,
        origin: str,
        base_dir: Path | None,
        location: Path | None,
    ) -> TypeDeclaration:
        raw_name = entry.get("name")
        if not isinstance(raw_name, str) or not raw_name.strip():
            raise CatalogError(f"Catalog {origin}: every type needs a 'name'")
        raw_name = raw_name.strip()
        bounds: Dict[str, str] = {}
        if "<" in raw_name:
            raw_name, _, params = raw_name.partition("<")
            bounds = type_parameter_bounds("<" + params)
        name = raw_name.strip()
        context = f"Catalog {origin}, type {name}"

        kind = str(entry.get("kind", KIND_CLASS))
        if kind not in TYPE_KINDS:
            raise CatalogError(f"{context}: unknown kind {kind!r}")

        package = entry.get("package")
        if package is None:
            package = name.rpartition(".")[0]
        elif not isinstance(package, str) or not (name == package or name.startswith(package + ".")):
            raise CatalogError(f"{context}: package {package!r} does not prefix the name")

        modifiers = _modifiers(entry.get("modifiers"), context)
        extends = _names(entry.get("extends"), context, "extends")
        implements = _names(entry.get("implements"), context, "implements")

        superclass: Optional[str] = None
        interfaces: List[str] = list(implements)
        if kind in {KIND_INTERFACE, KIND_ANNOTATION}:
            interfaces = extends + interfaces
        elif extends:
            if len(extends) > 1:
                raise CatalogError(f"{context}: a class can extend only one type")
            superclass = extends[0]

        declaration = TypeDeclaration(
            canonical_name=name,
            package=package,
            kind=kind,
            modifiers=modifiers,
            superclass=superclass,
            interfaces=interfaces,
            code_location=_location(entry.get("location"), base_dir) or location,
            internal=bool(entry.get("internal", False)),
        )
        declaration.methods = [
            self._parse_method(item, declaration, bounds, context)
            for item in _as_list(entry.get("methods"), context, "methods")
        ]
        declaration.constructors = [
            self._parse_constructor(item, declaration, bounds, context)
            for item in _as_list(entry.get("constructors"), context, "constructors")
        ]
        if kind == KIND_CLASS and not declaration.constructors:
            declaration.constructors = [implicit_constructor(declaration)]
        return declaration

    def _parse_method(
        self,
        item: Any,
        declaration: TypeDeclaration,
        bounds: Mapping[str, str],
        context: str,
    ) -> MethodInfo:
        if isinstance(item, str):
            try:
                parsed = parse_member(item, bounds=bounds)
                return_type = parsed.method_return_type()
            except ValueError as exc:
                raise CatalogError(f"{context}: {exc}") from exc
            return MethodInfo(
                name=parsed.name,
                return_type=return_type,
                parameters=parsed.parameters,
                exceptions=parsed.exceptions,
                modifiers=member_modifiers(parsed.modifiers, kind=declaration.kind),
                declaring_type=declaration.canonical_name,
            )
        if not isinstance(item, Mapping):
            raise CatalogError(f"{context}: methods must be strings or mappings")
        name = item.get("name")
        if not isinstance(name, str) or not name:
            raise CatalogError(f"{context}: method entries need a 'name'")
        return MethodInfo(
            name=name,
            return_type=_type(item.get("returns", "void"), bounds, context),
            parameters=_parameters(item.get("parameters"), bounds, context),
            exceptions=tuple(
                _type(exc, bounds, context) for exc in _as_list(item.get("throws"), context, "throws")
            ),
            modifiers=member_modifiers(
                _modifiers(item.get("modifiers"), context), kind=declaration.kind
            ),
            declaring_type=declaration.canonical_name,
        )

    def _parse_constructor(
        self,
        item: Any,
        declaration: TypeDeclaration,
        bounds: Mapping[str, str],
        context: str,
    ) -> ConstructorInfo:
        if isinstance(item, str):
            try:
                parsed = parse_member(item, constructor=True, bounds=bounds)
            except ValueError as exc:
                raise CatalogError(f"{context}: {exc}") from exc
            if parsed.name != declaration.simple_name:
                raise CatalogError(
                    f"{context}: constructor named {parsed.name!r}, expected {declaration.simple_name!r}"
                )
            return ConstructorInfo(
                parameters=parsed.parameters,
                exceptions=parsed.exceptions,
                modifiers=parsed.modifiers,
                declaring_type=declaration.canonical_name,
            )
        if not isinstance(item, Mapping):
            raise CatalogError(f"{context}: constructors must be strings or mappings")
        return ConstructorInfo(
            parameters=_parameters(item.get("parameters"), bounds, context),
            exceptions=tuple(
                _type(exc, bounds, context) for exc in _as_list(item.get("throws"), context, "throws")
            ),
            modifiers=_modifiers(item.get("modifiers"), context),
            declaring_type=declaration.canonical_name,
        )


def _as_list(value: Any, context: str, key: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise CatalogError(f"{context}: '{key}' must be a list")


def _names(value: Any, context: str, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()]
    return [str(item).strip() for item in _as_list(value, context, key)]


def _modifiers(value: Any, context: str) -> frozenset:
    if isinstance(value, str):
        value = value.split()
    modifiers = frozenset(str(item) for item in _as_list(value, context, "modifiers"))
    unknown = modifiers - KNOWN_MODIFIERS
    if unknown:
        raise CatalogError(f"{context}: unknown modifier(s) {', '.join(sorted(unknown))}")
    return modifiers


def _type(value: Any, bounds: Mapping[str, str], context: str) -> TypeRef:
    if not isinstance(value, str):
        raise CatalogError(f"{context}: type names must be strings, got {value!r}")
    try:
        return resolve_type(value, bounds)
    except ValueError as exc:
        raise CatalogError(f"{context}: {exc}") from exc


def _parameters(value: Any, bounds: Mapping[str, str], context: str) -> tuple:
    parameters: List[Parameter] = []
    for index, item in enumerate(_as_list(value, context, "parameters")):
        if isinstance(item, Mapping):
            type_text = item.get("type")
            name = item.get("name") or f"arg{index}"
        else:
            tokens = split_top_level(str(item), None)
            if len(tokens) > 1 and not tokens[-1].endswith(("...", "]", ">")):
                type_text, name = " ".join(tokens[:-1]), tokens[-1]
            else:
                type_text, name = str(item), f"arg{index}"
        parameters.append(Parameter(type=_type(type_text, bounds, context), name=str(name)))
    return tuple(parameters)


def _location(value: Any, base_dir: Path | None) -> Path | None:
    if not value:
        return None
    path = Path(str(value)).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


__all__ = ["CatalogSource"]
