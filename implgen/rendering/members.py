"""Renders single methods and constructors as Java source blocks."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..constants import ACCESS_MODIFIERS, MODIFIER_ORDER, STRIPPED_MEMBER_MODIFIERS
from ..models import ConstructorInfo, MethodInfo, Parameter, TypeRef

INDENT = "    "


def render_modifiers(modifiers: Iterable[str]) -> str:
    """Return the modifiers of a generated member, always public, in canonical order."""
    kept = {
        modifier
        for modifier in modifiers
        if modifier not in STRIPPED_MEMBER_MODIFIERS and modifier not in ACCESS_MODIFIERS
    }
    kept.add("public")
    return " ".join(modifier for modifier in MODIFIER_ORDER if modifier in kept)


def render_parameters(parameters: Sequence[Parameter], *, with_types: bool = True) -> str:
    names = parameter_names(parameters)
    if with_types:
        items = [f"{param.type.canonical_name} {name}" for param, name in zip(parameters, names)]
    else:
        items = names
    return "(" + ", ".join(items) + ")"


def parameter_names(parameters: Sequence[Parameter]) -> List[str]:
    """Return parameter names, falling back to ``argN`` for blanks and duplicates."""
    names: List[str] = []
    for index, parameter in enumerate(parameters):
        name = parameter.name or f"arg{index}"
        if name in names:
            name = f"arg{index}"
        while name in names:
            name = f"_{name}"
        names.append(name)
    return names


def render_throws(exceptions: Sequence[TypeRef]) -> str:
    if not exceptions:
        return ""
    return " throws " + ", ".join(exc.canonical_name for exc in exceptions)


def default_return(return_type: TypeRef) -> str:
    """Return the statement that yields the default value of ``return_type``."""
    if return_type.is_boolean:
        return "return true;"
    if return_type.is_void:
        return "return;"
    if return_type.is_primitive:
        return "return 0;"
    return "return null;"


def render_method(method: MethodInfo) -> str:
    """Render ``method`` as a concrete override returning its default value."""
    header = (
        f"{render_modifiers(method.modifiers)} {method.return_type.canonical_name} "
        f"{method.name}{render_parameters(method.parameters)}"
        f"{render_throws(method.exceptions)}"
    )
    return _block(header, default_return(method.return_type))


def render_constructor(ctor: ConstructorInfo, simple_name: str) -> str:
    """Render a constructor of ``simple_name`` forwarding to the superclass."""
    header = (
        f"{render_modifiers(ctor.modifiers)} {simple_name}"
        f"{render_parameters(ctor.parameters)}{render_throws(ctor.exceptions)}"
    )
    body = f"super{render_parameters(ctor.parameters, with_types=False)};"
    return _block(header, body)


def _block(header: str, statement: str) -> str:
    return f"{INDENT}{header} {{\n{INDENT}{INDENT}{statement}\n{INDENT}}}\n"


__all__ = [
    "default_return",
    "parameter_names",
    "render_constructor",
    "render_method",
    "render_modifiers",
    "render_parameters",
    "render_throws",
]
