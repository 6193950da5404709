"""Parser for compact Java-like member signatures used in catalogs.

Accepted shapes::

    public abstract <T extends java.lang.Number> T pick(java.util.List<T> items, int... rest) throws java.io.IOException
    protected Widget(java.lang.String name)

Generic arguments are erased and method type variables are replaced by their
first bound (``java.lang.Object`` when unbounded).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ..constants import KNOWN_MODIFIERS, ROOT_TYPE
from ..models import Parameter, TypeRef, erase_generics


class SignatureSyntaxError(ValueError):
    """Raised when a member signature cannot be parsed."""


@dataclass(frozen=True)
class ParsedMember:
    """Pieces of a parsed method or constructor signature."""

    name: str
    modifiers: frozenset
    return_type: Optional[TypeRef]
    parameters: Tuple[Parameter, ...]
    exceptions: Tuple[TypeRef, ...]

    def method_return_type(self) -> TypeRef:
        """Return the declared return type; constructors have none."""
        if self.return_type is None:
            raise SignatureSyntaxError(f"{self.name} is a constructor, not a method")
        return self.return_type


def split_top_level(text: str, separator: str | None) -> List[str]:
    """Split on ``separator`` (whitespace when None) outside of ``<...>`` groups."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth = max(depth - 1, 0)
        is_separator = char.isspace() if separator is None else char == separator
        if is_separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def type_parameter_bounds(text: str) -> Dict[str, str]:
    """Map each variable in ``<T, U extends Foo & Bar>`` to its erased first bound."""
    inner = text.strip()
    if inner.startswith("<") and inner.endswith(">"):
        inner = inner[1:-1]
    bounds: Dict[str, str] = {}
    for item in split_top_level(inner, ","):
        tokens = item.split(None, 2)
        if not tokens:
            continue
        name = tokens[0]
        if len(tokens) == 3 and tokens[1] == "extends":
            first = split_top_level(tokens[2], "&")[0]
            bounds[name] = erase_generics(first).strip()
        else:
            bounds[name] = ROOT_TYPE
    return bounds


def resolve_type(text: str, bounds: Mapping[str, str]) -> TypeRef:
    """Parse ``text`` and substitute type variables with their bounds."""
    ref = TypeRef.parse(_strip_annotations(text))
    bound = bounds.get(ref.name)
    if bound is not None:
        base = TypeRef.parse(bound)
        return TypeRef(name=base.name, dimensions=base.dimensions + ref.dimensions)
    return ref


def parse_member(
    text: str,
    *,
    constructor: bool = False,
    bounds: Mapping[str, str] | None = None,
) -> ParsedMember:
    """Parse one method (or constructor) signature string."""
    source = " ".join(text.strip().rstrip(";").split())
    open_index = source.find("(")
    close_index = source.rfind(")")
    if open_index <= 0 or close_index < open_index:
        raise SignatureSyntaxError(f"Missing parameter list in {text!r}")

    head_tokens = split_top_level(source[:open_index], None)
    params_text = source[open_index + 1 : close_index]
    tail = source[close_index + 1 :].strip()

    modifiers = set()
    while head_tokens and head_tokens[0] in KNOWN_MODIFIERS:
        modifiers.add(head_tokens.pop(0))

    scope: Dict[str, str] = dict(bounds or {})
    if head_tokens and head_tokens[0].startswith("<"):
        scope.update(type_parameter_bounds(head_tokens.pop(0)))

    if not head_tokens:
        raise SignatureSyntaxError(f"Missing member name in {text!r}")
    name = head_tokens.pop()
    if not name.replace("$", "_").isidentifier():
        raise SignatureSyntaxError(f"Invalid member name {name!r} in {text!r}")

    return_type: Optional[TypeRef] = None
    if constructor:
        if head_tokens:
            raise SignatureSyntaxError(f"Constructor signature has a return type: {text!r}")
    else:
        if not head_tokens:
            raise SignatureSyntaxError(f"Missing return type in {text!r}")
        return_type = resolve_type(" ".join(head_tokens), scope)

    parameters = tuple(
        _parse_parameter(item, index, scope)
        for index, item in enumerate(split_top_level(params_text, ","))
    )

    exceptions: Tuple[TypeRef, ...] = ()
    if tail:
        if not tail.startswith("throws "):
            raise SignatureSyntaxError(f"Unexpected text after parameters in {text!r}")
        exceptions = tuple(
            resolve_type(item, scope) for item in split_top_level(tail[len("throws ") :], ",")
        )

    return ParsedMember(
        name=name,
        modifiers=frozenset(modifiers),
        return_type=return_type,
        parameters=parameters,
        exceptions=exceptions,
    )


def _parse_parameter(text: str, index: int, bounds: Mapping[str, str]) -> Parameter:
    tokens = [token for token in split_top_level(_strip_annotations(text), None) if token != "final"]
    if not tokens:
        raise SignatureSyntaxError(f"Empty parameter at position {index}")
    if len(tokens) == 1 or tokens[-1] == "..." or tokens[-1].endswith(("...", ">")):
        type_text, name = " ".join(tokens), f"arg{index}"
    else:
        type_text, name = " ".join(tokens[:-1]), tokens[-1]
    # C-style array declarators: ``int values[]``.
    while name.endswith("[]"):
        name = name[:-2]
        type_text += "[]"
    return Parameter(type=resolve_type(type_text, bounds), name=name)


def _strip_annotations(text: str) -> str:
    tokens = split_top_level(text, None)
    return " ".join(token for token in tokens if not token.startswith("@"))


__all__ = [
    "ParsedMember",
    "SignatureSyntaxError",
    "parse_member",
    "resolve_type",
    "split_top_level",
    "type_parameter_bounds",
]
