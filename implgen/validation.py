"""Eligibility checks deciding whether a type can be implemented at all."""

from __future__ import annotations

from typing import Optional

from .constants import INTERNAL_TYPES, KIND_ENUM, KIND_RECORD, MARKER_TYPES
from .errors import InvalidTargetError
from .models import TypeDescriptor


def rejection_reason(descriptor: TypeDescriptor) -> Optional[str]:
    """Return why ``descriptor`` cannot be implemented, or None when it can."""
    name = descriptor.canonical_name
    if descriptor.is_primitive:
        return f"{name} is a primitive type"
    if name in MARKER_TYPES:
        return f"{name} is a language marker type"
    if descriptor.kind in {KIND_ENUM, KIND_RECORD}:
        return f"{name} is declared as {descriptor.kind}"
    if "final" in descriptor.modifiers:
        return f"{name} is final"
    if "private" in descriptor.modifiers:
        return f"{name} is private"
    if "sealed" in descriptor.modifiers:
        return f"{name} is sealed"
    if descriptor.internal or name in INTERNAL_TYPES:
        return f"{name} is an internal type not meant for extension"
    return None


def is_eligible(descriptor: TypeDescriptor) -> bool:
    """Return True when an implementation can be generated for ``descriptor``."""
    return rejection_reason(descriptor) is None


def ensure_eligible(descriptor: TypeDescriptor) -> None:
    """Raise InvalidTargetError when ``descriptor`` fails the eligibility gate."""
    reason = rejection_reason(descriptor)
    if reason is not None:
        raise InvalidTargetError(f"Cannot implement {descriptor.canonical_name}: {reason}")


__all__ = ["ensure_eligible", "is_eligible", "rejection_reason"]
