"""Tests for the eligibility gate."""

from __future__ import annotations

import pytest

from implgen.errors import InvalidTargetError
from implgen.models import TypeDescriptor
from implgen.resolvers import TypeIndex
from implgen.validation import ensure_eligible, is_eligible, rejection_reason

from tests._fixtures.type_builder import interface, klass


@pytest.mark.parametrize(
    "name", ["int", "void", "java.lang.Record", "java.lang.Enum", "java.lang.String"]
)
def test_builtin_types_are_rejected(builtin_index: TypeIndex, name: str) -> None:
    assert not is_eligible(builtin_index.resolve(name))


def test_internal_denylist_is_rejected(builtin_index: TypeIndex) -> None:
    descriptor = builtin_index.resolve("javax.annotation.processing.Completions")
    assert "internal" in (rejection_reason(descriptor) or "")


@pytest.mark.parametrize(
    ("modifiers", "reason"),
    [
        (("public", "final"), "is final"),
        (("private", "static", "abstract"), "is private"),
        (("public", "sealed", "abstract"), "is sealed"),
    ],
)
def test_modifiers_reject_classes(modifiers: tuple, reason: str) -> None:
    descriptor = klass("com.example.Widget", modifiers=modifiers)
    with pytest.raises(InvalidTargetError) as excinfo:
        ensure_eligible(descriptor)
    assert reason in str(excinfo.value)
    assert "com.example.Widget" in str(excinfo.value)


@pytest.mark.parametrize("kind", ["enum", "record"])
def test_enum_and_record_kinds_are_rejected(kind: str) -> None:
    descriptor = TypeDescriptor(canonical_name="com.example.Color", kind=kind)
    assert rejection_reason(descriptor) == f"com.example.Color is declared as {kind}"


def test_internal_flag_is_rejected() -> None:
    descriptor = TypeDescriptor(canonical_name="com.example.Hidden", internal=True)
    assert not is_eligible(descriptor)


def test_abstract_classes_and_interfaces_pass(builtin_index: TypeIndex) -> None:
    assert is_eligible(klass("com.example.Base"))
    assert is_eligible(interface("com.example.Shape"))
    assert is_eligible(builtin_index.resolve("java.lang.Number"))
    ensure_eligible(builtin_index.resolve("java.lang.Runnable"))
