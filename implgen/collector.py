"""Collects the abstract obligations and inheritable constructors of a type."""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Deque, Dict, Iterator, List, Set, Tuple, Union

from .logging import get_logger
from .models import ConstructorInfo, MemberSignature, MethodInfo, TypeDescriptor

_OverrideKey = Tuple[str, Tuple[str, ...]]

logger = get_logger("collector")


class AbstractMemberSet:
    """Abstract methods keyed by MemberSignature, first declaration wins.

    A signature reached through several ancestors is a single obligation. When
    the duplicates disagree on their ``throws`` lists, the kept representative
    only declares the exceptions common to all of them, which is what an
    override of every one of those declarations is allowed to throw.
    """

    def __init__(self) -> None:
        self._entries: Dict[MemberSignature, MethodInfo] = {}

    def add(self, method: MethodInfo) -> bool:
        """Record ``method``; return False when its signature was already present."""
        signature = MemberSignature.of(method)
        existing = self._entries.get(signature)
        if existing is None:
            self._entries[signature] = method
            return True
        if set(existing.exceptions) != set(method.exceptions):
            shared = tuple(exc for exc in existing.exceptions if exc in method.exceptions)
            logger.debug(
                "Narrowing throws clause of %s to %d shared exception(s)",
                method.name,
                len(shared),
            )
            self._entries[signature] = replace(existing, exceptions=shared)
        return False

    def signatures(self) -> List[MemberSignature]:
        return list(self._entries)

    def get(self, signature: MemberSignature) -> MethodInfo | None:
        return self._entries.get(signature)

    def __contains__(self, item: Union[MemberSignature, MethodInfo]) -> bool:
        if isinstance(item, MethodInfo):
            item = MemberSignature.of(item)
        return item in self._entries

    def __iter__(self) -> Iterator[MethodInfo]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)


def collect_abstract_members(descriptor: TypeDescriptor) -> AbstractMemberSet:
    """Return every abstract method a concrete subtype of ``descriptor`` must implement."""
    members = AbstractMemberSet()
    for method in _public_obligations(descriptor):
        members.add(method)

    overridden: Set[_OverrideKey] = set()
    for level in descriptor.class_chain():
        if level.is_root:
            break
        for method in level.methods:
            if method.is_abstract and method.override_key not in overridden:
                members.add(method)
        # Any redeclaration, abstract or concrete, hides the ones above it.
        overridden.update(
            method.override_key
            for method in level.methods
            if not method.is_static and not method.is_private
        )

    logger.debug(
        "Collected %d abstract member(s) for %s", len(members), descriptor.canonical_name
    )
    return members


def collect_constructors(descriptor: TypeDescriptor) -> List[ConstructorInfo]:
    """Return the non-private constructors declared directly on a class target."""
    if descriptor.is_interface:
        return []
    return [ctor for ctor in descriptor.constructors if not ctor.is_private]


def _public_obligations(descriptor: TypeDescriptor) -> Iterator[MethodInfo]:
    """Yield abstract methods visible through the public surface of ``descriptor``.

    Mirrors ``Class.getMethods``: class declarations hide interface ones with the
    same name and parameters, subclasses hide superclasses and subinterfaces hide
    superinterfaces. Default methods stay concrete unless an abstract or another
    unrelated default declaration survives next to them.
    """
    class_methods: Dict[_OverrideKey, MethodInfo] = {}
    if not descriptor.is_interface:
        for level in descriptor.class_chain():
            for method in level.methods:
                if method.is_public and not method.is_static:
                    class_methods.setdefault(method.override_key, method)

    interface_methods: Dict[_OverrideKey, List[Tuple[TypeDescriptor, MethodInfo]]] = {}
    for interface in _all_interfaces(descriptor):
        for method in interface.methods:
            if method.is_static or method.is_private:
                continue
            if method.override_key in class_methods:
                continue
            interface_methods.setdefault(method.override_key, []).append((interface, method))

    for method in class_methods.values():
        if method.is_abstract:
            yield method

    for declarations in interface_methods.values():
        surviving = [
            method
            for owner, method in declarations
            if not any(
                other is not owner and _extends_interface(other, owner)
                for other, _ in declarations
            )
        ]
        abstract = [method for method in surviving if method.is_abstract]
        if abstract:
            yield from abstract
        elif len(surviving) > 1:
            # Unrelated defaults conflict and must be overridden explicitly.
            yield surviving[0]


def _all_interfaces(descriptor: TypeDescriptor) -> List[TypeDescriptor]:
    pending: Deque[TypeDescriptor] = deque()
    if descriptor.is_interface:
        pending.append(descriptor)
    else:
        for level in descriptor.class_chain():
            pending.extend(level.interfaces)

    seen: Dict[str, TypeDescriptor] = {}
    while pending:
        interface = pending.popleft()
        if interface.canonical_name in seen:
            continue
        seen[interface.canonical_name] = interface
        pending.extend(interface.interfaces)
    return list(seen.values())


def _extends_interface(candidate: TypeDescriptor, ancestor: TypeDescriptor) -> bool:
    """Return True when ``candidate`` transitively extends ``ancestor``."""
    pending: Deque[TypeDescriptor] = deque(candidate.interfaces)
    visited: Set[str] = set()
    while pending:
        current = pending.popleft()
        if current.canonical_name == ancestor.canonical_name:
            return True
        if current.canonical_name in visited:
            continue
        visited.add(current.canonical_name)
        pending.extend(current.interfaces)
    return False


__all__ = ["AbstractMemberSet", "collect_abstract_members", "collect_constructors"]
