"""Assembles the generated compilation unit from a header and member blocks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..constants import SOURCE_EXTENSION
from ..models import ConstructorInfo, MethodInfo, TypeDescriptor
from .escaping import escape_unicode
from .members import render_constructor, render_method

DEFAULT_TEMPLATES = Path(__file__).with_name("templates")
FILE_TEMPLATE = "impl.java.j2"


@dataclass(frozen=True)
class RenderedSource:
    """Full text of a generated implementation."""

    package: str
    class_name: str
    text: str

    @property
    def file_name(self) -> str:
        return self.class_name + SOURCE_EXTENSION

    def escaped(self) -> str:
        """Return the text with every non-ASCII character written as ``\\uXXXX``."""
        return escape_unicode(self.text)


class SourceRenderer:
    """Renders implementation classes through a jinja2 file template.

    A ``templates_dir`` holding its own ``impl.java.j2`` overrides the bundled one.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = [str(templates_dir)] if templates_dir else []
        directories.append(str(DEFAULT_TEMPLATES))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._template: Template = self._env.get_template(FILE_TEMPLATE)

    def render_file(
        self,
        descriptor: TypeDescriptor,
        members: Iterable[MethodInfo],
        constructors: Sequence[ConstructorInfo] = (),
    ) -> RenderedSource:
        """Render the implementation of ``descriptor`` with the given members."""
        blocks: List[str] = []
        if not descriptor.is_interface:
            blocks.extend(render_constructor(ctor, descriptor.impl_name) for ctor in constructors)
        blocks.extend(render_method(method) for method in members)
        return RenderedSource(
            package=descriptor.package,
            class_name=descriptor.impl_name,
            text=self._render(descriptor, blocks=blocks),
        )

    def _render(self, descriptor: TypeDescriptor, *, blocks: Sequence[str]) -> str:
        return self._template.render(
            package=descriptor.package,
            class_name=descriptor.impl_name,
            relation="implements" if descriptor.is_interface else "extends",
            supertype=descriptor.canonical_name,
            blocks=blocks,
        )


def render_file(
    descriptor: TypeDescriptor,
    members: Iterable[MethodInfo],
    constructors: Sequence[ConstructorInfo] = (),
) -> RenderedSource:
    """Render ``descriptor`` with the default template."""
    return SourceRenderer().render_file(descriptor, members, constructors)


__all__ = ["RenderedSource", "SourceRenderer", "render_file"]
