"""Java source rendering for generated implementations."""

from .escaping import escape_unicode, unescape_unicode
from .members import default_return, render_constructor, render_method
from .source import RenderedSource, SourceRenderer, render_file

__all__ = [
    "RenderedSource",
    "SourceRenderer",
    "default_return",
    "escape_unicode",
    "render_constructor",
    "render_file",
    "render_method",
    "unescape_unicode",
]
