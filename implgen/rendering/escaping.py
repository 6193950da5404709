"""Unicode escaping so generated sources are pure ASCII."""

from __future__ import annotations

import re

_ESCAPE_PATTERN = re.compile(r"\\u([0-9a-fA-F]{4})")


def escape_unicode(text: str) -> str:
    """Replace every UTF-16 code unit >= 128 with a ``\\uXXXX`` escape.

    Code points above U+FFFF are written as their surrogate pair, the way a
    Java compiler reads them back.
    """
    parts = []
    for char in text:
        code = ord(char)
        if code < 128:
            parts.append(char)
        elif code <= 0xFFFF:
            parts.append(f"\\u{code:04x}")
        else:
            offset = code - 0x10000
            parts.append(f"\\u{0xD800 + (offset >> 10):04x}")
            parts.append(f"\\u{0xDC00 + (offset & 0x3FF):04x}")
    return "".join(parts)


def unescape_unicode(text: str) -> str:
    """Decode ``\\uXXXX`` escapes produced by :func:`escape_unicode`."""
    decoded = _ESCAPE_PATTERN.sub(lambda match: chr(int(match.group(1), 16)), text)
    # Re-pair surrogate halves into the original astral characters.
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16")


__all__ = ["escape_unicode", "unescape_unicode"]
