"""String helpers shared by the text model and the workbook layouts."""

from __future__ import annotations

import re

from locsheet.errors import FormatError

COMPOSITE_SEPARATOR = ","
NAMESPACE_SEPARATOR = "."

# A line feed that is not already part of a CRLF pair
_BARE_LF = re.compile(r"(?<!\r)\n")


def make_composite_name(namespace: str, key: str) -> str:
    """Build the ``ID`` cell value for a record: ``"<namespace>,<key>"``."""
    return f"{namespace}{COMPOSITE_SEPARATOR}{key}"


def parse_composite_key(name: str) -> str:
    """Return the key part of a composite ``ID`` cell value.

    Raises:
        FormatError: If the value does not contain exactly one separator.
    """
    parts = name.split(COMPOSITE_SEPARATOR)
    if len(parts) != 2:
        raise FormatError(f"Invalid composite ID: {name!r}")
    return parts[1]


def normalize_multiline(text: str | None) -> str:
    """Convert every bare ``\\n`` into ``\\r\\n``.

    Excel's cell editor expects CRLF line breaks in multi-line cells.
    Existing ``\\r\\n`` pairs are left alone, so the function is idempotent.
    """
    if not text:
        return ""
    return _BARE_LF.sub("\r\n", text)


def make_namespace_name(parent: str, child: str) -> str:
    """Join two namespace names into a dotted path."""
    if not parent:
        return child
    return f"{parent}{NAMESPACE_SEPARATOR}{child}"


def split_namespace_name(full_name: str) -> list[str]:
    """Split a dotted namespace path into its parts."""
    return full_name.split(NAMESPACE_SEPARATOR)
