"""Helpers for lowering JSX to ``React.createElement`` calls.

The whitespace and entity rules follow the classic React JSX transform so
that converted components render exactly the text their TSX originals do.
"""

from __future__ import annotations

import html
import json
import re

PRAGMA = "React.createElement"
PRAGMA_FRAG = "React.Fragment"
PURE_ANNOTATION = "/*#__PURE__*/"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_LINE_BREAK = re.compile(r"\r\n|\n|\r")
_ATTRIBUTE_BREAK = re.compile(r"\n\s+")


def string_literal(value: str) -> str:
    """Render ``value`` as a double-quoted JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def is_intrinsic_tag(name: str) -> bool:
    """Lowercase tags (``div``, ``my-widget``) are host elements."""
    return bool(name) and "a" <= name[0] <= "z"


def property_key(name: str) -> str:
    """Object key for an attribute name, quoted when not an identifier."""
    return name if _IDENTIFIER.match(name) else string_literal(name)


def attribute_string(raw: str) -> str:
    """Literal for a quoted attribute value (without its quotes)."""
    return string_literal(_ATTRIBUTE_BREAK.sub(" ", html.unescape(raw)))


def clean_text(raw: str) -> str | None:
    """Collapse a run of JSX text the way React's JSX transform does.

    Each line loses leading whitespace (except the first) and trailing
    whitespace (except the last); empty lines are dropped and the rest
    joined with single spaces. Returns None when nothing is left.
    """
    lines = _LINE_BREAK.split(html.unescape(raw))

    last_non_empty = 0
    for index, line in enumerate(lines):
        if re.search(r"[^ \t]", line):
            last_non_empty = index

    pieces = []
    for index, line in enumerate(lines):
        trimmed = line.replace("\t", " ")
        if index != 0:
            trimmed = trimmed.lstrip(" ")
        if index != len(lines) - 1:
            trimmed = trimmed.rstrip(" ")
        if trimmed:
            if index != last_non_empty:
                trimmed += " "
            pieces.append(trimmed)

    text = "".join(pieces)
    return text or None


def create_element(element_type: str, props: list[str], children: list[str]) -> str:
    """Build the ``createElement`` call for already-converted parts."""
    props_arg = "{ " + ", ".join(props) + " }" if props else "null"
    args = [element_type, props_arg, *children]
    return f"{PURE_ANNOTATION}{PRAGMA}({', '.join(args)})"


__all__ = [
    "PRAGMA",
    "PRAGMA_FRAG",
    "attribute_string",
    "clean_text",
    "create_element",
    "is_intrinsic_tag",
    "property_key",
    "string_literal",
]
