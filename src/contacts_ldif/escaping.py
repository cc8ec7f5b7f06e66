"""
Attribute value escaping following the RFC 4514 distinguished-name grammar.

Values are treated as single-byte text: characters above U+00FF are narrowed
to their low byte before being hex-escaped, so U+20AC becomes ``\\AC``.
The output is always importable; it is not Unicode-correct.
"""

from __future__ import annotations

import re

SPECIAL_CHARS = ',+"\\<>;'

# Leading '#'/space, a special, trailing space, or anything outside printable ASCII.
NEEDS_ESCAPE_RE = re.compile(r'^[# ]|[,+"\\<>;\x00-\x1f\x7f-\U0010ffff]| $')
ESCAPE_CHAR_RE = re.compile(r'[,+"\\<>;\x00-\x1f\x7f-\U0010ffff]')


def narrow_to_byte(ch: str) -> int:
    return ord(ch) & 0xFF


def hex_escape(ch: str) -> str:
    return "\\%02X" % narrow_to_byte(ch)


def needs_escaping(value: str) -> bool:
    return bool(value) and NEEDS_ESCAPE_RE.search(value) is not None


def escape_value(value: str) -> str:
    """
    Escape ``value`` so it can be embedded in a DN or a plain attribute line.

    A single trailing space is dropped from the main pass and ``\\20`` is
    appended at the very end. A leading ``#`` or space is hex-escaped at
    position 0. Every special character and every non-printable or
    non-ASCII character is replaced by ``\\NN``; runs of other characters
    are copied verbatim.
    """
    if not needs_escaping(value):
        return value

    tail = ""
    if len(value) > 1 and value.endswith(" "):
        value = value[:-1]
        tail = "\\20"

    parts = []
    start = 0
    if value[0] in "# ":
        parts.append(hex_escape(value[0]))
        start = 1

    position = start
    for match in ESCAPE_CHAR_RE.finditer(value, start):
        parts.append(value[position : match.start()])
        parts.append(hex_escape(match.group()))
        position = match.end()
    parts.append(value[position:])
    parts.append(tail)
    return "".join(parts)
