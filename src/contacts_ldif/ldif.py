from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .escaping import escape_value

OBJECT_CLASSES = (
    "top",
    "person",
    "organizationalPerson",
    "inetOrgPerson",
    "mozillaAbPersonAlpha",
)


@dataclass(frozen=True)
class LdifSettings:
    # Turning this off keeps multi-line values readable while debugging.
    base64_multiline: bool = True


DEFAULT_SETTINGS = LdifSettings()


def _is_multiline(value: str) -> bool:
    return "\n" in value or "\r" in value


def encode_base64(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def emit_attribute(
    attribute: str,
    value: Optional[str],
    pre_escaped: bool = False,
    settings: Optional[LdifSettings] = None,
) -> Optional[str]:
    """
    Render one ``attribute: value`` line, or ``None`` when there is no value.

    ``pre_escaped`` values are written verbatim. Values containing a line
    break are written as ``attribute:: <base64>`` unless base64 output is
    disabled; everything else goes through :func:`escape_value`.
    """
    if not value:
        return None
    settings = settings or DEFAULT_SETTINGS
    if pre_escaped:
        return f"{attribute}: {value}"
    if settings.base64_multiline and _is_multiline(value):
        return f"{attribute}:: {encode_base64(value)}"
    return f"{attribute}: {escape_value(value)}"


def build_dn(full_name: Optional[str], email: Optional[str]) -> str:
    components = []
    if full_name:
        components.append(f"cn={escape_value(full_name)}")
    if email:
        components.append(f"mail={escape_value(email)}")
    return ",".join(components)


def render_entry(lines: Iterable[str]) -> str:
    body: List[str] = list(lines)
    return "\n".join(body) + "\n\n"
