"""
Variable expansion for generator commands.

Shell-style references are replaced from an explicit mapping rather than
from the process environment:

    $NAME       letters, digits and underscores, not starting with a digit
    ${NAME}     anything up to the closing brace
    $1 $* $?    single-character special names

Unknown names expand to the empty string. A ``$`` that does not start a
reference is left alone. An unclosed ``${`` is dropped, so ``a${b``
becomes ``ab``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

_REFERENCE = re.compile(
    r"""\$(?:
        \{(?P<braced>[^}]*)\}
      | (?P<unclosed>\{)
      | (?P<special>[*#$@!?\-0-9])
      | (?P<named>[A-Za-z_][A-Za-z0-9_]*)
    )""",
    re.VERBOSE,
)


def expand(template: str, mapping: Mapping[str, str]) -> str:
    """Replace ``$NAME`` / ``${NAME}`` references in template."""

    def _lookup(match: re.Match[str]) -> str:
        if match.group("unclosed"):
            return ""
        name = match.group("braced")
        if name is None:
            name = match.group("special") or match.group("named")
        return mapping.get(name, "")

    return _REFERENCE.sub(_lookup, template)
