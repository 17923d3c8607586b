"""
Directive parser — find a `helm:generate` line at the top of a file.

Only the first line is ever looked at. Three comment styles are
recognized, each optionally followed by a single space:

    # helm:generate <command>
    // helm:generate <command>
    /* helm:generate <command> */

The parser answers with the command text, or "" when the file carries
no directive. Short files and unrelated comments are "no directive",
not errors.
"""

from __future__ import annotations

import os
from typing import BinaryIO

from helmgen.core.engine.errors import DirectiveError
from helmgen.core.models.settings import GENERATOR_KEYWORD

_OPENER_PEEK = 3
_BLOCK_SUFFIX = "*/"


def comment_opener(head: bytes) -> tuple[int, str] | None:
    """Classify the leading bytes of a file as a comment opener.

    Args:
        head: At least the first three bytes of the file.

    Returns:
        (opener_length, closing_suffix), or None when the bytes do not
        start a recognized comment. The suffix is "" for line comments.
    """
    if head[:1] == b"#":
        return (2 if head[1:2] == b" " else 1), ""

    if head[:2] in (b"//", b"/*"):
        length = 3 if head[2:3] == b" " else 2
        suffix = _BLOCK_SUFFIX if head[:2] == b"/*" else ""
        return length, suffix

    return None


def read_generator(stream: BinaryIO, keyword: str = GENERATOR_KEYWORD) -> str:
    """Read the generator command from an open binary file.

    Args:
        stream: File opened in binary mode, positioned at the start.
        keyword: Text that must follow the comment opener exactly.

    Returns:
        The command template without the keyword, stripped of surrounding
        whitespace (and of a trailing ``*/`` for block comments). An empty
        string means the file has no directive.

    Raises:
        DirectiveError: The keyword matched but the line has no newline.
        OSError: Reading the file failed.
    """
    head = stream.read(_OPENER_PEEK)
    if len(head) < _OPENER_PEEK:
        return ""

    opener = comment_opener(head)
    if opener is None:
        return ""
    offset, suffix = opener

    # Bytes already read past the opener count toward the keyword
    expected = keyword.encode("utf-8")
    slug = head[offset:]
    if len(slug) < len(expected):
        slug += stream.read(len(expected) - len(slug))
    if len(slug) < len(expected):
        return ""

    if slug != expected:
        return ""

    raw = stream.readline()
    if not raw.endswith(b"\n"):
        name = getattr(stream, "name", "<stream>")
        raise DirectiveError(f"{name}: unexpected end of file in {keyword.strip()} line")

    line = os.fsdecode(raw).strip()
    if suffix:
        line = line.removesuffix(suffix).strip()
    return line
