"""Accessor name derivation.

``derive_name`` is the single source of truth for both the generated
accessor names and collision detection in the extractor: two paths
collide exactly when they derive the same identifier.
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Sequence
from dataclasses import dataclass

from routepaths.errors import InvalidSegmentError
from routepaths.segments import Segment

ROOT_IDENTIFIER = "root"

# Names legal in both Python and TypeScript output.
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_]+$")

# Words TypeScript rejects as parameter or binding names (strict mode).
_TS_RESERVED = frozenset(
    {
        "await", "break", "case", "catch", "class", "const", "continue", "debugger", "default",
        "delete", "do", "else", "enum", "export", "extends", "false", "finally", "for", "function",
        "if", "implements", "import", "in", "instanceof", "interface", "let", "new", "null",
        "package", "private", "protected", "public", "return", "static", "super", "switch",
        "this", "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    }
)  # fmt: skip


@dataclass(frozen=True, slots=True)
class RouteName:
    identifier: str
    parameters: tuple[str, ...] = ()


def is_reserved(name: str) -> bool:
    """True if *name* is a keyword in either Python or TypeScript."""
    return keyword.iskeyword(name) or name in _TS_RESERVED


def capitalize(text: str) -> str:
    """Upper-case the first character only; the remainder is left untouched."""
    return text[:1].upper() + text[1:]


def derive_name(segments: Sequence[Segment], *, path: str = "") -> RouteName:
    """Derive the camelCase identifier and parameter list for *segments*.

    Static segments contribute ``Capitalize(text)``; dynamic segments
    contribute ``"By" + Capitalize(name)`` and append ``name`` to the
    parameters. The first character of the result is lower-cased::

        /users/$userId/posts/$postId -> usersByUserIdPostsByPostId(userId, postId)

    An empty sequence yields ``root``.

    Raises :class:`InvalidSegmentError` if a segment cannot be part of a
    valid identifier. *path* is only used in the error message.
    """
    if not segments:
        return RouteName(ROOT_IDENTIFIER)

    parts: list[str] = []
    parameters: list[str] = []
    for segment in segments:
        if segment.is_dynamic:
            _check_parameter(segment.text, path)
            if segment.text in parameters:
                raise InvalidSegmentError(path, "$" + segment.text, "duplicate parameter name")
            parts.append("By" + capitalize(segment.text))
            parameters.append(segment.text)
        else:
            if not _SEGMENT_RE.match(segment.text):
                raise InvalidSegmentError(path, segment.text, "only letters, digits and underscores are allowed")
            parts.append(capitalize(segment.text))

    joined = "".join(parts)
    identifier = joined[:1].lower() + joined[1:]
    if not _IDENTIFIER_RE.match(identifier):
        raise InvalidSegmentError(path, segments[0].text, f"derived name {identifier!r} is not an identifier")
    if keyword.iskeyword(identifier):
        raise InvalidSegmentError(path, segments[0].text, f"derived name {identifier!r} is a reserved word")
    return RouteName(identifier, tuple(parameters))


def _check_parameter(name: str, path: str) -> None:
    if not name:
        raise InvalidSegmentError(path, "$", "parameter has no name")
    if not _IDENTIFIER_RE.match(name):
        raise InvalidSegmentError(path, "$" + name, "parameter name is not an identifier")
    if is_reserved(name):
        raise InvalidSegmentError(path, "$" + name, "parameter name is a reserved word")
