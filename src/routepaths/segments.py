"""Route path template parsing."""

from __future__ import annotations

import enum
from dataclasses import dataclass

PARAM_SIGIL = "$"


class SegmentKind(enum.Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True, slots=True)
class Segment:
    """One component of a route path.

    Static:  ``users``    (kind=STATIC, text="users")
    Dynamic: ``$userId``  (kind=DYNAMIC, text="userId")
    """

    kind: SegmentKind
    text: str

    @property
    def is_dynamic(self) -> bool:
        return self.kind is SegmentKind.DYNAMIC


def parse_path(path: str) -> tuple[Segment, ...]:
    """Parse a path template into its ordered segments.

    Empty components (leading, trailing or doubled slashes) are dropped, so
    ``"/"`` and ``""`` both parse to an empty tuple.

    Examples::

        "/users"          -> (Segment(STATIC, "users"),)
        "/users/$userId"  -> (Segment(STATIC, "users"), Segment(DYNAMIC, "userId"))
    """
    segments: list[Segment] = []
    for part in path.split("/"):
        if not part:
            continue
        if part.startswith(PARAM_SIGIL):
            segments.append(Segment(SegmentKind.DYNAMIC, part[len(PARAM_SIGIL) :]))
        else:
            segments.append(Segment(SegmentKind.STATIC, part))
    return tuple(segments)
