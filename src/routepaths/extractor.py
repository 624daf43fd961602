"""Route discovery in a route-tree artifact.

The scan is lexical: every ``path: '<template>'`` literal in the text is
a candidate, wherever it appears. Nothing here depends on the structure
of the route tree, so supporting another input format only means
swapping :func:`iter_path_literals`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from routepaths.errors import InvalidSegmentError
from routepaths.naming import derive_name
from routepaths.segments import parse_path

logger = logging.getLogger("routepaths.extractor")

# path: '/users', path: "/users/$id", path: `/a/b`
PATH_PATTERN = re.compile(r"path:\s*['\"`]([^'\"`]+)['\"`]")


@dataclass(frozen=True, slots=True)
class Route:
    """One generatable accessor."""

    source_path: str
    identifier: str
    parameters: tuple[str, ...] = ()


def iter_path_literals(content: str) -> Iterator[str]:
    """Yield every path template literal in *content*, in source order."""
    for match in PATH_PATTERN.finditer(content):
        yield match.group(1)


def parse_route(path: str) -> Route:
    """Build a :class:`Route` for a single path template.

    Raises :class:`InvalidSegmentError` if the path cannot be named.
    """
    name = derive_name(parse_path(path), path=path)
    return Route(source_path=path, identifier=name.identifier, parameters=name.parameters)


def extract_routes(content: str) -> list[Route]:
    """Return the distinct routes found in *content*, in first-seen order.

    Root (``/``) and empty templates are discarded. When two templates
    derive the same identifier the first one in source order wins.
    """
    routes: list[Route] = []
    seen: set[str] = set()

    for path in iter_path_literals(content):
        if not path or path == "/":
            continue
        try:
            route = parse_route(path)
        except InvalidSegmentError as exc:
            logger.warning("[route-paths] Skipping %s", exc)
            continue
        if route.identifier in seen:
            logger.debug("[route-paths] %r duplicates %s, skipped", path, route.identifier)
            continue
        seen.add(route.identifier)
        routes.append(route)

    return routes
