"""Exception hierarchy for route path generation."""

from __future__ import annotations

from pathlib import Path


class RoutePathsError(Exception):
    """Base for all routepaths-specific errors."""


class ConfigurationError(RoutePathsError):
    """Raised when generator configuration is invalid."""


class InputMissingError(RoutePathsError):
    """The route-tree artifact does not exist at the resolved path."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File {path} not found, skipping generation")


class ReadFailureError(RoutePathsError):
    """The route-tree artifact exists but could not be read."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Could not read {path}")


class WriteFailureError(RoutePathsError):
    """The generated module could not be written."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Could not write {path}")


class InvalidSegmentError(RoutePathsError):
    """A path segment cannot form a legal accessor or parameter name.

    Raised by :func:`routepaths.naming.derive_name`; the extractor skips
    the offending route rather than emitting code that would not compile.
    """

    def __init__(self, path: str, segment: str, reason: str) -> None:
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid segment {segment!r} in {path!r}: {reason}")
