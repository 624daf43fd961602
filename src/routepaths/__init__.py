"""Typed route path helpers generated from route-tree files."""

__version__ = "0.1.0"

from routepaths.config import GeneratorConfig, load_config
from routepaths.emitter import Target, render_module
from routepaths.errors import (
    ConfigurationError,
    InputMissingError,
    InvalidSegmentError,
    ReadFailureError,
    RoutePathsError,
    WriteFailureError,
)
from routepaths.extractor import Route, extract_routes
from routepaths.generator import GenerationResult, RoutePathsGenerator
from routepaths.naming import RouteName, derive_name
from routepaths.segments import Segment, SegmentKind, parse_path

__all__ = [
    "ConfigurationError",
    "GenerationResult",
    "GeneratorConfig",
    "InputMissingError",
    "InvalidSegmentError",
    "ReadFailureError",
    "Route",
    "RouteName",
    "RoutePathsError",
    "RoutePathsGenerator",
    "Segment",
    "SegmentKind",
    "Target",
    "WriteFailureError",
    "derive_name",
    "extract_routes",
    "load_config",
    "parse_path",
    "render_module",
]
