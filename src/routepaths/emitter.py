"""Rendering of the generated route path module.

Output is a pure function of the route list: no timestamps, no sorting,
so unchanged input always renders byte-identical text.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence

from routepaths.extractor import Route
from routepaths.segments import PARAM_SIGIL


class Target(str, enum.Enum):
    TYPESCRIPT = "typescript"
    PYTHON = "python"


def alias_name(class_name: str) -> str:
    """``RoutePaths`` -> ``routePaths``."""
    return class_name[:1].lower() + class_name[1:]


def interpolate(route: Route, placeholder: Callable[[str], str]) -> str:
    """Rebuild ``route.source_path`` with each ``$name`` component replaced.

    Slashes are kept exactly as in the source template; components are
    substituted left to right, matching ``route.parameters``.
    """
    parts = []
    for part in route.source_path.split("/"):
        if part.startswith(PARAM_SIGIL):
            parts.append(placeholder(part[len(PARAM_SIGIL) :]))
        else:
            parts.append(part)
    return "/".join(parts)


# ------------------------------------------------------------------
# TypeScript
# ------------------------------------------------------------------


def _ts_method(route: Route) -> str:
    if not route.parameters:
        signature = f"static {route.identifier}(): string"
        body = f"return '{route.source_path}';"
    else:
        params = ", ".join(f"{name}: string | number" for name in route.parameters)
        signature = f"static {route.identifier}({params}): string"
        body = "return `" + interpolate(route, lambda name: "${" + name + "}") + "`;"
    return "\n".join(
        [
            "  /**",
            f"   * Returns the path: {route.source_path}",
            "   */",
            f"  {signature} {{",
            f"    {body}",
            "  }",
        ]
    )


def render_typescript(routes: Sequence[Route], class_name: str) -> str:
    methods = "\n\n".join(_ts_method(route) for route in routes)
    return (
        "/**\n"
        " * Auto-generated class for route paths\n"
        " * Do not modify manually - this file is automatically regenerated\n"
        " */\n"
        f"export class {class_name} {{\n"
        f"{methods}\n"
        "}\n"
        "\n"
        "/**\n"
        f" * Default instance of the {class_name} class\n"
        " */\n"
        f"export const {alias_name(class_name)} = {class_name};\n"
    )


# ------------------------------------------------------------------
# Python
# ------------------------------------------------------------------


def _py_method(route: Route) -> str:
    if not route.parameters:
        signature = f"def {route.identifier}() -> str:"
        body = f'return "{route.source_path}"'
    else:
        params = ", ".join(f"{name}: str | int" for name in route.parameters)
        signature = f"def {route.identifier}({params}) -> str:"
        body = 'return f"' + interpolate(route, lambda name: "{" + name + "}") + '"'
    return "\n".join(
        [
            "    @staticmethod",
            f"    {signature}",
            f'        """Returns the path: {route.source_path}"""',
            f"        {body}",
        ]
    )


def render_python(routes: Sequence[Route], class_name: str) -> str:
    methods = "\n\n".join(_py_method(route) for route in routes) if routes else "    pass"
    return (
        '"""Auto-generated class for route paths.\n'
        "\n"
        "Do not modify manually - this file is automatically regenerated.\n"
        '"""\n'
        "\n"
        "\n"
        f"class {class_name}:\n"
        f"{methods}\n"
        "\n"
        "\n"
        f"# Default alias of the {class_name} class\n"
        f"{alias_name(class_name)} = {class_name}\n"
    )


_RENDERERS: dict[Target, Callable[[Sequence[Route], str], str]] = {
    Target.TYPESCRIPT: render_typescript,
    Target.PYTHON: render_python,
}


def render_module(
    routes: Sequence[Route],
    class_name: str = "RoutePaths",
    target: Target | str = Target.TYPESCRIPT,
) -> str:
    """Render the complete output module for *routes*."""
    return _RENDERERS[Target(target)](routes, class_name)
