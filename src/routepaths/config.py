"""Generator configuration.

GeneratorConfig is a frozen pydantic model. Values come from an optional
``[tool.routepaths]`` table in the project's ``pyproject.toml``, with
explicit overrides (CLI flags) applied on top::

    [tool.routepaths]
    input_path = "frontend/src/routeTree.gen.ts"
    output_path = "frontend/src/routePaths.gen.ts"
    class_name = "Paths"
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from routepaths.emitter import Target, alias_name
from routepaths.errors import ConfigurationError
from routepaths.naming import is_reserved

DEFAULT_INPUT_PATH = "src/routeTree.gen.ts"
DEFAULT_OUTPUT_PATH = "src/routePaths.gen.ts"
DEFAULT_CLASS_NAME = "RoutePaths"

ENV_VAR = "ROUTEPATHS_ENV"


def _production_from_env() -> bool:
    return os.environ.get(ENV_VAR, "").lower() == "production"


class GeneratorConfig(BaseModel):
    """Where to read routes from, where to write accessors to, and how."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_path: Path = Path(DEFAULT_INPUT_PATH)
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    class_name: str = DEFAULT_CLASS_NAME
    target: Target = Target.TYPESCRIPT
    production: bool = Field(default_factory=_production_from_env)

    @field_validator("class_name")
    @classmethod
    def _check_class_name(cls, value: str) -> str:
        if not value.isascii() or not value.isidentifier():
            msg = f"class_name must be a valid identifier, got {value!r}"
            raise ValueError(msg)
        if is_reserved(value):
            msg = f"class_name must not be a reserved word, got {value!r}"
            raise ValueError(msg)
        if alias_name(value) == value:
            msg = f"class_name must start with an upper-case letter so its alias differs, got {value!r}"
            raise ValueError(msg)
        return value

    def resolve_input(self, root: Path) -> Path:
        return (root / self.input_path).resolve()

    def resolve_output(self, root: Path) -> Path:
        return (root / self.output_path).resolve()


def read_pyproject_table(root: Path) -> dict[str, Any]:
    """Return the ``[tool.routepaths]`` table, or ``{}`` when absent."""
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    try:
        with pyproject.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Could not read {pyproject}: {exc}"
        raise ConfigurationError(msg) from exc
    table = data.get("tool", {}).get("routepaths", {})
    if not isinstance(table, dict):
        msg = f"[tool.routepaths] in {pyproject} must be a table"
        raise ConfigurationError(msg)
    return table


def load_config(root: Path, **overrides: Any) -> GeneratorConfig:
    """Build a config from *root*'s pyproject.toml plus non-``None`` *overrides*."""
    values = read_pyproject_table(root)
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return GeneratorConfig(**values)
    except ValidationError as exc:
        msg = f"Invalid routepaths configuration:\n{exc}"
        raise ConfigurationError(msg) from exc
