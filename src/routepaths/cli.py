"""routepaths command-line interface powered by Typer."""

import logging
import sys
import threading
from pathlib import Path
from typing import Annotated

import typer

from routepaths import __version__
from routepaths.config import GeneratorConfig, load_config
from routepaths.emitter import Target
from routepaths.errors import ConfigurationError, RoutePathsError
from routepaths.generator import RoutePathsGenerator

app = typer.Typer(name="routepaths", add_completion=False, no_args_is_help=True)

RootOpt = Annotated[Path, typer.Option("--root", help="Project root that relative paths resolve against.")]
InputOpt = Annotated[Path | None, typer.Option("--input", "-i", help="Route-tree artifact to scan.")]
OutputOpt = Annotated[Path | None, typer.Option("--output", "-o", help="Generated module to write.")]
ClassNameOpt = Annotated[str | None, typer.Option("--class-name", help="Name of the generated class.")]
TargetOpt = Annotated[Target | None, typer.Option("--target", "-t", help="Output language.")]


# ------------------------------------------------------------------
# Shared helpers
# ------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"routepaths {__version__}")
        raise typer.Exit


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Generate typed route path helpers from a route-tree file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )


def _load(root: Path, **overrides: object) -> GeneratorConfig:
    try:
        return load_config(root, **overrides)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command()
def generate(
    root: RootOpt = Path("."),
    input_path: InputOpt = None,
    output_path: OutputOpt = None,
    class_name: ClassNameOpt = None,
    target: TargetOpt = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit non-zero when generation fails.")] = False,
) -> None:
    """Run a single generation pass."""
    config = _load(root, input_path=input_path, output_path=output_path, class_name=class_name, target=target)
    generator = RoutePathsGenerator(config, root)

    if not strict:
        generator.generate()
        return

    try:
        generator.run_pass()
    except RoutePathsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command()
def watch(
    root: RootOpt = Path("."),
    input_path: InputOpt = None,
    output_path: OutputOpt = None,
    class_name: ClassNameOpt = None,
    target: TargetOpt = None,
    production: Annotated[
        bool | None,
        typer.Option("--production/--development", help="Production mode generates once and does not watch."),
    ] = None,
) -> None:
    """Generate, then regenerate whenever the route-tree file changes."""
    config = _load(
        root,
        input_path=input_path,
        output_path=output_path,
        class_name=class_name,
        target=target,
        production=production,
    )
    generator = RoutePathsGenerator(config, root)
    _print_banner(generator)

    with generator.session() as watcher:
        if watcher is None:
            return
        if not watcher.running:
            typer.echo(f"Error: nothing to watch, {watcher.path.parent} does not exist", err=True)
            raise typer.Exit(1)
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            typer.echo("", err=True)


@app.command()
def routes(
    root: RootOpt = Path("."),
    input_path: InputOpt = None,
) -> None:
    """List the routes found in the route-tree file without writing anything."""
    config = _load(root, input_path=input_path)
    generator = RoutePathsGenerator(config, root)
    try:
        found = generator.read_routes()
    except RoutePathsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if not found:
        typer.echo("No routes found.")
        return

    rows = [(f"{route.identifier}({', '.join(route.parameters)})", route.source_path) for route in found]
    width = max(len(accessor) for accessor, _ in rows)
    for accessor, source_path in rows:
        typer.echo(f"{accessor:<{width}}  {source_path}")


# ------------------------------------------------------------------
# Startup banner
# ------------------------------------------------------------------

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_BOLD = "\033[1m"
_RESET = "\033[0m"


def _print_banner(generator: RoutePathsGenerator) -> None:
    color = sys.stdout.isatty()

    def c(code: str, text: str) -> str:
        return f"{code}{text}{_RESET}" if color else text

    config = generator.config
    mode = "production" if config.production else "development"
    lines = [
        f"{c(_BOLD + _CYAN, 'routepaths')}   Starting in {mode} mode",
        "",
        f"{c(_GREEN, 'input')}      {generator.input_path}",
        f"{c(_GREEN, 'output')}     {generator.output_path}",
        f"{c(_GREEN, 'class')}      {config.class_name} ({config.target.value})",
        f"{c(_GREEN, 'watch')}      {'disabled' if config.production else 'enabled'}",
        "",
    ]
    print("\n".join(lines), flush=True)
