"""Regeneration controller.

Each pass reads the route-tree artifact, extracts routes, renders the
output module and writes it. ``generate()`` never raises: a failed pass
is logged and the previous output is left in place, so a broken route
tree cannot abort the surrounding build.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from routepaths.config import GeneratorConfig
from routepaths.emitter import render_module
from routepaths.errors import InputMissingError, ReadFailureError, RoutePathsError, WriteFailureError
from routepaths.extractor import Route, extract_routes

if TYPE_CHECKING:
    from routepaths.watcher import InputWatcher

logger = logging.getLogger("routepaths.generator")


@dataclass(frozen=True, slots=True)
class GenerationResult:
    output_path: Path
    routes: tuple[Route, ...]
    written: bool


class RoutePathsGenerator:
    """Runs generation passes for one project root.

    Parameters
    ----------
    config:
        Input/output locations, class name and output target.
    root:
        Project root that relative config paths resolve against.
    """

    def __init__(self, config: GeneratorConfig | None = None, root: Path | str = ".") -> None:
        self.config = config or GeneratorConfig()
        self.root = Path(root).resolve()

    @property
    def input_path(self) -> Path:
        return self.config.resolve_input(self.root)

    @property
    def output_path(self) -> Path:
        return self.config.resolve_output(self.root)

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def read_routes(self) -> list[Route]:
        """Read the input artifact and return its routes.

        Raises :class:`InputMissingError` or :class:`ReadFailureError`.
        """
        path = self.input_path
        if not path.is_file():
            raise InputMissingError(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadFailureError(path) from exc
        return extract_routes(content)

    def run_pass(self) -> GenerationResult:
        """Run one pass, raising on any failure."""
        routes = self.read_routes()
        code = render_module(routes, self.config.class_name, self.config.target)
        written = write_if_changed(self.output_path, code)
        if written:
            logger.info("[route-paths] Generated %d methods in %s", len(routes), self.config.output_path)
        else:
            logger.debug("[route-paths] %s is up to date", self.config.output_path)
        return GenerationResult(self.output_path, tuple(routes), written)

    def generate(self) -> GenerationResult | None:
        """Run one pass; log and swallow failures. Returns ``None`` on failure."""
        try:
            return self.run_pass()
        except InputMissingError:
            logger.warning("[route-paths] File %s not found, skipping generation", self.config.input_path)
        except RoutePathsError as exc:
            detail = f"{exc}: {exc.__cause__}" if exc.__cause__ else str(exc)
            logger.error("[route-paths] Error during generation: %s", detail)
        except Exception:
            logger.exception("[route-paths] Error during generation")
        return None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def session(self) -> Iterator[InputWatcher | None]:
        """Generate once, then watch the input until the block exits.

        Yields the running watcher, or ``None`` in production mode. The
        watcher is stopped on exit however the block ends.
        """
        from routepaths.watcher import InputWatcher

        if self.config.production:
            self.generate()
            yield None
            return

        # Watch before the first pass so a change made during it still triggers one.
        watcher = InputWatcher(self.input_path, self.generate)
        watcher.start()
        try:
            self.generate()
            yield watcher
        finally:
            watcher.stop()


def write_if_changed(path: Path, content: str) -> bool:
    """Atomically write *content* to *path* unless it already holds it.

    Returns ``True`` if the file was written. Raises :class:`WriteFailureError`.
    """
    # Missing or unreadable output counts as changed.
    with contextlib.suppress(OSError, UnicodeDecodeError):
        if path.read_text(encoding="utf-8") == content:
            return False

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        os.chmod(tmp_name, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise WriteFailureError(path) from exc
    return True
