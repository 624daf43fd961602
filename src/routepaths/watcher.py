"""File watching for the route-tree artifact.

Watches the artifact's parent directory (non-recursively) and fires the
callback for events that land on the artifact itself. Editors and route
generators often replace files via rename, so moves onto the path count
as changes too.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

logger = logging.getLogger("routepaths.watcher")


class _InputChangeHandler(FileSystemEventHandler):
    def __init__(self, path: Path, callback: Callable[[], Any]) -> None:
        self._path = path
        self._callback = callback

    def _matches(self, raw: bytes | str) -> bool:
        return bool(raw) and Path(os.fsdecode(raw)).resolve() == self._path

    def _fire(self) -> None:
        logger.info("[route-paths] Detected change in %s", self._path)
        self._callback()

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            self._fire()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            self._fire()

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.dest_path):
            self._fire()


class InputWatcher:
    """Calls *callback* whenever the file at *path* changes.

    Usage::

        with InputWatcher(Path("src/routeTree.gen.ts"), generator.generate):
            ...
    """

    def __init__(self, path: Path, callback: Callable[[], Any]) -> None:
        self.path = Path(path).resolve()
        self._handler = _InputChangeHandler(self.path, callback)
        self._observer: BaseObserver | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            return
        # The file itself may appear later, but its directory must exist.
        directory = self.path.parent
        if not directory.is_dir():
            logger.warning("[route-paths] Directory %s not found, not watching %s", directory, self.path.name)
            return
        observer = Observer()
        observer.schedule(self._handler, str(directory), recursive=False)
        observer.start()
        self._observer = observer
        logger.debug("[route-paths] Watching %s", self.path)

    def stop(self) -> None:
        """Stop watching. Safe to call more than once."""
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join()
        logger.debug("[route-paths] Stopped watching %s", self.path)

    def __enter__(self) -> InputWatcher:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
