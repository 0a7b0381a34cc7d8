"""
File watcher for project archives.

This module provides:
- Filesystem monitoring for archive files
- Per-file debouncing of modification events
- A callback hook used to reload the current session
"""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .constants import WatchConstants

logger = logging.getLogger(__name__)


class ArchiveFileHandler(FileSystemEventHandler):
    """
    File system event handler for project archives.

    Only files with a watched extension (and, if set, only the target file)
    trigger the callback.
    """

    def __init__(
        self,
        callback: Callable[[Path], None],
        target: Optional[Path] = None,
        extensions: FrozenSet[str] = WatchConstants.EXTENSIONS,
        debounce_seconds: float = WatchConstants.DEBOUNCE_SECONDS,
    ):
        self.callback = callback
        self.target = Path(target).resolve() if target else None
        self.extensions = extensions
        self.debounce_seconds = debounce_seconds
        self.last_modified: Dict[Path, float] = {}

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._handle(Path(event.src_path))

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._handle(Path(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors often save by writing a temp file and renaming it over the target
        if event.is_directory:
            return
        self._handle(Path(event.dest_path))

    def _handle(self, file_path: Path) -> None:
        if file_path.suffix.lower() not in self.extensions:
            return
        if self.target is not None and file_path.resolve() != self.target:
            return

        now = time.monotonic()
        last_time = self.last_modified.get(file_path)
        if last_time is not None and now - last_time < self.debounce_seconds:
            return
        self.last_modified[file_path] = now

        try:
            self.callback(file_path)
        except Exception as e:
            logger.error(f"Error processing change to {file_path}: {e}")


class ArchiveWatcher:
    """
    Watches a project archive for changes.

    Usage:
        def on_change(file_path):
            manager.reload()

        with ArchiveWatcher(on_change, Path("song.dawproject")):
            ...
    """

    def __init__(self, callback: Callable[[Path], None], path: Path):
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Path does not exist: {path}")

        if path.is_file():
            self.watch_path = path.parent
            self.handler = ArchiveFileHandler(callback, target=path)
        else:
            self.watch_path = path
            self.handler = ArchiveFileHandler(callback)

        self.observer: Optional[Observer] = None

    def start(self) -> None:
        """Start watching for file changes."""
        if self.observer and self.observer.is_alive():
            raise RuntimeError("Watcher is already running")

        self.observer = Observer()
        self.observer.schedule(self.handler, str(self.watch_path), recursive=False)
        self.observer.start()
        logger.info(f"Watching for changes in: {self.watch_path}")

    def stop(self) -> None:
        """Stop watching for file changes."""
        if self.observer and self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
            logger.info("File watcher stopped")

    def is_running(self) -> bool:
        return self.observer is not None and self.observer.is_alive()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
