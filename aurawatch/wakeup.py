"""
File system event wake-up for the watch loop, using watchdog.
"""

import fnmatch
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer as WatchdogObserver

from aurawatch.logging_config import get_logger

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = get_logger(__name__)


class DirectoryWakeup:
    """
    Calls ``callback`` whenever a file matching ``pattern`` changes.

    The callback only signals; it must not read the log itself, since
    the poll loop is the sole reader.
    """

    def __init__(self, directory: str | Path, pattern: str, callback: Callable[[], None]) -> None:
        self.directory = Path(directory)
        self.pattern = pattern
        self.callback = callback
        self.observer: BaseObserver | None = None

    def matches(self, event: FileSystemEvent) -> bool:
        """Check if this event concerns a watched log file."""
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        for raw in paths:
            if not raw:
                continue
            path = raw if isinstance(raw, str) else raw.decode()
            if fnmatch.fnmatch(Path(path).name, self.pattern):
                return True
        return False

    def start(self) -> bool:
        """
        Start watching the directory.

        Returns:
            False if the directory does not exist or cannot be watched
        """
        if not self.directory.is_dir():
            logger.warning("Cannot watch %s for changes: not a directory", self.directory)
            return False

        wakeup = self

        class Handler(FileSystemEventHandler):
            """Forwards matching events to the wake-up callback."""

            def on_any_event(self, event: FileSystemEvent) -> None:
                if wakeup.matches(event):
                    wakeup.callback()

        try:
            self.observer = WatchdogObserver()
            self.observer.schedule(Handler(), str(self.directory), recursive=False)
            self.observer.start()
        except OSError as e:
            logger.warning("Cannot watch %s for changes: %s", self.directory, e)
            self.observer = None
            return False

        logger.debug("Watching %s for %s changes", self.directory, self.pattern)
        return True

    def stop(self) -> None:
        """Stop watching."""
        if self.observer:
            self.observer.stop()
            self.observer.join()
            self.observer = None
