"""
Polling watcher that follows the newest log file in a directory.
"""

import threading
from collections.abc import Callable
from pathlib import Path

from aurawatch.core import LineSource, LogLine
from aurawatch.events import EventHub
from aurawatch.locator import newest_file
from aurawatch.logging_config import get_logger
from aurawatch.tail import ReadResult, TailReader, WatchCursor
from aurawatch.wakeup import DirectoryWakeup

logger = get_logger(__name__)

DEFAULT_FILE_GLOB = "output_log_*.txt"


class LogWatcher(LineSource):
    """
    Follows the newest log file matching a glob and broadcasts new lines.

    Every line is published exactly once as a LogLine. Lines from a pass
    that started at offset 0 (the backlog of a newly tracked file) carry
    ``is_first_read=True`` so consumers can ignore history.

    When the target switches to a newer file, any lines still unread in
    the old file are dropped: a rotation starts fresh rather than
    draining the previous log.
    """

    def __init__(
        self,
        log_dir: str | Path,
        file_glob: str = DEFAULT_FILE_GLOB,
        poll_interval: float = 1.0,
        wake_on_change: bool = False,
        reader: TailReader | None = None
    ) -> None:
        """
        Initialize the watcher.

        Args:
            log_dir: Directory holding the log files
            file_glob: Filename glob selecting candidate logs
            poll_interval: Seconds between polls
            wake_on_change: Also poll as soon as watchdog reports a change
            reader: TailReader to use (a default one if not given)
        """
        self.log_dir = Path(log_dir)
        self.file_glob = file_glob
        self.poll_interval = poll_interval
        self.reader = reader or TailReader()
        self.lines = EventHub("watcher.lines")

        # Nothing has been read yet
        self.cursor = WatchCursor(path=newest_file(self.log_dir, self.file_glob))

        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._wakeup: DirectoryWakeup | None = None
        if wake_on_change:
            self._wakeup = DirectoryWakeup(self.log_dir, self.file_glob, self._wake_event.set)

    @property
    def current_path(self) -> Path | None:
        """The file currently being tracked, if any."""
        return self.cursor.path

    @property
    def running(self) -> bool:
        """Whether the poll thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def subscribe(self, callback: Callable[[LogLine], None]) -> Callable[[], None]:
        """Register a callback receiving each LogLine."""
        return self.lines.subscribe(callback)

    def start(self) -> None:
        """
        Locate the newest log, read its backlog, then poll in the background.

        The log is located again here rather than at construction, and the
        backlog pass runs on the calling thread, so every existing line of
        the newest file has been delivered once this returns.
        """
        if self.running:
            return

        logger.info("Starting log watcher on %s (%s)", self.log_dir, self.file_glob)
        self.poll()
        if self.cursor.path is None:
            logger.info("No log file found in %s yet", self.log_dir)

        self._stop_event.clear()
        self._wake_event.clear()
        if self._wakeup:
            self._wakeup.start()

        self._thread = threading.Thread(target=self._run, name="aurawatch-watcher", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop polling.

        The loop notices the stop at its next tick boundary; a read that
        is already running completes first. Returns once the thread has
        exited (or ``timeout`` elapsed). When called from a subscriber on
        the poll thread itself, it only signals the stop.
        """
        self._stop_event.set()
        self._wake_event.set()

        if self._wakeup:
            self._wakeup.stop()

        if self._thread is threading.current_thread():
            # Called by a subscriber; the loop exits once this tick returns
            logger.info("Stopping log watcher on %s from its own thread", self.log_dir)
            return

        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Log watcher did not stop within %s seconds", timeout)
            else:
                self._thread = None
        logger.info("Stopped log watcher on %s", self.log_dir)

    def poll(self) -> int:
        """
        Run one tick: locate the newest file and read what is new.

        Returns:
            Number of lines broadcast
        """
        newest = newest_file(self.log_dir, self.file_glob)
        if newest is None:
            logger.debug("No log file found in %s", self.log_dir)
            return 0

        # The reader restarts at offset 0 for a new target, which makes
        # this pass a first read
        if newest != self.cursor.path:
            logger.info("Now watching log file %s", newest.name)

        return self._read(newest)

    def _read(self, path: Path) -> int:
        result: ReadResult = self.reader.read_new(path, self.cursor)
        self.cursor = result.to_cursor()

        for text in result.lines:
            self.lines.publish(LogLine(
                text=text,
                source_path=path,
                is_first_read=result.first_read,
            ))
        return len(result.lines)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self._wake_event.wait(self.poll_interval)
            self._wake_event.clear()
            if self._stop_event.is_set():
                break
            try:
                self.poll()
            except Exception:
                logger.error("Unexpected error while polling %s", self.log_dir, exc_info=True)
