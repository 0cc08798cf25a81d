"""
Incremental reading of a growing log file.

The reader is robust against rotation, truncation and same-name
replacement, and never hands out a line before its terminator has
been written.
"""

from dataclasses import dataclass, field
from pathlib import Path

from aurawatch.logging_config import get_logger
from aurawatch.platform import Fingerprint, get_file_fingerprint

logger = get_logger(__name__)


@dataclass
class WatchCursor:
    """How far into which file the watcher has read."""
    path: Path | None = None
    offset: int = 0
    fingerprint: Fingerprint | None = None


@dataclass
class ReadResult:
    """Outcome of a single read pass."""
    path: Path | None
    offset: int
    first_read: bool
    fingerprint: Fingerprint | None = None
    lines: list[str] = field(default_factory=list)

    def to_cursor(self) -> WatchCursor:
        """Cursor to carry into the next pass."""
        return WatchCursor(path=self.path, offset=self.offset, fingerprint=self.fingerprint)


class TailReader:
    """
    Reads whole lines appended to a file since the last pass.

    The file is opened and closed within each pass so that the writer
    is never blocked by a handle held between polls.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def start_offset(self, path: Path, cursor: WatchCursor, size: int,
                     fingerprint: Fingerprint | None) -> int:
        """
        Decide where a pass over ``path`` should begin.

        Returns 0 when the target changed, the file shrank below the
        cursor, or a different physical file now sits at the same path.
        """
        if cursor.path is None or Path(cursor.path) != Path(path):
            if cursor.path is not None:
                logger.info("Log file changed: %s -> %s", cursor.path, path)
            return 0

        if size < cursor.offset:
            logger.info(
                "File size regression detected for %s (%d < %d). Resetting offset.",
                path, size, cursor.offset
            )
            return 0

        if (fingerprint is not None and cursor.fingerprint is not None
                and fingerprint != cursor.fingerprint):
            logger.info("File %s was replaced. Resetting offset.", path)
            return 0

        return cursor.offset

    def read_new(self, path: str | Path, cursor: WatchCursor) -> ReadResult:
        """
        Read the complete lines written to ``path`` after ``cursor``.

        Args:
            path: File currently being tracked
            cursor: Position reached by the previous pass

        Returns:
            ReadResult with the non-blank lines in file order and the byte
            offset just past the last consumed terminator. On any I/O error
            the result mirrors ``cursor`` and carries no lines.
        """
        path = Path(path)

        try:
            with path.open("rb") as f:
                fingerprint = get_file_fingerprint(f)
                size = f.seek(0, 2)
                offset = self.start_offset(path, cursor, size, fingerprint)
                f.seek(offset)
                data = f.read()
        except OSError as e:
            logger.warning("Error reading log file %s: %s", path, e)
            return ReadResult(
                path=cursor.path,
                offset=cursor.offset,
                first_read=False,
                fingerprint=cursor.fingerprint,
            )

        # Anything after the final newline is an unfinished line
        end = data.rfind(b"\n") + 1
        lines = []
        for raw in data[:end].split(b"\n"):
            text = raw.decode(self.encoding, errors="replace").rstrip("\r")
            if text.strip():
                lines.append(text)

        logger.debug(
            "Read %d line(s) from %s (%d -> %d)",
            len(lines), path, offset, offset + end
        )
        return ReadResult(
            path=path,
            offset=offset + end,
            first_read=offset == 0,
            fingerprint=fingerprint,
            lines=lines,
        )
