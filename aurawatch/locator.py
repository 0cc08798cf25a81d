"""
Locates the log file the watcher should follow.
"""

from pathlib import Path

from aurawatch.logging_config import get_logger

logger = get_logger(__name__)


def newest_file(directory: str | Path, pattern: str) -> Path | None:
    """
    Return the most recently modified file in a directory matching a glob.

    Ties on modification time go to the lexicographically greatest path
    so the choice is stable between calls.

    Args:
        directory: Directory to search (not recursive)
        pattern: Filename glob, e.g. "output_log_*.txt"

    Returns:
        Path of the newest match, or None if the directory is missing,
        unreadable or has no matching file
    """
    candidates: list[tuple[float, str, Path]] = []

    try:
        for path in Path(directory).glob(pattern):
            try:
                stat_info = path.stat()
            except OSError:
                # Vanished between listing and stat
                continue
            if not path.is_file():
                continue
            candidates.append((stat_info.st_mtime, str(path), path))
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return None

    if not candidates:
        return None

    return max(candidates)[2]
