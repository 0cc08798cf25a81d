"""
Cross-platform file identity helpers for Aurawatch.

A fingerprint names the physical file behind an open handle. It stays
the same while VRChat appends to its log and changes when the log is
deleted and recreated under the same name.
"""

import os
from typing import Any, BinaryIO

from aurawatch.logging_config import get_logger

# pywin32 is only declared for Windows installs
if os.name == 'nt':
    import msvcrt

    try:
        import win32file
    except ImportError:
        win32file = None
else:
    win32file = None

logger = get_logger(__name__)

Fingerprint = tuple[Any, ...]


def _windows_fingerprint(file: BinaryIO) -> Fingerprint | None:
    """(volume serial number, file index high, file index low)"""
    if not win32file:
        logger.debug("pywin32 is not installed, file fingerprints are disabled")
        return None

    info = win32file.GetFileInformationByHandle(msvcrt.get_osfhandle(file.fileno()))
    return (info[4], info[8], info[9])


def get_file_fingerprint(file: BinaryIO) -> Fingerprint | None:
    """
    Get the fingerprint of an open file.

    The identity comes from the handle itself, so it always describes
    the file whose bytes are read through that handle, even if the path
    has since been pointed at another file.

    Args:
        file: File opened by the caller

    Returns:
        (device, inode) on POSIX, the volume serial and file index on
        Windows, or None when the handle cannot be queried or the
        platform is unsupported
    """
    try:
        if os.name == 'nt':
            return _windows_fingerprint(file)
        if os.name == 'posix':
            stat_info = os.fstat(file.fileno())
            return (stat_info.st_dev, stat_info.st_ino)
    except Exception as e:
        logger.warning("Error getting fingerprint for file %s: %s", getattr(file, "name", file), e)
        return None

    logger.warning("Unsupported OS for file fingerprinting: %s", os.name)
    return None
