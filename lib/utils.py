# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
import time

# Longest sanitized filename kept in a staged path (the timestamp prefix is extra)
MAX_FILENAME_LENGTH = 200

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._ -]")


# =============================================================================
# Filename Utilities
# =============================================================================

def original_basename(filename: str | None) -> str:
    """
    Strip any directory part a client put into an upload filename.

    Browsers on Windows have been known to send the full path, and a
    hostile client can send "../" segments, so both separators count.

    Example:
        original_basename("C:/Users/me/cv.pdf")  # "cv.pdf"
        original_basename("../../etc/passwd")      # "passwd"
    """
    if not filename:
        return ""
    return filename.replace("\\", "/").rsplit("/", 1)[-1].strip()


def sanitize_filename(filename: str | None, fallback: str = "attachment") -> str:
    """
    Make an upload filename safe to use as a path component.

    - Directory parts are dropped (see original_basename)
    - Characters outside [A-Za-z0-9._ -] become "_"
    - Leading dots are stripped (no hidden files, no "..")
    - Length is capped, keeping the extension

    Args:
        filename: Client-supplied filename
        fallback: Name used when nothing usable remains

    Returns:
        A non-empty filename with no path separators
    """
    name = _UNSAFE_FILENAME_CHARS.sub("_", original_basename(filename))
    name = name.lstrip(".").strip()

    if len(name) > MAX_FILENAME_LENGTH:
        stem, dot, ext = name.rpartition(".")
        if dot and 0 < len(ext) < 16:
            name = stem[: MAX_FILENAME_LENGTH - len(ext) - 1] + "." + ext
        else:
            name = name[:MAX_FILENAME_LENGTH]

    return name or fallback


# =============================================================================
# Time Utilities
# =============================================================================

def receipt_timestamp() -> int:
    """Milliseconds since the epoch, used to prefix staged filenames."""
    return int(time.time() * 1000)
