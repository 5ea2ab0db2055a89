"""Maps raw command output to a small set of user-facing error categories.

This is a substring heuristic, not a parser. Matching is case-insensitive and
ordered; the first category whose markers appear wins, and anything
unrecognised falls through to the generic category.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """User-facing failure categories, in matching priority order."""

    WRITE_PROTECTED = "write_protected"
    ACCESS_DENIED = "access_denied"
    NO_MEDIA = "no_media"
    IO_ERROR = "io_error"
    GENERIC = "generic"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.WRITE_PROTECTED: (
        "The medium is write-protected. Check the physical lock switch on the "
        "device and try again."
    ),
    ErrorCategory.ACCESS_DENIED: (
        "Access denied. Close any open files and Explorer windows on the device "
        "and try again."
    ),
    ErrorCategory.NO_MEDIA: (
        "No medium detected. Reinsert the USB stick or SD card and try again."
    ),
    ErrorCategory.IO_ERROR: (
        "Read/write error. The medium may be defective; try another device."
    ),
    ErrorCategory.GENERIC: (
        "The operation failed. Retry or try another medium."
    ),
}

# English and German diskpart wording
_MARKERS: tuple[tuple[ErrorCategory, tuple[str, ...]], ...] = (
    (
        ErrorCategory.WRITE_PROTECTED,
        ("write protected", "write-protected", "schreibgeschützt"),
    ),
    (
        ErrorCategory.ACCESS_DENIED,
        ("access is denied", "access denied", "zugriff verweigert"),
    ),
    (ErrorCategory.NO_MEDIA, ("no media", "keine medien")),
    (ErrorCategory.IO_ERROR, ("i/o", "data error", "datenfehler")),
)


def translate(raw: str | None) -> ErrorCategory:
    """Classify raw command output or an exception message.

    Args:
        raw: Captured output or error text; None is treated as empty

    Returns:
        The first matching category, or GENERIC
    """
    text = (raw or "").casefold()
    for category, markers in _MARKERS:
        if any(marker in text for marker in markers):
            return category
    return ErrorCategory.GENERIC


def friendly_message(raw: str | None) -> str:
    """User-facing message for raw command output."""
    return translate(raw).message
