"""Volume label normalisation for FAT32 and exFAT."""

from safeformatter.core.errors import LabelError
from safeformatter.models.disk import FileSystem


INVALID_LABEL_CHARS = frozenset('"*?/\\|,;:+=<>[]')


def normalize_label(label: str | None, file_system: FileSystem) -> str | None:
    """Validate a user supplied volume label.

    Args:
        label: Raw label; None or blank means no label
        file_system: Filesystem the label will be applied to

    Returns:
        The stripped label, or None when no label was given

    Raises:
        LabelError: If the label is too long or contains invalid characters
    """
    if label is None or not label.strip():
        return None

    cleaned = label.strip()
    fs = FileSystem(file_system)

    if not cleaned.isascii() or not cleaned.isprintable():
        raise LabelError(
            f"Volume label {cleaned!r} must contain printable ASCII characters only"
        )

    bad = sorted(set(cleaned) & INVALID_LABEL_CHARS)
    if bad:
        raise LabelError(
            f"Volume label {cleaned!r} contains invalid characters: {''.join(bad)}",
            {"invalid": bad},
        )

    if len(cleaned) > fs.max_label_length:
        raise LabelError(
            f"Volume label {cleaned!r} is longer than {fs.max_label_length} "
            f"characters allowed for {fs.value}",
            {"max_length": fs.max_label_length},
        )

    return cleaned
