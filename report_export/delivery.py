"""
Hand generated documents to the caller's file system.
"""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path

from .errors import DownloadDeliveryError

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


def export_filename(title: str, extension: str) -> str:
    """Return a download-safe file name for a report title.

    Every character outside ``[a-zA-Z0-9]`` becomes an underscore.

    Example:
        >>> export_filename("Q3 Report: Sales", "pdf")
        'Q3_Report__Sales.pdf'
        >>> export_filename("notes.pptx", ".pptx")
        'notes_pptx.pptx'
    """

    suffix = extension if extension.startswith(".") else f".{extension}"
    stem = _UNSAFE.sub("_", title) or "report"
    return f"{stem}{suffix}"


def deliver(data: bytes, path: Path) -> Path:
    """Write ``data`` to ``path``, falling back to a temporary file.

    When the requested destination cannot be written, the bytes are saved
    under the system temp directory so the user can save them manually.

    Args:
        data: Generated document bytes.
        path: Requested destination.
    Returns:
        Path the bytes were actually written to.
    Raises:
        DownloadDeliveryError: If neither location is writable.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
    except OSError as exc:
        logger.warning("Could not write %s (%s); saving to a temporary file", path, exc)
    try:
        with tempfile.NamedTemporaryFile(
            prefix=f"{path.stem}-", suffix=path.suffix, delete=False
        ) as handle:
            handle.write(data)
    except OSError as exc:
        raise DownloadDeliveryError(f"Could not save {path.name}: {exc}") from exc
    fallback = Path(handle.name)
    logger.warning("Saved %s to %s for manual download", path.name, fallback)
    return fallback
