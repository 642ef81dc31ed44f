"""File utility functions."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace a file's contents in a single step.

    The content is written to a temporary file next to ``path`` and moved
    over it with ``os.replace``, so readers see either the old or the new
    file and never a partial write.

    Args:
        path: Destination file
        content: Text to write
        encoding: Text encoding

    Raises:
        OSError: If the temporary file cannot be written or moved
    """
    ensure_directory_exists(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d characters to %s", len(content), path)
