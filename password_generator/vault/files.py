"""Whole-file reads and replacement writes for the vault files."""
import os
import logging
from pathlib import Path
from typing import Optional

from ..exceptions import MalformedRecordError, VaultIOError

logger = logging.getLogger("password_generator.vault")


def read_text(path: Path) -> Optional[str]:
    """Return file contents, or None if the file does not exist.

    Raises:
        MalformedRecordError: If the content is not UTF-8 text.
        VaultIOError: If the file exists but cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as err:
        raise MalformedRecordError(f"{path} is not UTF-8 text") from err
    except OSError as err:
        raise VaultIOError(f"Cannot read {path}: {err}") from err


def write_text_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` in one step.

    - Creates the parent directory if needed (mode 700)
    - Writes ``<path>.tmp`` with mode 600, then renames it over ``path``
    - On failure the temp file is removed and ``path`` is left untouched

    Raises:
        VaultIOError: If the directory or file cannot be written.
    """
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as err:
        # Clean up temp file on failure
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove %s", tmp_path)
        raise VaultIOError(f"Cannot write {path}: {err}") from err
    logger.debug("Wrote %s", path)
