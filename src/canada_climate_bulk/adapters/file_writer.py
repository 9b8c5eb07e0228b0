"""Persist raw response bytes.

The content is never decoded: chunks go to disk exactly as received.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from canada_climate_bulk.core.errors import LocalWriteError


def ensure_directory(directory: Path) -> Path:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LocalWriteError(directory, exc) from exc
    return directory


def write_chunks(path: Path, chunks: Iterable[bytes]) -> int:
    """Create (or truncate) `path` and write every chunk; return the byte count.

    Errors raised by the chunk iterable itself (httpx errors) propagate
    unchanged, so the caller can tell a network failure from a local one.
    """

    written = 0
    try:
        with path.open("wb") as fh:
            for chunk in chunks:
                fh.write(chunk)
                written += len(chunk)
    except OSError as exc:
        raise LocalWriteError(path, exc) from exc
    return written


def remove_partial(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        raise LocalWriteError(path, exc) from exc
