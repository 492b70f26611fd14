"""Open AlgoSeek files as raw byte streams, decompressing by extension.

Handles:
- Bzip2 (.bz2, the format AlgoSeek distributes)
- Gzip (.gz, .csv.gz)
- ZIP archives (.zip - first CSV only; warns if multiple)
- 7z archives (.7z - first CSV only; warns if multiple)
- Anything else is opened as a plain file
"""

from __future__ import annotations

import bz2
import gzip
import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO

from algoseek_futures._error_messages import empty_archive_error

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".bz2", ".gz", ".zip", ".7z")
_MEMBER_SUFFIXES: tuple[str, ...] = (".csv", ".txt")


def open_stream(path: str | Path) -> BinaryIO:
    """Open ``path`` for binary reading, transparently decompressing it.

    The caller owns the returned stream and must close it.

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If an archive holds no readable member
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".bz2":
        return bz2.open(path, "rb")
    if suffix == ".gz":
        return gzip.open(path, "rb")
    if suffix == ".zip":
        return _open_zip_member(path)
    if suffix == ".7z":
        return _open_7z_member(path)
    return open(path, "rb")  # noqa: SIM115


def _pick_member(names: list[str], path: Path, kind: str) -> str:
    candidates = [name for name in names if name.lower().endswith(_MEMBER_SUFFIXES)]
    if not candidates:
        candidates = [name for name in names if not name.endswith("/")]
    if not candidates:
        raise ValueError(empty_archive_error(str(path), list(SUPPORTED_EXTENSIONS)))
    if len(candidates) > 1:
        logger.warning(
            "%s contains %s members, using first only: %s",
            kind,
            len(candidates),
            path,
        )
    return candidates[0]


def _open_zip_member(path: Path) -> BinaryIO:
    # The member keeps its own reference to the archive file; closing the
    # ZipFile here leaves the member readable until the member is closed.
    with zipfile.ZipFile(path) as archive:
        member = _pick_member(archive.namelist(), path, "ZIP")
        return archive.open(member)


def _open_7z_member(path: Path) -> BinaryIO:
    import py7zr

    # py7zr only extracts to memory or disk, so 7z members are buffered whole.
    with py7zr.SevenZipFile(path, mode="r") as archive:
        member = _pick_member(archive.getnames(), path, "7z")
        data = archive.read([member])
    payload = data.get(member)
    if payload is None:
        raise ValueError(empty_archive_error(str(path), list(SUPPORTED_EXTENSIONS)))
    if isinstance(payload, io.BytesIO):
        payload.seek(0)
        return payload
    return io.BytesIO(payload)
