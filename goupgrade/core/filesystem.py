"""
File system utilities for goupgrade.

This module provides:
- Streaming tar.gz extraction that preserves permission bits
- Safe directory removal

Extraction reads the archive as a forward-only stream, one entry at a
time, so the archive is never held in memory and never seeked. The gzip
layer is read through to its trailer so a truncated download or a CRC
mismatch is reported instead of yielding a partial tree.
"""

import gzip
import logging
import os
import shutil
import tarfile
import zlib
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .exceptions import ExtractError, GoUpgradeError, InsecureArchiveError

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


class FilesystemError(GoUpgradeError):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Example:
        >>> is_relative_to(Path("/home/user/project/file.txt"), Path("/home/user"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _member_path(name: str, destination: Path) -> Path:
    """
    Resolve an archive member name under the extraction destination.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Raises:
        InsecureArchiveError: If the member would land outside destination
    """
    target = destination / name
    if os.path.isabs(name) or not is_relative_to(
        target.resolve(), destination.resolve()
    ):
        raise InsecureArchiveError(
            f"Archive member '{name}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )
    return target


def _extract_directory(member: tarfile.TarInfo, target: Path) -> None:
    mode = member.mode & 0o7777
    try:
        os.mkdir(target, mode)
        os.chmod(target, mode)
    except OSError as e:
        raise ExtractError(f"Failed to create directory {target}: {e}") from e


def _extract_regular_file(
    tar: tarfile.TarFile, member: tarfile.TarInfo, target: Path
) -> None:
    mode = member.mode & 0o7777
    source = tar.extractfile(member)
    if source is None:
        raise ExtractError(f"Archive entry has no content: {member.name}")

    try:
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    except OSError as e:
        raise ExtractError(f"Failed to create file {target}: {e}") from e

    with os.fdopen(fd, "wb") as out:
        shutil.copyfileobj(source, out, COPY_BUFFER_SIZE)

    try:
        os.chmod(target, mode)
    except OSError as e:
        raise ExtractError(f"Failed to set mode on {target}: {e}") from e


def extract_tar_gz(stream: BinaryIO, destination: Union[str, Path]) -> int:
    """
    Extract a gzip-compressed tar stream into a directory.

    Entries are read one at a time from the stream. Directories are created
    with their declared permission bits and must not already exist; regular
    files are written with their declared permission bits. Any other entry
    kind (symlinks, hard links, devices, ...) is logged and skipped.

    A failed extraction is not rolled back; discard the destination
    directory after an error.

    Args:
        stream: Readable binary stream positioned at the start of the archive
        destination: Existing directory to extract into

    Returns:
        Number of entries written to disk

    Raises:
        ExtractError: If the stream is corrupt or truncated, or a directory
            or file cannot be created or written
        InsecureArchiveError: If an entry would land outside destination

    Example:
        >>> with open("go1.22.3.linux-amd64.tar.gz", "rb") as f:
        ...     extract_tar_gz(f, "/tmp/goupgrade")
    """
    destination = Path(destination)
    written = 0

    try:
        with gzip.GzipFile(fileobj=stream, mode="rb") as gz:
            with tarfile.open(fileobj=gz, mode="r|") as tar:
                for member in tar:
                    if member.isdir():
                        _extract_directory(
                            member, _member_path(member.name, destination)
                        )
                    elif member.isreg():
                        _extract_regular_file(
                            tar, member, _member_path(member.name, destination)
                        )
                    else:
                        logger.warning(
                            f"Skipping unsupported archive entry {member.name!r} "
                            f"(type {member.type!r})"
                        )
                        continue
                    written += 1

            # Trailing padding, then the gzip trailer (length and CRC check)
            while gz.read(COPY_BUFFER_SIZE):
                pass

    except ExtractError:
        raise
    except (tarfile.TarError, EOFError, zlib.error, OSError) as e:
        raise ExtractError(f"Failed to read archive: {e}") from e

    logger.debug(f"Extracted {written} entries to {destination}")
    return written


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> int:
    """
    Extract a .tar.gz archive file into a directory.

    The destination is created if missing.

    Raises:
        ExtractError: If the archive is missing, unsupported or fails to extract
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractError(f"Archive not found: {archive_path}")
    if not archive_path.name.lower().endswith((".tar.gz", ".tgz")):
        raise ExtractError(
            f"Unsupported archive format: {archive_path.name}. Supported: .tar.gz, .tgz"
        )

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExtractError(f"Cannot create destination {destination}: {e}") from e

    logger.info(f"Extracting {archive_path.name} to {destination}")
    with open(archive_path, "rb") as f:
        return extract_tar_gz(f, destination)


# ============================================================================
# Safe Directory Operations
# ============================================================================


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


__all__ = [
    "FilesystemError",
    "is_relative_to",
    "extract_tar_gz",
    "extract_archive",
    "safe_rmtree",
]
