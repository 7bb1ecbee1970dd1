"""
Install swap for an extracted toolchain.

The current GOROOT is renamed to ``<GOROOT>@<old version>`` and the freshly
extracted ``go`` directory is moved into its place. The old installation is
kept so it can be restored by hand.
"""

import logging
import shutil
from pathlib import Path
from typing import Union

from ..core.exceptions import InstallError

logger = logging.getLogger(__name__)


def backup_path_for(goroot: Union[str, Path], old_version: str) -> Path:
    """Path the current installation is moved to, e.g. ``/usr/local/go@go1.22.2``."""
    goroot = Path(goroot)
    return goroot.with_name(f"{goroot.name}@{old_version}")


def install_toolchain(
    extracted_root: Union[str, Path], goroot: Union[str, Path], old_version: str
) -> Path:
    """
    Replace GOROOT with an extracted toolchain.

    Args:
        extracted_root: The extracted ``go`` directory
        goroot: Current installation directory
        old_version: Version of the current installation, used in the backup name

    Returns:
        Path of the backed up previous installation

    Raises:
        InstallError: If either move fails; a failed second move restores
            the previous installation
    """
    extracted_root = Path(extracted_root)
    goroot = Path(goroot)
    backup = backup_path_for(goroot, old_version)

    if not extracted_root.is_dir():
        raise InstallError(f"Extracted toolchain not found: {extracted_root}")
    if not goroot.exists():
        raise InstallError(f"GOROOT does not exist: {goroot}")
    if backup.exists():
        raise InstallError(f"Backup location already exists: {backup}")

    logger.info(f"Moving {goroot} to {backup}")
    try:
        goroot.rename(backup)
    except OSError as e:
        raise InstallError(f"Failed to rename {goroot} to {backup}: {e}") from e

    logger.info(f"Moving {extracted_root} to {goroot}")
    try:
        shutil.move(str(extracted_root), str(goroot))
    except (OSError, shutil.Error) as e:
        logger.error(f"Install failed, restoring {backup}")
        if goroot.exists():
            shutil.rmtree(goroot, ignore_errors=True)
        backup.rename(goroot)
        raise InstallError(f"Failed to move {extracted_root} to {goroot}: {e}") from e

    return backup


__all__ = ["backup_path_for", "install_toolchain"]
