"""
Upgrade candidate selection.

Picks the release file a toolchain should be upgraded to from the list
published by go.dev.
"""

import logging
from typing import Iterable, List, Optional

from ..core.exceptions import NoUpgradeFound
from .installed import InstalledVersion
from .releases import Release, ReleaseFile
from .versions import is_greater, version_sort_key

logger = logging.getLogger(__name__)


def sort_releases(releases: Iterable[Release]) -> List[Release]:
    """
    Sort releases newest-first.

    Raises:
        VersionParseError: If a release version cannot be parsed
    """
    return sorted(releases, key=lambda r: version_sort_key(r.version), reverse=True)


def select_upgrade(
    releases: Iterable[Release],
    installed: InstalledVersion,
    include_unstable: bool = False,
    kind: Optional[str] = None,
) -> ReleaseFile:
    """
    Find the release file to upgrade to.

    Releases are scanned in the order given and the first matching file
    wins, so callers wanting the latest version pass a newest-first list
    (see ``sort_releases``).

    A file matches when its os and arch equal the installed toolchain's,
    its version is strictly newer than the installed one and, if ``kind``
    is given, its kind equals ``kind``.

    Args:
        releases: Releases to scan
        installed: The installed toolchain
        include_unstable: Also consider releases not marked stable
        kind: Restrict to a file kind such as "archive"

    Returns:
        The first matching ReleaseFile

    Raises:
        NoUpgradeFound: If no file matches
        VersionParseError: If a file version cannot be parsed
    """
    for release in releases:
        if not release.stable and not include_unstable:
            logger.debug(f"Skipping unstable release {release.version}")
            continue

        for release_file in release.files:
            if release_file.os != installed.os or release_file.arch != installed.arch:
                continue
            if kind is not None and release_file.kind != kind:
                continue
            if is_greater(release_file.version, installed.version):
                logger.debug(
                    f"Selected {release_file.filename} ({release_file.version})"
                )
                return release_file

    raise NoUpgradeFound(installed.version, installed.platform)


__all__ = ["sort_releases", "select_upgrade"]
