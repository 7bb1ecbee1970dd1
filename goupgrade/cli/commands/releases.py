"""
Releases command implementation.

Lists published releases newest-first, with the file for this platform.
"""

import logging

from goupgrade.cli.utils import config_from_args, safe_print
from goupgrade.core.exceptions import GoUpgradeError, InstalledVersionError
from goupgrade.toolchain.upgrader import GoUpgrader

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the releases command.

    Args:
        args: Parsed command-line arguments with:
            - unstable: Include unstable releases
            - limit: Maximum number of releases to show (0 for all)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = config_from_args(args)
        upgrader = GoUpgrader(config)
        releases = upgrader.list_releases()
    except GoUpgradeError as e:
        logger.error(f"Failed to list releases: {e}")
        safe_print(f"❌ Failed to list releases: {e}")
        return 1

    try:
        installed = upgrader.get_installed_version()
    except InstalledVersionError as e:
        logger.debug(f"No installed toolchain to match against: {e}")
        installed = None

    if not config.include_unstable:
        releases = [r for r in releases if r.stable]
    if args.limit > 0:
        releases = releases[: args.limit]

    if not releases:
        print("No releases found")
        return 0

    for release in releases:
        line = f"{release.version:<16}"
        if not release.stable:
            line += " (unstable)"
        if installed is not None:
            release_file = release.file_for(
                installed.os, installed.arch, config.file_kind
            )
            if release_file is not None:
                line += f"  {release_file.filename}"
            if release.version == installed.version:
                line += "  [installed]"
        print(line)

    return 0
