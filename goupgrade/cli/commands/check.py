"""
Check command implementation.

Reports whether a newer toolchain release exists for this platform.
"""

import logging

from goupgrade.cli.utils import config_from_args, safe_print
from goupgrade.core.exceptions import GoUpgradeError
from goupgrade.toolchain.upgrader import GoUpgrader

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the check command.

    Args:
        args: Parsed command-line arguments with:
            - unstable: Consider unstable releases

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        upgrader = GoUpgrader(config_from_args(args))
        installed = upgrader.get_installed_version()
        safe_print(f"🔍 Installed: {installed}")

        update = upgrader.check_for_update(installed)
    except GoUpgradeError as e:
        logger.error(f"Failed to check for updates: {e}")
        safe_print(f"❌ Failed to check for updates: {e}")
        return 1

    if update is None:
        safe_print(f"✅ {installed.version} is up to date")
        return 0

    safe_print(
        f"📦 New version available: {update.latest_version} "
        f"(current: {update.current_version})"
    )
    print(f"   File: {update.filename} ({update.size_mb:.1f} MB)")
    print(f"   URL:  {update.download_url}")
    return 0
