"""
Upgrade command implementation.

Downloads the newest toolchain release, extracts it and, with --install,
swaps it into GOROOT.
"""

import logging

from goupgrade.cli.utils import config_from_args, print_download_progress, safe_print
from goupgrade.core.exceptions import GoUpgradeError
from goupgrade.toolchain.upgrader import GoUpgrader

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the upgrade command.

    Args:
        args: Parsed command-line arguments with:
            - unstable: Consider unstable releases
            - install: Replace GOROOT (dry run otherwise)
            - work_dir: Directory for downloads and extraction
            - yes: Skip the confirmation prompt

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = config_from_args(args, dry_run=False if args.install else None)
        upgrader = GoUpgrader(config)

        safe_print("🔍 Checking for updates...")
        installed = upgrader.get_installed_version()
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
    print(f"   Size: {update.size_mb:.1f} MB")

    if not config.dry_run and not args.yes:
        print()
        try:
            response = (
                input(f"Replace {config.goroot} with {update.latest_version}? [Y/n] ")
                .strip()
                .lower()
            )
            if response and response not in ["y", "yes"]:
                print("Upgrade cancelled")
                return 0
        except (EOFError, KeyboardInterrupt):
            print("\nUpgrade cancelled")
            return 130

    safe_print(f"⬇️  Downloading {update.download_url}")
    result = upgrader.upgrade(
        progress_callback=print_download_progress,
        installed=installed,
        update=update,
    )
    print()  # New line after progress

    if not result.success:
        safe_print(f"❌ Upgrade failed: {result.error}")
        return 1

    if result.installed:
        safe_print(f"✅ Upgraded to {result.new_version}")
        print(f"   Previous installation kept at {result.backup_path}")
    else:
        safe_print(f"✅ Extracted {result.new_version} to {result.extracted_path}")
        print("   Dry run: not actually installed (use --install)")
        if result.work_dir is not None:
            print(
                f"   Work directory {result.work_dir} is left behind; "
                "remove it when done"
            )
    return 0
