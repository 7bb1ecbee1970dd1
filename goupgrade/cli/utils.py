"""
Shared utilities for CLI commands.

Provides common functionality used across the command modules.
"""

import logging
import sys
from typing import Any, Dict

from goupgrade.config.settings import UpgradeConfig, load_config
from goupgrade.core.download import DownloadProgress

logger = logging.getLogger(__name__)


def config_from_args(args, **extra: Any) -> UpgradeConfig:
    """
    Build the run configuration from parsed arguments.

    Only options the user actually gave override file and environment
    settings.

    Args:
        args: Parsed command-line arguments
        **extra: Additional overrides from the command module

    Returns:
        Resolved UpgradeConfig

    Raises:
        ConfigError: If a configuration source is invalid
    """
    overrides: Dict[str, Any] = {}
    if getattr(args, "unstable", False):
        overrides["include_unstable"] = True
    if getattr(args, "goroot", None):
        overrides["goroot"] = args.goroot
    if getattr(args, "work_dir", None):
        overrides["work_dir"] = args.work_dir
    overrides.update(extra)

    return load_config(getattr(args, "config", None), overrides=overrides)


def print_download_progress(progress: DownloadProgress) -> None:
    """Progress callback rendering a single updating line on stdout."""
    print(f"\r{progress}", end="", flush=True)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII-safe characters if Unicode symbols can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("✅", "[OK]")
            .replace("❌", "[ERROR]")
            .replace("📦", "[NEW]")
            .replace("🔍", "[CHECK]")
            .replace("⬇️", "[DOWNLOAD]")
        )
        print(safe_message, file=file or sys.stdout)
