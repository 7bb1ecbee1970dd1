"""
Core functionality for goupgrade.

This package contains the foundational modules that the toolchain
modules depend on: the exception hierarchy, downloads and archive
extraction.
"""

from .exceptions import (
    GoUpgradeError,
    ConfigError,
    VersionParseError,
    NoUpgradeFound,
    ReleaseMetadataError,
    InstalledVersionError,
    FetchError,
    ExtractError,
    InsecureArchiveError,
    InstallError,
)
from .download import DownloadProgress, download_file, format_progress
from .filesystem import FilesystemError, extract_archive, extract_tar_gz, safe_rmtree

__all__ = [
    "GoUpgradeError",
    "ConfigError",
    "VersionParseError",
    "NoUpgradeFound",
    "ReleaseMetadataError",
    "InstalledVersionError",
    "FetchError",
    "ExtractError",
    "InsecureArchiveError",
    "InstallError",
    "DownloadProgress",
    "download_file",
    "format_progress",
    "FilesystemError",
    "extract_archive",
    "extract_tar_gz",
    "safe_rmtree",
]
