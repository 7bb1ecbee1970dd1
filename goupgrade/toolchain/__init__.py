"""
Go toolchain management for goupgrade.

This module provides functionality for:
- Version parsing and ordering
- Release metadata fetching and upgrade selection
- Installed toolchain detection
- Upgrade orchestration and install swap
"""

from goupgrade.toolchain.versions import (
    ParsedVersion,
    parse_version,
    version_sort_key,
    compare_versions,
    is_greater,
    is_less,
)
from goupgrade.toolchain.releases import (
    Release,
    ReleaseFile,
    fetch_releases,
    parse_releases,
)
from goupgrade.toolchain.installed import InstalledVersion, get_installed_version
from goupgrade.toolchain.selector import select_upgrade, sort_releases
from goupgrade.toolchain.installer import install_toolchain

__all__ = [
    "ParsedVersion",
    "parse_version",
    "version_sort_key",
    "compare_versions",
    "is_greater",
    "is_less",
    "Release",
    "ReleaseFile",
    "fetch_releases",
    "parse_releases",
    "InstalledVersion",
    "get_installed_version",
    "select_upgrade",
    "sort_releases",
    "install_toolchain",
]
