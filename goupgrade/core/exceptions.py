"""
Centralized exception hierarchy for goupgrade.

Every error raised by the core modules derives from GoUpgradeError so that
the CLI can report failures uniformly.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class GoUpgradeError(Exception):
    """Base exception for all goupgrade errors."""

    pass


class ConfigError(GoUpgradeError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Version Resolution Exceptions
# ============================================================================


class VersionParseError(GoUpgradeError):
    """Raised when a version string cannot be parsed."""

    def __init__(self, version_string: str, reason: str = ""):
        self.version_string = version_string
        msg = f"Invalid version string: {version_string!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class NoUpgradeFound(GoUpgradeError):
    """No release newer than the installed toolchain matches this platform.

    This is the expected outcome when the installed toolchain is already the
    latest one, not a failure.
    """

    def __init__(self, installed_version: str = "", platform: str = ""):
        self.installed_version = installed_version
        self.platform = platform
        msg = "No new version file found"
        if installed_version:
            msg += f" (installed: {installed_version}"
            if platform:
                msg += f" {platform}"
            msg += ")"
        super().__init__(msg)


class ReleaseMetadataError(GoUpgradeError):
    """Release metadata is missing a required field."""

    pass


class InstalledVersionError(GoUpgradeError):
    """The installed toolchain could not be probed."""

    pass


# ============================================================================
# I/O Exceptions
# ============================================================================


class FetchError(GoUpgradeError):
    """Fetching release metadata or downloading an archive failed."""

    pass


class ExtractError(GoUpgradeError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ExtractError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class InstallError(GoUpgradeError):
    """Swapping the extracted toolchain into place failed."""

    pass


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
]
