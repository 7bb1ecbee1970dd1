"""
Go toolchain version parsing and ordering.

Go release tags look like ``go1.22.3``, ``go1.22rc1`` or ``go1.21beta2``.
Everything after the ``go1.`` prefix is treated as ``major.minor`` with an
optional ``beta``/``rc`` pre-release tag, so ``go1.22.3`` parses to
major 22, minor 3.

All ordering goes through a single sort key; ``compare_versions``,
``is_greater`` and ``is_less`` are derived from it.

Example:
    >>> is_greater("go1.22.0", "go1.22rc1")
    True
    >>> sorted(["go1.21.9", "go1.22rc2", "go1.22.0"], key=version_sort_key)
    ['go1.21.9', 'go1.22rc2', 'go1.22.0']
"""

import logging
import re
from dataclasses import dataclass
from typing import Tuple

from ..core.exceptions import VersionParseError

logger = logging.getLogger(__name__)

VERSION_PREFIX = "go1."
BARE_VERSION = "go1"
PRE_RELEASE_MARKERS = ("beta", "rc")

_TAG_PATTERN = re.compile(r"^(beta|rc)([0-9]*)$")
_NUMBER_PATTERN = re.compile(r"[0-9]+")

VersionKey = Tuple[int, int, int, int, int]


@dataclass(frozen=True)
class ParsedVersion:
    """
    A parsed toolchain version.

    Attributes:
        major: First numeric component after the ``go1.`` prefix
        minor: Second numeric component (0 when absent)
        pre_release_tag: ``beta<N>``/``rc<N>`` suffix, empty for final releases
    """

    major: int
    minor: int = 0
    pre_release_tag: str = ""

    @property
    def is_pre_release(self) -> bool:
        """Whether this is a beta or release candidate."""
        return bool(self.pre_release_tag)

    def tag_rank(self) -> Tuple[int, int]:
        """
        Return (marker rank, suffix number) for the pre-release tag.

        ``beta`` ranks below ``rc``; the suffix is compared as an integer.
        """
        match = _TAG_PATTERN.match(self.pre_release_tag)
        if not match:
            return (0, 0)
        marker, number = match.groups()
        return (PRE_RELEASE_MARKERS.index(marker), int(number) if number else 0)

    def sort_key(self) -> VersionKey:
        """Tuple ordering this version among others."""
        if self.is_pre_release:
            rank, number = self.tag_rank()
            return (self.major, self.minor, 0, rank, number)
        return (self.major, self.minor, 1, 0, 0)

    def __str__(self) -> str:
        minor = f".{self.minor}" if self.minor or not self.is_pre_release else ""
        return f"{VERSION_PREFIX}{self.major}{minor}{self.pre_release_tag}"


def parse_version(version_string: str) -> ParsedVersion:
    """
    Parse a Go version string.

    Args:
        version_string: Version such as "go1.22.3", "go1.22rc1" or "go1"

    Returns:
        ParsedVersion with major, minor and pre-release tag

    Raises:
        VersionParseError: If the major component is missing or any
            component is malformed
    """
    if not isinstance(version_string, str) or not version_string.strip():
        raise VersionParseError(str(version_string), "empty version")

    text = version_string.strip()
    if text.startswith(VERSION_PREFIX):
        text = text[len(VERSION_PREFIX) :]
    elif text == BARE_VERSION:
        # Go 1.0 was tagged plain "go1"
        text = "0"

    tag = ""
    for marker in PRE_RELEASE_MARKERS:
        index = text.find(marker)
        if index > 0:
            text, tag = text[:index], text[index:]
            break

    if tag and not _TAG_PATTERN.match(tag):
        raise VersionParseError(version_string, f"bad pre-release tag {tag!r}")

    parts = text.split(".")[:2]
    # ASCII digits only; int() would also take signs, underscores and spaces
    if not all(_NUMBER_PATTERN.fullmatch(part) for part in parts):
        raise VersionParseError(version_string, "version components must be integers")

    major = int(parts[0])
    minor = int(parts[1]) if len(parts) > 1 else 0

    return ParsedVersion(major=major, minor=minor, pre_release_tag=tag)


def version_sort_key(version_string: str) -> VersionKey:
    """Sort key for a version string; larger keys are newer versions."""
    return parse_version(version_string).sort_key()


def compare_versions(a: str, b: str) -> int:
    """
    Three-way comparison of two version strings.

    Returns:
        1 if ``a`` is newer than ``b``, -1 if older, 0 if equal
    """
    key_a = version_sort_key(a)
    key_b = version_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def is_greater(a: str, b: str) -> bool:
    """Return True if version ``a`` is strictly newer than ``b``."""
    return compare_versions(a, b) > 0


def is_less(a: str, b: str) -> bool:
    """Return True if version ``a`` is strictly older than ``b``."""
    return compare_versions(a, b) < 0


__all__ = [
    "ParsedVersion",
    "parse_version",
    "version_sort_key",
    "compare_versions",
    "is_greater",
    "is_less",
]
