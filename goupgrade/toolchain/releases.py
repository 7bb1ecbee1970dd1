"""
Go release metadata.

Release metadata is published by go.dev as a JSON list of releases, each
carrying one file per (os, arch, kind) combination:

    [
      {
        "version": "go1.22.3",
        "stable": true,
        "files": [
          {"filename": "go1.22.3.linux-amd64.tar.gz", "os": "linux",
           "arch": "amd64", "version": "go1.22.3", "sha256": "...",
           "size": 68958945, "kind": "archive"}
        ]
      }
    ]

Only field presence is checked; values are taken as published.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests
from requests.exceptions import RequestException

from ..core.exceptions import FetchError, ReleaseMetadataError

logger = logging.getLogger(__name__)

DEFAULT_RELEASES_URL = "https://go.dev/dl/?mode=json&include=all"

_FILE_FIELDS = ("filename", "os", "arch", "version", "sha256", "size", "kind")
_RELEASE_FIELDS = ("version", "stable", "files")


def _require_fields(data: Any, fields: Tuple[str, ...], what: str) -> None:
    if not isinstance(data, dict):
        raise ReleaseMetadataError(f"Expected a JSON object for {what}, got {data!r}")
    missing = [name for name in fields if name not in data]
    if missing:
        raise ReleaseMetadataError(
            f"{what} is missing required field(s): {', '.join(missing)}"
        )


@dataclass(frozen=True)
class ReleaseFile:
    """One downloadable artifact of a release for a single (os, arch) pair."""

    filename: str
    os: str
    arch: str
    version: str
    sha256: str
    size: int
    kind: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseFile":
        """
        Build a ReleaseFile from its JSON object.

        Raises:
            ReleaseMetadataError: If a required field is missing
        """
        _require_fields(data, _FILE_FIELDS, "release file")
        return cls(
            filename=data["filename"],
            os=data["os"],
            arch=data["arch"],
            version=data["version"],
            sha256=data["sha256"],
            size=data["size"],
            kind=data["kind"],
        )

    @property
    def platform(self) -> str:
        """Platform string in go's ``os/arch`` form."""
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class Release:
    """All platform artifacts sharing one version tag."""

    version: str
    stable: bool
    files: Tuple[ReleaseFile, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Release":
        """
        Build a Release and its files from a JSON object.

        Raises:
            ReleaseMetadataError: If a required field is missing
        """
        _require_fields(data, _RELEASE_FIELDS, "release")
        if not isinstance(data["files"], list):
            raise ReleaseMetadataError(
                f"Release {data['version']}: 'files' must be a list"
            )
        return cls(
            version=data["version"],
            stable=bool(data["stable"]),
            files=tuple(ReleaseFile.from_dict(f) for f in data["files"]),
        )

    def file_for(
        self, os: str, arch: str, kind: Optional[str] = None
    ) -> Optional[ReleaseFile]:
        """Return the first file for the given platform, or None."""
        for release_file in self.files:
            if release_file.os != os or release_file.arch != arch:
                continue
            if kind is not None and release_file.kind != kind:
                continue
            return release_file
        return None


def parse_releases(data: Any) -> List[Release]:
    """
    Parse the decoded JSON release list.

    Args:
        data: Decoded JSON (a list of release objects)

    Returns:
        List of Release objects in the order given

    Raises:
        ReleaseMetadataError: If the data is not a list or a field is missing
    """
    if not isinstance(data, list):
        raise ReleaseMetadataError(
            f"Expected a JSON list of releases, got {type(data).__name__}"
        )
    return [Release.from_dict(item) for item in data]


def fetch_releases(
    url: str = DEFAULT_RELEASES_URL,
    timeout: int = 30,
    session: Optional[requests.Session] = None,
) -> List[Release]:
    """
    Fetch and parse the release list.

    The list is returned in the server's order; use
    ``selector.sort_releases`` to order it newest-first.

    Args:
        url: Release metadata endpoint
        timeout: Request timeout in seconds
        session: Optional requests session (a plain ``requests.get`` otherwise)

    Returns:
        List of Release objects

    Raises:
        FetchError: If the request fails or the body is not JSON
        ReleaseMetadataError: If the JSON is missing required fields
    """
    logger.debug(f"Fetching release metadata from {url}")
    getter = session.get if session is not None else requests.get

    try:
        response = getter(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except ValueError as e:
        raise FetchError(f"Invalid JSON in release metadata from {url}: {e}") from e
    except RequestException as e:
        raise FetchError(f"Failed to fetch release metadata from {url}: {e}") from e

    releases = parse_releases(data)
    logger.debug(f"Fetched {len(releases)} releases")
    return releases


__all__ = [
    "DEFAULT_RELEASES_URL",
    "ReleaseFile",
    "Release",
    "parse_releases",
    "fetch_releases",
]
