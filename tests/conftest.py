"""
Pytest configuration and shared fixtures for goupgrade tests.
"""

import io
import tarfile
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest

from goupgrade.config import settings
from goupgrade.toolchain.releases import Release, parse_releases


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(temp_dir, monkeypatch):
    """Keep the user's config file and GOUPGRADE_* variables out of tests."""
    monkeypatch.setattr(
        settings, "DEFAULT_CONFIG_FILE", temp_dir / "no-such-config.yaml"
    )
    for env_var in settings.ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


def build_tar_gz(entries: List[Dict[str, Any]]) -> bytes:
    """
    Build a gzip-compressed tar archive in memory.

    Each entry is a dict with ``name`` and ``type`` ('dir', 'file',
    'symlink' or 'fifo'), plus optional ``mode``, ``data`` and ``linkname``.
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for entry in entries:
            info = tarfile.TarInfo(entry["name"])
            info.mode = entry.get("mode", 0o755)
            kind = entry["type"]

            if kind == "dir":
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            elif kind == "file":
                data = entry.get("data", b"")
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
            elif kind == "symlink":
                info.type = tarfile.SYMTYPE
                info.linkname = entry.get("linkname", "target")
                tar.addfile(info)
            elif kind == "fifo":
                info.type = tarfile.FIFOTYPE
                tar.addfile(info)
            else:
                raise ValueError(f"Unknown entry type: {kind}")
    return buffer.getvalue()


@pytest.fixture
def make_tar_gz():
    """Archive builder; see build_tar_gz."""
    return build_tar_gz


@pytest.fixture
def go_archive_bytes() -> bytes:
    """A small archive laid out like a Go distribution."""
    return build_tar_gz(
        [
            {"name": "go", "type": "dir", "mode": 0o755},
            {"name": "go/VERSION", "type": "file", "mode": 0o644, "data": b"go1.22.3\n"},
            {"name": "go/bin", "type": "dir", "mode": 0o755},
            {"name": "go/bin/go", "type": "file", "mode": 0o755, "data": b"#!go\n"},
        ]
    )


def release_file_dict(
    version: str,
    os: str = "linux",
    arch: str = "amd64",
    kind: str = "archive",
) -> Dict[str, Any]:
    """Release file JSON object as published by go.dev."""
    if kind == "source":
        filename = f"{version}.src.tar.gz"
    elif kind == "installer":
        filename = f"{version}.{os}-{arch}.pkg"
    else:
        filename = f"{version}.{os}-{arch}.tar.gz"
    return {
        "filename": filename,
        "os": os if kind != "source" else "",
        "arch": arch if kind != "source" else "",
        "version": version,
        "sha256": "0" * 64,
        "size": 1024 * 1024,
        "kind": kind,
    }


def release_dict(version: str, stable: bool = True) -> Dict[str, Any]:
    """Release JSON object with source, linux and darwin files."""
    return {
        "version": version,
        "stable": stable,
        "files": [
            release_file_dict(version, kind="source"),
            release_file_dict(version, "darwin", "arm64", kind="installer"),
            release_file_dict(version, "darwin", "arm64"),
            release_file_dict(version, "linux", "amd64"),
            release_file_dict(version, "linux", "arm64"),
        ],
    }


@pytest.fixture
def releases_json() -> List[Dict[str, Any]]:
    """Unordered release list mixing stable and pre-releases."""
    return [
        release_dict("go1.21.9"),
        release_dict("go1.23rc1", stable=False),
        release_dict("go1.22.3"),
        release_dict("go1.22rc2", stable=False),
        release_dict("go1.22.2"),
    ]


@pytest.fixture
def releases(releases_json) -> List[Release]:
    """Parsed release list in server order."""
    return parse_releases(releases_json)
