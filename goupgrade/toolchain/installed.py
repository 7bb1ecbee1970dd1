"""
Installed Go toolchain detection.

Runs ``go version`` and parses its output, e.g.::

    go version go1.22.3 linux/amd64
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..core.exceptions import InstalledVersionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstalledVersion:
    """
    The toolchain currently present on the machine.

    Attributes:
        os: GOOS of the installed toolchain (e.g., 'linux')
        arch: GOARCH of the installed toolchain (e.g., 'amd64')
        version: Version tag (e.g., 'go1.22.3')
    """

    os: str
    arch: str
    version: str

    @property
    def platform(self) -> str:
        return f"{self.os}/{self.arch}"

    def __str__(self) -> str:
        return f"{self.version} {self.platform}"


def parse_go_version_output(output: str) -> InstalledVersion:
    """
    Parse the output of ``go version``.

    Args:
        output: Raw stdout, e.g. "go version go1.22.3 linux/amd64"

    Returns:
        InstalledVersion

    Raises:
        InstalledVersionError: If the output is not in the expected format
    """
    fields = output.split()
    if len(fields) < 4 or fields[:2] != ["go", "version"]:
        raise InstalledVersionError(f"Invalid go version output: {output.strip()!r}")

    platform = fields[-1]
    if platform.count("/") != 1:
        raise InstalledVersionError(f"Invalid go platform: {platform!r}")
    os_name, arch = platform.split("/")

    return InstalledVersion(os=os_name, arch=arch, version=fields[2])


def find_go_executable(goroot: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Locate the go binary, preferring ``GOROOT/bin``.

    Returns:
        Path to the executable, or None if not found
    """
    if goroot:
        for name in ("go", "go.exe"):
            candidate = Path(goroot) / "bin" / name
            if candidate.is_file():
                return candidate

    found = shutil.which("go")
    return Path(found) if found else None


def get_installed_version(
    goroot: Optional[Union[str, Path]] = None, timeout: int = 30
) -> InstalledVersion:
    """
    Probe the installed toolchain.

    Args:
        goroot: GOROOT of the toolchain to probe; ``go`` on PATH otherwise
        timeout: Seconds to wait for ``go version``

    Returns:
        InstalledVersion of the probed toolchain

    Raises:
        InstalledVersionError: If go cannot be found, run or parsed
    """
    go = find_go_executable(goroot)
    if go is None:
        raise InstalledVersionError("go executable not found (is GOROOT set?)")

    logger.debug(f"Probing installed toolchain: {go} version")
    try:
        result = subprocess.run(
            [str(go), "version"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=True,
        )
    except subprocess.TimeoutExpired as e:
        raise InstalledVersionError(f"Timed out running {go} version") from e
    except subprocess.CalledProcessError as e:
        raise InstalledVersionError(
            f"{go} version returned {e.returncode}: {(e.stderr or '').strip()}"
        ) from e
    except OSError as e:
        raise InstalledVersionError(f"Failed to run {go}: {e}") from e

    installed = parse_go_version_output(result.stdout)
    logger.debug(f"Installed toolchain: {installed}")
    return installed


__all__ = [
    "InstalledVersion",
    "parse_go_version_output",
    "find_go_executable",
    "get_installed_version",
]
