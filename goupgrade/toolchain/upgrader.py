"""
Go toolchain upgrade orchestration.

Runs the upgrade pipeline strictly in order: probe the installed toolchain,
fetch and sort the release list, select the release file, download it,
extract it into a fresh work directory and, unless in dry-run mode, swap
it into GOROOT.
"""

import logging
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import requests

from ..config.settings import UpgradeConfig
from ..core.download import DownloadProgress, download_file
from ..core.exceptions import ExtractError, GoUpgradeError, NoUpgradeFound
from ..core.filesystem import extract_archive, safe_rmtree
from .installed import InstalledVersion, get_installed_version
from .installer import install_toolchain
from .releases import Release, ReleaseFile, fetch_releases
from .selector import select_upgrade, sort_releases

logger = logging.getLogger(__name__)

EXTRACTED_DIR_NAME = "go"


@dataclass
class UpdateInfo:
    """Information about an available update."""

    current_version: str
    """Currently installed version"""

    latest_version: str
    """Version of the selected release file"""

    filename: str
    """Archive file name"""

    download_url: str
    """Download URL for the archive"""

    sha256: str
    """SHA256 checksum as published (not verified)"""

    size: int
    """Download size in bytes"""

    @property
    def size_mb(self) -> float:
        return self.size / 1024 / 1024


@dataclass
class UpgradeResult:
    """Result of an upgrade operation."""

    old_version: str
    """Previous version"""

    new_version: str
    """New version (equal to old_version when already up to date)"""

    success: bool
    """Whether the upgrade pipeline succeeded"""

    installed: bool = False
    """Whether GOROOT was replaced (False in dry-run mode)"""

    extracted_path: Optional[Path] = None
    """Extracted toolchain left in place by a dry run"""

    work_dir: Optional[Path] = None
    """Work directory a dry run leaves behind; the caller removes it"""

    backup_path: Optional[Path] = None
    """Where the previous installation was moved"""

    error: Optional[str] = None
    """Error message if failed"""

    @property
    def up_to_date(self) -> bool:
        return self.success and self.old_version == self.new_version


class GoUpgrader:
    """
    Orchestrates Go toolchain upgrades.

    Example:
        >>> upgrader = GoUpgrader(load_config())
        >>> update = upgrader.check_for_update()
        >>> if update:
        ...     print(f"Update available: {update.latest_version}")
        >>> result = upgrader.upgrade()
    """

    def __init__(
        self, config: UpgradeConfig, session: Optional[requests.Session] = None
    ):
        self.config = config
        self.session = session
        logger.debug("GoUpgrader initialized")

    def get_installed_version(self) -> InstalledVersion:
        """Probe the toolchain in the configured GOROOT (or on PATH)."""
        return get_installed_version(self.config.goroot, timeout=self.config.timeout)

    def list_releases(self) -> List[Release]:
        """Fetch the release list, newest first."""
        releases = fetch_releases(
            self.config.releases_url, timeout=self.config.timeout, session=self.session
        )
        return sort_releases(releases)

    def select_file(
        self,
        installed: InstalledVersion,
        releases: Optional[List[Release]] = None,
    ) -> ReleaseFile:
        """
        Select the release file to upgrade to.

        Raises:
            NoUpgradeFound: If the installed toolchain is already the latest
        """
        if releases is None:
            releases = self.list_releases()
        return select_upgrade(
            releases,
            installed,
            include_unstable=self.config.include_unstable,
            kind=self.config.file_kind,
        )

    def check_for_update(
        self, installed: Optional[InstalledVersion] = None
    ) -> Optional[UpdateInfo]:
        """
        Check whether a newer release is available.

        Returns:
            UpdateInfo if an update is available, None if already latest

        Raises:
            GoUpgradeError: If probing or fetching fails
        """
        if installed is None:
            installed = self.get_installed_version()

        try:
            release_file = self.select_file(installed)
        except NoUpgradeFound:
            logger.debug(f"{installed} is up to date")
            return None

        return UpdateInfo(
            current_version=installed.version,
            latest_version=release_file.version,
            filename=release_file.filename,
            download_url=self.config.download_url(release_file.filename),
            sha256=release_file.sha256,
            size=release_file.size,
        )

    def upgrade(
        self,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
        cancel_event: Optional[threading.Event] = None,
        installed: Optional[InstalledVersion] = None,
        update: Optional[UpdateInfo] = None,
    ) -> UpgradeResult:
        """
        Run the full upgrade pipeline.

        Args:
            progress_callback: Optional download progress callback
            cancel_event: Optional event that aborts the download when set
            installed: Already probed toolchain (probed here if None)
            update: Result of an earlier check_for_update (checked here if None)

        Returns:
            UpgradeResult; failures are reported through ``success``/``error``
        """
        if installed is None:
            try:
                installed = self.get_installed_version()
            except GoUpgradeError as e:
                logger.error(f"Failed to probe installed toolchain: {e}")
                return UpgradeResult("unknown", "unknown", success=False, error=str(e))

        if update is None:
            try:
                update = self.check_for_update(installed)
            except GoUpgradeError as e:
                logger.error(f"Failed to check for updates: {e}")
                return UpgradeResult(
                    installed.version, "unknown", success=False, error=str(e)
                )

            if update is None:
                logger.info(f"{installed.version} is already up to date")
                return UpgradeResult(installed.version, installed.version, success=True)

        if not self.config.dry_run and self.config.goroot is None:
            return UpgradeResult(
                installed.version,
                update.latest_version,
                success=False,
                error="GOROOT must be set to install",
            )

        work_dir = self._make_work_dir()
        try:
            extracted = self._download_and_extract(
                update, work_dir, progress_callback, cancel_event
            )

            if self.config.dry_run:
                logger.info(
                    f"Dry run: extracted {update.latest_version} to {extracted}; "
                    f"{work_dir} is not removed"
                )
                return UpgradeResult(
                    installed.version,
                    update.latest_version,
                    success=True,
                    extracted_path=extracted,
                    work_dir=work_dir,
                )

            backup = install_toolchain(extracted, self.config.goroot, installed.version)
        except GoUpgradeError as e:
            logger.error(f"Upgrade failed: {e}")
            safe_rmtree(work_dir)
            return UpgradeResult(
                installed.version, update.latest_version, success=False, error=str(e)
            )

        safe_rmtree(work_dir)
        logger.info(f"Upgraded {installed.version} to {update.latest_version}")
        return UpgradeResult(
            installed.version,
            update.latest_version,
            success=True,
            installed=True,
            backup_path=backup,
        )

    def _make_work_dir(self) -> Path:
        parent = self.config.work_dir
        if parent is not None:
            parent.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="goupgrade_", dir=parent))

    def _download_and_extract(
        self,
        update: UpdateInfo,
        work_dir: Path,
        progress_callback: Optional[Callable[[DownloadProgress], None]],
        cancel_event: Optional[threading.Event],
    ) -> Path:
        """Download the archive into work_dir and extract it; return the go/ root."""
        archive = download_file(
            update.download_url,
            work_dir / update.filename,
            progress_callback=progress_callback,
            timeout=self.config.timeout,
            cancel_event=cancel_event,
            session=self.session,
        )

        root = work_dir / "root"
        try:
            extract_archive(archive, root)
        finally:
            archive.unlink(missing_ok=True)

        extracted = root / EXTRACTED_DIR_NAME
        if not extracted.is_dir():
            raise ExtractError(
                f"Archive {update.filename} has no top-level "
                f"'{EXTRACTED_DIR_NAME}/' directory"
            )
        return extracted


__all__ = ["UpdateInfo", "UpgradeResult", "GoUpgrader"]
