"""Configuration for goupgrade.

Settings are resolved with the precedence: command-line overrides,
environment variables, YAML config file, built-in defaults.

Example ``~/.goupgrade.yaml``::

    include_unstable: false
    dry_run: true
    work_dir: /var/tmp/goupgrade
    timeout: 60
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..core.exceptions import ConfigError
from ..toolchain.releases import DEFAULT_RELEASES_URL

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_BASE_URL = "https://dl.google.com/go/"
DEFAULT_CONFIG_FILE = Path("~/.goupgrade.yaml")

# field name -> environment variable
ENV_VARS = {
    "goroot": "GOROOT",
    "include_unstable": "GOUPGRADE_UNSTABLE",
    "dry_run": "GOUPGRADE_DRYRUN",
    "releases_url": "GOUPGRADE_RELEASES_URL",
    "download_base_url": "GOUPGRADE_DOWNLOAD_URL",
    "work_dir": "GOUPGRADE_WORK_DIR",
    "timeout": "GOUPGRADE_TIMEOUT",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class UpgradeConfig:
    """Resolved settings for one goupgrade run."""

    goroot: Optional[Path] = None
    include_unstable: bool = False
    dry_run: bool = True  # extract only, leave GOROOT untouched
    releases_url: str = DEFAULT_RELEASES_URL
    download_base_url: str = DEFAULT_DOWNLOAD_BASE_URL
    work_dir: Optional[Path] = None  # system temp dir when unset
    file_kind: str = "archive"
    timeout: int = 30

    def download_url(self, filename: str) -> str:
        """Full download URL for a release file name."""
        return self.download_base_url.rstrip("/") + "/" + filename


def parse_bool(value: Any, name: str) -> bool:
    """
    Interpret a boolean setting.

    Raises:
        ConfigError: If the value is not a recognised boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def _coerce(name: str, value: Any) -> Any:
    if name in ("include_unstable", "dry_run"):
        return parse_bool(value, name)
    if name in ("goroot", "work_dir"):
        return Path(value).expanduser() if value not in (None, "") else None
    if name == "timeout":
        try:
            timeout = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {value!r}") from e
        if timeout <= 0:
            raise ConfigError(f"Timeout must be positive: {timeout}")
        return timeout
    return str(value)


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Load settings from a YAML file.

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, not a mapping,
            or contains unknown keys
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")

    known = {f.name for f in fields(UpgradeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(
            f"Unknown configuration key(s) in {config_path}: {', '.join(unknown)}"
        )
    return data


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> UpgradeConfig:
    """
    Resolve configuration from file, environment and overrides.

    Args:
        config_path: YAML file; ``~/.goupgrade.yaml`` is used if it exists
            and no path is given
        environ: Environment mapping (``os.environ`` by default)
        overrides: Values from the command line; None values are ignored

    Returns:
        UpgradeConfig

    Raises:
        ConfigError: If any source holds an invalid value or an explicit
            config file does not exist
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path).expanduser()
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        values.update(load_config_file(config_path))
    else:
        default_path = DEFAULT_CONFIG_FILE.expanduser()
        if default_path.exists():
            logger.debug(f"Loading configuration from {default_path}")
            values.update(load_config_file(default_path))

    for name, env_var in ENV_VARS.items():
        if environ.get(env_var):
            values[name] = environ[env_var]

    for name, value in (overrides or {}).items():
        if value is not None:
            values[name] = value

    # A null in the YAML file means "unset"
    config = UpgradeConfig(
        **{k: _coerce(k, v) for k, v in values.items() if v is not None}
    )
    logger.debug(f"Resolved configuration: {config}")
    return config


__all__ = [
    "DEFAULT_RELEASES_URL",
    "DEFAULT_DOWNLOAD_BASE_URL",
    "UpgradeConfig",
    "parse_bool",
    "load_config_file",
    "load_config",
]
