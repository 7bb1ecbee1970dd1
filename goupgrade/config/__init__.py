"""Configuration loading for goupgrade."""

from .settings import UpgradeConfig, load_config, load_config_file, parse_bool

__all__ = ["UpgradeConfig", "load_config", "load_config_file", "parse_bool"]
