"""
Configuration loading and validation for path generation runs.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .amm import FEE_DENOMINATOR
from .exceptions import ConfigError
from .loader import normalize_address


class PathsConfig:
    """
    Parsed and validated configuration for a path generation run.

    Attributes:
        base_token: Token every cycle starts and ends on
        pools_file: YAML/CSV pool registry
        reserves_file: Optional YAML/CSV reserve snapshot for ranking
        amount_in: Whole-token input amount used for simulation
        fee_denominator: Denominator for pool fee numerators
        blacklist_tokens: Tokens whose pools are excluded from results
        workers: Worker processes for generation
        top: Number of ranked paths to display
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Parse and validate config from dictionary.

        Args:
            config_dict: Loaded YAML config

        Raises:
            ConfigError: If required fields missing or invalid
        """
        self.base_token: str = normalize_address(
            self._get_required(config_dict, "base_token", (str, int))
        )
        self.pools_file: str = self._get_required(config_dict, "pools_file", str)
        self.reserves_file: Optional[str] = config_dict.get("reserves_file")

        self.amount_in: int = self._get_int(config_dict, "amount_in", 1, minimum=0)
        self.fee_denominator: int = self._get_int(
            config_dict, "fee_denominator", FEE_DENOMINATOR, minimum=1
        )
        self.workers: int = self._get_int(config_dict, "workers", 1, minimum=1)
        self.top: int = self._get_int(config_dict, "top", 10, minimum=0)

        blacklist_raw = config_dict.get("blacklist_tokens") or []
        if not isinstance(blacklist_raw, list):
            raise ConfigError("blacklist_tokens must be a list")
        self.blacklist_tokens: List[str] = [
            normalize_address(token) for token in blacklist_raw
        ]

    @staticmethod
    def _get_required(d: Dict, key: str, expected_type) -> Any:
        """Get required config field with type validation."""
        if key not in d or d[key] is None:
            raise ConfigError(f"Missing required config field: {key}")
        val = d[key]
        if isinstance(val, bool) or not isinstance(val, expected_type):
            raise ConfigError(
                f"Config field '{key}' has invalid type {type(val).__name__}"
            )
        return val

    @staticmethod
    def _get_int(d: Dict, key: str, default: int, minimum: int) -> int:
        val = d.get(key, default)
        if isinstance(val, bool) or not isinstance(val, int):
            raise ConfigError(
                f"Config field '{key}' must be int, got {type(val).__name__}"
            )
        if val < minimum:
            raise ConfigError(f"Config field '{key}' must be >= {minimum}, got {val}")
        return val


def load_config(config_path: str) -> PathsConfig:
    """
    Load and validate config from YAML file.

    Relative pools_file / reserves_file paths resolve against the config
    file's directory.

    Raises:
        ConfigError: If config invalid, unparsable or file not found
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigError("Config file must contain a YAML dictionary")

    config = PathsConfig(config_dict)

    base_dir = os.path.dirname(os.path.abspath(config_path))
    if not os.path.isabs(config.pools_file):
        config.pools_file = os.path.join(base_dir, config.pools_file)
    if config.reserves_file and not os.path.isabs(config.reserves_file):
        config.reserves_file = os.path.join(base_dir, config.reserves_file)

    return config
