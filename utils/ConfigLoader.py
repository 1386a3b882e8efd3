#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import yaml
from pathlib import Path
from copy import deepcopy

# GLOBALS
_config = None

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "etc" / "config.yaml"
CONFIG_ENV_VAR = "SRP_HANDSHAKE_CONFIG"

DEFAULTS = {
    "tool_name": "SRP Handshake",
    "crypto": {
        "srp_len_bytes": 256,
        "generator": 2,
        "bcrypt_prefix": "$2y$10$",
        "salt_suffix": "proton",
    },
    "Logging": {
        "logging_levels": "Success, Information, Warning, Error",
        "logging_file_levels": "None",
        "log_dir": "logs",
        "log_file": "srp.log",
        "date_format": " [%H:%M:%S]",
    },
}


def _merge_dicts(base: dict, override: dict) -> dict:
    """
    Shallow+nested merge: values in override win; dict values are merged recursively.
    """
    result = deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _merge_dicts(result[k], v)
        else:
            result[k] = deepcopy(v)
    return result


def _resolve_path(filepath: str | os.PathLike | None) -> tuple[Path, bool]:
    """
    Returns (path, explicit). Explicit paths must exist; the bundled
    etc/config.yaml is optional so an installed copy still runs on defaults.
    """
    if filepath is not None:
        return Path(filepath), True

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return DEFAULT_CONFIG_PATH, False


class ConfigLoader:
    @staticmethod
    def get_config() -> dict:
        """
        Returns the cached configuration, loading it on first use.
        """
        global _config
        if _config is None:
            _config = ConfigLoader.load_config()
        return _config

    @staticmethod
    def load_config(filepath: str | os.PathLike | None = None) -> dict:
        """
        Loads the configuration file if not already cached.
        Built-in defaults are overlaid with the YAML file, so a config file
        only needs the keys it changes.
        """
        global _config

        if _config is None:
            path, explicit = _resolve_path(filepath)
            overlay = {}

            if path.is_file() or explicit:
                try:
                    with open(path, "r", encoding="utf-8") as file:
                        overlay = yaml.safe_load(file) or {}
                except FileNotFoundError:
                    raise RuntimeError(f"Configuration file not found at {path}.")
                except yaml.YAMLError as e:
                    raise RuntimeError(f"Error parsing YAML file: {e}")

            if not isinstance(overlay, dict):
                raise RuntimeError(f"Configuration root must be a mapping in {path}.")

            _config = _merge_dicts(DEFAULTS, overlay)

        return _config

    @staticmethod
    def reload_config(filepath: str | os.PathLike | None = None) -> dict:
        """
        Reload the configuration from disk.

        Returns:
            dict: The reloaded configuration dictionary.
        """

        global _config
        _config = None

        return ConfigLoader.load_config(filepath)
