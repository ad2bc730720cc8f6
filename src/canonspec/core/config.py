#!/usr/bin/env python3
"""
canonspec configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final, List

from canonspec.core.constants import DEFAULT_MAX_INCLUDE_DEPTH, DEFAULT_REGISTRY_URL
from canonspec.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    # filled with the working directory by load_config()
    "type_paths": [],
    "registry_url": DEFAULT_REGISTRY_URL,
    "strict": False,
    "max_include_depth": DEFAULT_MAX_INCLUDE_DEPTH,
    "logging": {"level": "WARNING"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "canonspec" / "config.json"

PROJECT_CONFIG_FILENAME: Final[str] = "canonspec.json"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load canonspec configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/canonspec/config.json)
        3. Project config (./canonspec.json)
        4. Environment overrides:
           - CANONSPEC_TYPE_PATHS (pathsep-separated list)
           - CANONSPEC_REGISTRY_URL
           - CANONSPEC_STRICT (1/true/yes/on)
           - CANONSPEC_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["type_paths"] = [str(Path.cwd())]

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / PROJECT_CONFIG_FILENAME
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    type_paths_env = os.getenv("CANONSPEC_TYPE_PATHS")
    if type_paths_env:
        config["type_paths"] = _split_paths_env(type_paths_env)

    registry_env = os.getenv("CANONSPEC_REGISTRY_URL")
    if registry_env:
        config["registry_url"] = registry_env.strip()

    strict_env = os.getenv("CANONSPEC_STRICT")
    if strict_env:
        config["strict"] = strict_env.strip().lower() in _TRUTHY

    log_level_env = os.getenv("CANONSPEC_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.

    Example:
        "a:~/b:/tmp" on Unix  -> ["a", "/home/user/b", "/tmp"] (no resolve here)
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]
