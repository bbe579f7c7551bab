"""
Configuration package.

This module provides:
- Layered YAML merging (defaults -> auth provider -> user)
- envsubst-style variable expansion for config text
- E2ESettings, environment-derived settings validated with Pydantic
"""

from .env import envsubst
from .merge import (
    merge_layered_config,
    merge_yaml_files,
    merge_yaml_files_if_exists,
    merge_yaml_files_to_file,
)
from .settings import DEFAULT_METADATA_PATH, ENV_VARS, E2ESettings

__all__ = [
    "envsubst",
    "merge_yaml_files",
    "merge_yaml_files_if_exists",
    "merge_yaml_files_to_file",
    "merge_layered_config",
    "E2ESettings",
    "ENV_VARS",
    "DEFAULT_METADATA_PATH",
]
