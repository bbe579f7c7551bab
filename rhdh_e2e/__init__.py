from importlib.metadata import PackageNotFoundError, version

from .exceptions import CommandError, ConfigError, E2EError, MetadataError, UIError
from .config import (
    E2ESettings,
    envsubst,
    merge_layered_config,
    merge_yaml_files,
    merge_yaml_files_if_exists,
    merge_yaml_files_to_file,
)
from .log import configure, get_lg
from .plugins import (
    GatingDecision,
    PluginMetadata,
    extract_plugin_name,
    generate_dynamic_plugins_config_from_metadata,
    get_metadata_directory,
    inject_metadata_config,
    load_and_inject_plugin_metadata,
    load_dynamic_plugins_file,
    parse_all_metadata_files,
    parse_metadata_file,
    resolve_dynamic_plugins_config,
    should_inject_plugin_metadata,
)
from .shell import CommandResult, run, run_quiet_unless_failure
from .yaml import deep_merge

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("rhdh-e2e-test-utils")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API. The Playwright helpers live in rhdh_e2e.playwright and
# the pytest fixtures in rhdh_e2e.testing.
__all__ = [
    "__version__",
    # Exceptions
    "E2EError",
    "ConfigError",
    "MetadataError",
    "CommandError",
    "UIError",
    # Plugin metadata
    "PluginMetadata",
    "GatingDecision",
    "extract_plugin_name",
    "get_metadata_directory",
    "parse_metadata_file",
    "parse_all_metadata_files",
    "should_inject_plugin_metadata",
    "inject_metadata_config",
    "generate_dynamic_plugins_config_from_metadata",
    "load_and_inject_plugin_metadata",
    "load_dynamic_plugins_file",
    "resolve_dynamic_plugins_config",
    # Configuration
    "E2ESettings",
    "envsubst",
    "merge_yaml_files",
    "merge_yaml_files_if_exists",
    "merge_yaml_files_to_file",
    "merge_layered_config",
    "deep_merge",
    # Shell
    "CommandResult",
    "run",
    "run_quiet_unless_failure",
    # Logging
    "configure",
    "get_lg",
]
