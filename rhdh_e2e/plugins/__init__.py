"""
Dynamic plugin metadata: loading descriptors, gating, and config injection.
"""

from .gating import GatingDecision, should_inject_plugin_metadata
from .injection import (
    DynamicPluginsConfig,
    PluginEntry,
    generate_dynamic_plugins_config_from_metadata,
    inject_metadata_config,
    load_and_inject_plugin_metadata,
    load_dynamic_plugins_file,
    resolve_dynamic_plugins_config,
)
from .metadata import (
    Found,
    MetadataIndex,
    ParseOutcome,
    PluginMetadata,
    Skipped,
    extract_plugin_name,
    get_metadata_directory,
    parse_all_metadata_files,
    parse_metadata_file,
)

__all__ = [
    "GatingDecision",
    "should_inject_plugin_metadata",
    "DynamicPluginsConfig",
    "PluginEntry",
    "generate_dynamic_plugins_config_from_metadata",
    "inject_metadata_config",
    "load_and_inject_plugin_metadata",
    "load_dynamic_plugins_file",
    "resolve_dynamic_plugins_config",
    "Found",
    "Skipped",
    "ParseOutcome",
    "PluginMetadata",
    "MetadataIndex",
    "extract_plugin_name",
    "get_metadata_directory",
    "parse_all_metadata_files",
    "parse_metadata_file",
]
