"""
Injection of plugin metadata into dynamic-plugins configuration.

A dynamic-plugins document looks like:

    includes:
      - dynamic-plugins.default.yaml
    plugins:
      - package: ./dynamic-plugins/dist/backstage-community-plugin-tech-radar
        disabled: false
        pluginConfig: {...}

Metadata config is the base and the user's pluginConfig overrides it. Plugin
entries are matched by canonical plugin name, so an OCI reference in the
user document matches a local-path descriptor and vice versa.
"""

import copy
from pathlib import Path
from typing import Any

from ..config.env import envsubst
from ..config.settings import DEFAULT_METADATA_PATH
from ..exceptions import ConfigError, MetadataError
from ..log import get_lg
from ..yaml import YAMLError, deep_merge, load
from .gating import GatingDecision
from .metadata import (
    MetadataIndex,
    extract_plugin_name,
    get_metadata_directory,
    parse_all_metadata_files,
)

PluginEntry = dict[str, Any]
DynamicPluginsConfig = dict[str, Any]


def _gating(gating: GatingDecision | None) -> GatingDecision:
    return gating if gating is not None else GatingDecision.from_env()


def _augment_entry(entry: PluginEntry, index: MetadataIndex) -> PluginEntry:
    lg = get_lg("plugin-metadata")
    package = entry.get("package", "")
    plugin_name = extract_plugin_name(package)
    metadata = index.get(plugin_name)

    if metadata is None:
        lg.debug(
            "no metadata for plugin", extra={"plugin": plugin_name, "package": package}
        )
        return entry

    user_config = entry.get("pluginConfig") or {}
    if not isinstance(user_config, dict):
        raise ConfigError(
            "pluginConfig must be a mapping",
            package=package,
            type=type(user_config).__name__,
        )

    lg.info("injecting config", extra={"plugin": plugin_name, "package": package})
    # Both sides are copied so the result shares nothing with the inputs
    merged = deep_merge(
        copy.deepcopy(metadata.plugin_config), copy.deepcopy(user_config)
    )
    return {**entry, "pluginConfig": merged}


def inject_metadata_config(
    config: DynamicPluginsConfig, index: MetadataIndex
) -> DynamicPluginsConfig:
    """
    Inject metadata plugin configs into a dynamic-plugins document.

    Args:
        config: Dynamic-plugins document to augment
        index: Mapping of plugin name to metadata

    Returns:
        New document with merged pluginConfig on matched entries; the input
        itself when it has no plugin list

    Raises:
        ConfigError: If a matched entry's pluginConfig is not a mapping
    """
    plugins = config.get("plugins")
    if not plugins:
        return config

    return {**config, "plugins": [_augment_entry(p, index) for p in plugins]}


def _require_index(metadata_path: str | Path, purpose: str) -> MetadataIndex:
    """Load the metadata index, failing when there is nothing to load."""
    metadata_dir = get_metadata_directory(metadata_path)
    if metadata_dir is None:
        raise MetadataError(
            f"{purpose}: metadata directory not found at: "
            f"{Path(metadata_path).resolve()}"
        )

    index = parse_all_metadata_files(metadata_dir)
    if not index:
        raise MetadataError(
            f"{purpose}: no valid metadata files found in {metadata_dir}"
        )
    return index


def generate_dynamic_plugins_config_from_metadata(
    metadata_path: str | Path = DEFAULT_METADATA_PATH,
    gating: GatingDecision | None = None,
) -> DynamicPluginsConfig:
    """
    Generate a complete dynamic-plugins document from metadata files.

    Every descriptor becomes an enabled plugin entry:
    - package: the dynamicArtifact path
    - disabled: False
    - pluginConfig: appConfigExamples[0].content

    Args:
        metadata_path: Metadata directory (default: ../metadata)
        gating: Metadata gating decision (default: from the environment)

    Returns:
        Generated document; {"plugins": []} when metadata handling is disabled

    Raises:
        MetadataError: If the directory is missing or has no valid descriptors
    """
    lg = get_lg("plugin-metadata")
    decision = _gating(gating)
    if not decision.enabled:
        lg.info(
            "returning empty config, metadata handling disabled",
            extra={"reason": decision.reason},
        )
        return {"plugins": []}

    lg.info("generating dynamic-plugins config from metadata")
    index = _require_index(metadata_path, "cannot generate dynamic-plugins config")

    plugins: list[PluginEntry] = []
    for plugin_name, metadata in index.items():
        lg.debug(
            "adding plugin from metadata",
            extra={"plugin": plugin_name, "package": metadata.package_path},
        )
        plugins.append(
            {
                "package": metadata.package_path,
                "disabled": False,
                "pluginConfig": copy.deepcopy(metadata.plugin_config),
            }
        )

    lg.info("generated dynamic-plugins config", extra={"plugins": len(plugins)})
    return {"plugins": plugins}


def load_and_inject_plugin_metadata(
    config: DynamicPluginsConfig,
    metadata_path: str | Path = DEFAULT_METADATA_PATH,
    gating: GatingDecision | None = None,
) -> DynamicPluginsConfig:
    """
    Load plugin metadata and inject it into an existing document.

    Args:
        config: Dynamic-plugins document
        metadata_path: Metadata directory (default: ../metadata)
        gating: Metadata gating decision (default: from the environment)

    Returns:
        Augmented document, or `config` itself when metadata handling is disabled

    Raises:
        MetadataError: If the directory is missing or has no valid descriptors
    """
    decision = _gating(gating)
    if not decision.enabled:
        return config

    get_lg("plugin-metadata").info("loading plugin metadata")
    index = _require_index(metadata_path, "plugin metadata required")
    return inject_metadata_config(config, index)


def resolve_dynamic_plugins_config(
    config: DynamicPluginsConfig | None,
    metadata_path: str | Path = DEFAULT_METADATA_PATH,
    gating: GatingDecision | None = None,
) -> DynamicPluginsConfig | None:
    """
    Produce the dynamic-plugins document to hand to the deployment.

    - Metadata handling disabled: `config` is returned as is, even if None.
    - No document given: one is generated from metadata.
    - Document given: metadata is injected into it.

    Raises:
        MetadataError: If metadata is required but unavailable
    """
    decision = _gating(gating)
    if not decision.enabled:
        get_lg("plugin-metadata").info(
            "metadata handling disabled", extra={"reason": decision.reason}
        )
        return config
    if config is None:
        return generate_dynamic_plugins_config_from_metadata(metadata_path, decision)
    return load_and_inject_plugin_metadata(config, metadata_path, decision)


def load_dynamic_plugins_file(path: str | Path) -> DynamicPluginsConfig:
    """
    Read a dynamic-plugins file, expanding environment variables first.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or not a mapping
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError("cannot read dynamic-plugins config", path=str(path)) from e

    try:
        data = load(envsubst(text))
    except YAMLError as e:
        raise ConfigError("invalid YAML in dynamic-plugins config", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("dynamic-plugins config must be a mapping", path=str(path))
    return data
