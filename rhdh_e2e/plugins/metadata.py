"""
Plugin metadata loading.

Each plugin ships a Package descriptor (a custom-resource style YAML file):

    spec:
      packageName: "@backstage-community/plugin-tech-radar"
      dynamicArtifact: ./dynamic-plugins/dist/backstage-community-plugin-tech-radar
      appConfigExamples:
        - title: Default configuration
          content:
            dynamicPlugins: {...}

This module turns a directory of descriptors into a MetadataIndex keyed by
the canonical plugin name, so that plugin list entries can be matched no
matter whether they reference a local path or an OCI image.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..config.settings import DEFAULT_METADATA_PATH
from ..log import get_lg
from ..yaml import YAMLError, load_file

# Start of a :tag or @digest suffix
_SUFFIX_PATTERN = re.compile(r"[:@]")


@dataclass(frozen=True)
class PluginMetadata:
    """Metadata parsed from one descriptor file."""

    package_path: str
    plugin_config: dict[str, Any]
    package_name: str
    source_file: Path


@dataclass(frozen=True)
class Found:
    """Descriptor parsed into a metadata record."""

    metadata: PluginMetadata


@dataclass(frozen=True)
class Skipped:
    """Descriptor ignored; the reason is logged."""

    path: Path
    reason: str


ParseOutcome = Found | Skipped

MetadataIndex = dict[str, PluginMetadata]


def extract_plugin_name(package_ref: str) -> str:
    """
    Extract the canonical plugin name from a package reference.

    Handles:
    - Local path: ./dynamic-plugins/dist/backstage-community-plugin-tech-radar
    - OCI with integrity: oci://quay.io/rhdh/plugin@sha256:...!alias
    - OCI with tag: oci://quay.io/rhdh/backstage-community-plugin-tech-radar:1.0

    The alias after "!" is never the name. References without a usable path
    segment (no "/", trailing "/", empty) come back unchanged.

    Args:
        package_ref: Package reference string

    Returns:
        The extracted plugin name
    """
    ref = package_ref.split("!", 1)[0]
    if "/" not in ref:
        return package_ref
    segment = _SUFFIX_PATTERN.split(ref.rsplit("/", 1)[1], 1)[0]
    return segment or package_ref


def get_metadata_directory(metadata_path: str | Path = DEFAULT_METADATA_PATH) -> Path | None:
    """
    Resolve the metadata directory.

    Args:
        metadata_path: Directory path, relative paths resolve against the
                       current working directory

    Returns:
        Absolute directory path, or None if it does not exist or is not a directory
    """
    lg = get_lg("plugin-metadata")
    resolved = Path(metadata_path).resolve()
    if resolved.is_dir():
        lg.info("using metadata directory", extra={"path": resolved})
        return resolved

    lg.info("metadata directory not found", extra={"path": resolved})
    return None


def _first_config_example(spec: dict[str, Any]) -> Any:
    # Only the first example is used; later ones are alternate profiles at most
    examples = spec.get("appConfigExamples")
    if not isinstance(examples, list) or not examples:
        return None
    first = examples[0]
    if not isinstance(first, dict):
        return None
    return first.get("content")


def parse_metadata_file(path: str | Path) -> ParseOutcome:
    """
    Parse a single descriptor file.

    Never raises for a bad file: read errors, malformed YAML and missing
    fields all become Skipped so a directory scan can carry on.

    Args:
        path: Path to the descriptor YAML file

    Returns:
        Found with the metadata record, or Skipped with the reason
    """
    lg = get_lg("plugin-metadata")
    path = Path(path)

    try:
        doc = load_file(path)
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        lg.error("failed to parse metadata file", extra={"path": path, "exception": e})
        return Skipped(path, f"unreadable: {e.__class__.__name__}")

    spec = doc.get("spec") if isinstance(doc, dict) else None
    if not isinstance(spec, dict):
        spec = {}

    package_path = spec.get("dynamicArtifact")
    if not package_path or not isinstance(package_path, str):
        lg.info("skipping metadata file, no spec.dynamicArtifact", extra={"path": path})
        return Skipped(path, "no spec.dynamicArtifact")

    plugin_config = _first_config_example(spec)
    if not plugin_config or not isinstance(plugin_config, dict):
        lg.info(
            "skipping metadata file, no spec.appConfigExamples[0].content",
            extra={"path": path},
        )
        return Skipped(path, "no spec.appConfigExamples[0].content")

    package_name = spec.get("packageName") or ""
    lg.debug("loaded metadata", extra={"package": package_path})
    return Found(
        PluginMetadata(
            package_path=package_path,
            plugin_config=plugin_config,
            package_name=str(package_name),
            source_file=path,
        )
    )


def parse_all_metadata_files(metadata_dir: str | Path) -> MetadataIndex:
    """
    Parse all descriptors in a directory into an index keyed by plugin name.

    Only `*.yaml` files directly inside the directory are considered. Files
    are processed in sorted name order; when two descriptors map to the same
    plugin name the later file wins.

    Args:
        metadata_dir: Directory containing descriptor files

    Returns:
        Mapping of plugin name to metadata, empty if nothing usable was found
    """
    lg = get_lg("plugin-metadata")
    metadata_dir = Path(metadata_dir)
    files = sorted(p for p in metadata_dir.glob("*.yaml") if p.is_file())
    lg.info("found metadata files", extra={"count": len(files), "dir": metadata_dir})

    index: MetadataIndex = {}
    for file in files:
        outcome = parse_metadata_file(file)
        if isinstance(outcome, Skipped):
            continue
        metadata = outcome.metadata
        plugin_name = extract_plugin_name(metadata.package_path)
        if plugin_name in index:
            lg.warning(
                "duplicate plugin metadata, later file wins",
                extra={
                    "plugin": plugin_name,
                    "previous": index[plugin_name].source_file.name,
                    "file": file.name,
                },
            )
        index[plugin_name] = metadata
        lg.debug(
            "mapped plugin",
            extra={"plugin": plugin_name, "package": metadata.package_path},
        )

    lg.info("parsed plugin metadata", extra={"entries": len(index)})
    return index

