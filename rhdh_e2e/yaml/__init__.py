"""
YAML loading, dumping and deep merging.

Public API:
    load: Load YAML from a stream or string with the custom Loader
    load_file: Load YAML from a file path
    dump: Serialize data as block-style YAML
    deep_merge: Deep merge two dictionaries
    Loader: Custom YAML loader class
"""

from pathlib import Path
from typing import Any

import yaml as _yaml  # type: ignore[import-untyped]

from .loader import Loader

__all__ = [
    "load",
    "load_file",
    "dump",
    "deep_merge",
    "Loader",
    "YAMLError",
]

YAMLError = _yaml.YAMLError


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries, with override taking precedence.

    Mappings merge key by key recursively. Wherever either side holds a
    non-mapping value (scalar, list, None) the override value wins outright;
    lists are replaced, never concatenated. Neither input is modified.

    Args:
        base: Base dictionary to merge into
        override: Dictionary with values to override base

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load(stream: Any) -> Any:
    """
    Load a single YAML document.

    Args:
        stream: File object or string to load YAML from

    Returns:
        Parsed data; None for an empty document

    Raises:
        yaml.YAMLError: If the document is malformed
    """
    content = stream.read() if hasattr(stream, "read") else str(stream)
    return _yaml.load(content, Loader=Loader)  # noqa: S506 - Loader is a SafeLoader


def load_file(path: str | Path) -> Any:
    """Load a YAML file (UTF-8)."""
    with open(path, encoding="utf-8") as f:
        return load(f)


def dump(data: Any) -> str:
    """Format data as block-style YAML, preserving key order."""
    result: str = _yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        indent=2,
    )
    return result
