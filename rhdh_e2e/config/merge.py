"""
Layered YAML configuration merging.

Configuration for a deployment is assembled from ordered layers, typically
defaults, then an auth-provider layer, then the user's own file. Each later
layer overrides the earlier ones via deep_merge.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..exceptions import ConfigError
from ..log import get_lg
from ..yaml import YAMLError, deep_merge, dump, load_file

PathLike = str | Path


def _load_layer(path: Path) -> dict[str, Any]:
    """Load one layer; an empty file contributes an empty mapping."""
    try:
        data = load_file(path)
    except YAMLError as e:
        raise ConfigError("invalid YAML in config layer", path=path, error=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            "config layer must be a mapping",
            path=path,
            type=type(data).__name__,
        )
    return data


def _merge(paths: Iterable[PathLike], skip_missing: bool) -> dict[str, Any]:
    lg = get_lg("config")
    merged: dict[str, Any] = {}
    for raw in paths:
        path = Path(raw)
        if not path.is_file():
            if skip_missing:
                lg.debug("skipping missing config layer", extra={"path": path})
                continue
            raise ConfigError("config layer not found", path=path.resolve())
        merged = deep_merge(merged, _load_layer(path))
        lg.trace("merged config layer", extra={"path": path})
    return merged


def merge_yaml_files(paths: Iterable[PathLike]) -> dict[str, Any]:
    """
    Merge YAML files in order, later files overriding earlier ones.

    Args:
        paths: Layer files, lowest precedence first

    Returns:
        Merged mapping

    Raises:
        ConfigError: If a layer is missing, malformed, or not a mapping
    """
    return _merge(paths, skip_missing=False)


def merge_yaml_files_if_exists(paths: Iterable[PathLike]) -> dict[str, Any]:
    """Like merge_yaml_files, but silently skip layers that do not exist."""
    return _merge(paths, skip_missing=True)


def merge_yaml_files_to_file(
    paths: Iterable[PathLike], output_path: PathLike, skip_missing: bool = False
) -> Path:
    """
    Merge YAML files and write the result.

    Args:
        paths: Layer files, lowest precedence first
        output_path: Destination file; parent directories are created
        skip_missing: Skip layers that do not exist instead of failing

    Returns:
        Path of the written file
    """
    merged = _merge(paths, skip_missing=skip_missing)
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dump(merged), encoding="utf-8")
    get_lg("config").info("wrote merged config", extra={"path": out})
    return out


def merge_layered_config(
    defaults: PathLike,
    auth_provider: PathLike | None = None,
    user: PathLike | None = None,
) -> dict[str, Any]:
    """
    Merge the standard three configuration layers.

    The defaults layer must exist; the auth-provider and user layers are
    optional and skipped when absent or missing on disk.
    """
    merged = merge_yaml_files([defaults])
    optional = [p for p in (auth_provider, user) if p is not None]
    return deep_merge(merged, merge_yaml_files_if_exists(optional))
