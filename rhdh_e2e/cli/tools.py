"""
Sub-commands of the rhdh-e2e CLI.

Each tool declares its arguments and runs against parsed arguments,
writing YAML results to stdout or to the file given with -o.
"""

import argparse
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.table import Table

from ..config import E2ESettings, merge_yaml_files, merge_yaml_files_if_exists
from ..log import Logger, get_lg
from ..plugins import (
    GatingDecision,
    extract_plugin_name,
    generate_dynamic_plugins_config_from_metadata,
    load_and_inject_plugin_metadata,
    load_dynamic_plugins_file,
)
from ..yaml import dump


class Tool:
    """Base class for a CLI sub-command."""

    name: str = ""
    help_text: str = ""

    @property
    def lg(self) -> Logger:
        return get_lg(["cli", self.name])

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        pass

    def run(self, args: argparse.Namespace, out: TextIO) -> int:
        raise NotImplementedError

    def emit_yaml(self, data: Any, output: str | None, out: TextIO) -> None:
        """Write data as YAML to `output`, or to `out` when no file is given."""
        text = dump(data)
        if output is None:
            out.write(text)
            return
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        self.lg.info("wrote output", extra={"path": path})


def _add_metadata_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--metadata-dir",
        default=None,
        help="Plugin metadata directory (default: $RHDH_METADATA_PATH or ../metadata)",
    )
    parser.add_argument("-o", "--output", default=None, help="Write YAML to this file")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Handle metadata even when the environment disables it",
    )


def _metadata_context(args: argparse.Namespace) -> tuple[str, GatingDecision]:
    settings = E2ESettings.from_env()
    metadata_dir = args.metadata_dir or settings.metadata_path
    gating = GatingDecision.enable() if args.force else GatingDecision.from_settings(settings)
    return metadata_dir, gating


class PluginsNameTool(Tool):
    """Print the canonical plugin identifier for package references."""

    name = "name"
    help_text = "Print canonical plugin names for package references"

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("refs", nargs="+", metavar="REF", help="Package reference")
        parser.add_argument(
            "--plain", action="store_true", help="Print one name per line, no table"
        )

    def run(self, args: argparse.Namespace, out: TextIO) -> int:
        if args.plain:
            for ref in args.refs:
                out.write(extract_plugin_name(ref) + "\n")
            return 0

        table = Table(show_header=True, header_style="bold")
        table.add_column("Reference")
        table.add_column("Plugin")
        for ref in args.refs:
            table.add_row(ref, extract_plugin_name(ref))
        Console(file=out, soft_wrap=True).print(table)
        return 0


class PluginsGenerateTool(Tool):
    """Generate a dynamic-plugins document from all metadata descriptors."""

    name = "generate"
    help_text = "Generate dynamic-plugins config from metadata"

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        _add_metadata_args(parser)

    def run(self, args: argparse.Namespace, out: TextIO) -> int:
        metadata_dir, gating = _metadata_context(args)
        config = generate_dynamic_plugins_config_from_metadata(metadata_dir, gating)
        self.emit_yaml(config, args.output, out)
        return 0


class PluginsInjectTool(Tool):
    """Inject metadata into an existing dynamic-plugins file."""

    name = "inject"
    help_text = "Inject metadata config into a dynamic-plugins file"

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("config", help="Dynamic-plugins YAML file")
        _add_metadata_args(parser)

    def run(self, args: argparse.Namespace, out: TextIO) -> int:
        metadata_dir, gating = _metadata_context(args)
        config = load_dynamic_plugins_file(args.config)
        result = load_and_inject_plugin_metadata(config, metadata_dir, gating)
        self.emit_yaml(result, args.output, out)
        return 0


class ConfigMergeTool(Tool):
    """Deep merge YAML layers, later files overriding earlier ones."""

    name = "merge"
    help_text = "Deep merge YAML files in order"

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("files", nargs="+", metavar="FILE", help="YAML layer")
        parser.add_argument("-o", "--output", default=None, help="Write YAML to this file")
        parser.add_argument(
            "--if-exists", action="store_true", help="Skip files that do not exist"
        )

    def run(self, args: argparse.Namespace, out: TextIO) -> int:
        if args.if_exists:
            merged = merge_yaml_files_if_exists(args.files)
        else:
            merged = merge_yaml_files(args.files)
        self.emit_yaml(merged, args.output, out)
        return 0


# Command group -> tools
TOOL_GROUPS: dict[str, tuple[str, list[type[Tool]]]] = {
    "plugins": (
        "Dynamic plugin metadata",
        [PluginsNameTool, PluginsGenerateTool, PluginsInjectTool],
    ),
    "config": ("Layered YAML configuration", [ConfigMergeTool]),
}
