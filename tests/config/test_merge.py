"""
Tests for layered YAML configuration merging.
"""

from pathlib import Path

import pytest

from rhdh_e2e.config import (
    merge_layered_config,
    merge_yaml_files,
    merge_yaml_files_if_exists,
    merge_yaml_files_to_file,
)
from rhdh_e2e.exceptions import ConfigError
from rhdh_e2e.yaml import load_file


@pytest.fixture
def layers(temp_dir: Path) -> dict[str, Path]:
    """Default, auth-provider and user layers."""
    defaults = temp_dir / "app-config.yaml"
    defaults.write_text(
        """
app:
  title: Red Hat Developer Hub
  baseUrl: http://localhost:7007
auth:
  providers: {}
catalog:
  rules:
    - allow: [Component, System]
"""
    )
    auth = temp_dir / "auth-github.yaml"
    auth.write_text(
        """
auth:
  environment: production
  providers:
    github:
      production:
        clientId: ${GITHUB_CLIENT_ID}
"""
    )
    user = temp_dir / "user.yaml"
    user.write_text(
        """
app:
  title: My Hub
catalog:
  rules:
    - allow: [Component]
"""
    )
    return {"defaults": defaults, "auth": auth, "user": user}


@pytest.mark.unit
class TestMergeYamlFiles:
    """Test ordered merging of YAML files."""

    def test_later_files_override(self, layers):
        merged = merge_yaml_files([layers["defaults"], layers["user"]])
        assert merged["app"] == {"title": "My Hub", "baseUrl": "http://localhost:7007"}
        assert merged["catalog"]["rules"] == [{"allow": ["Component"]}]

    def test_nested_mappings_merged(self, layers):
        merged = merge_yaml_files([layers["defaults"], layers["auth"]])
        assert merged["auth"]["environment"] == "production"
        assert "github" in merged["auth"]["providers"]

    def test_no_files_gives_empty_mapping(self):
        assert merge_yaml_files([]) == {}

    def test_empty_file_contributes_nothing(self, layers, temp_dir):
        empty = temp_dir / "empty.yaml"
        empty.write_text("")
        assert merge_yaml_files([layers["user"], empty]) == merge_yaml_files([layers["user"]])

    def test_missing_file_raises(self, layers, temp_dir):
        with pytest.raises(ConfigError, match="config layer not found"):
            merge_yaml_files([layers["defaults"], temp_dir / "missing.yaml"])

    def test_non_mapping_layer_raises(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n")
        with pytest.raises(ConfigError, match="must be a mapping") as exc_info:
            merge_yaml_files([path])
        assert exc_info.value.context["type"] == "list"

    def test_invalid_yaml_raises(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("app: [unclosed")
        with pytest.raises(ConfigError, match="invalid YAML"):
            merge_yaml_files([path])

    def test_accepts_string_paths(self, layers):
        merged = merge_yaml_files([str(layers["defaults"])])
        assert merged["app"]["title"] == "Red Hat Developer Hub"


@pytest.mark.unit
class TestMergeYamlFilesIfExists:
    """Test merging that tolerates missing layers."""

    def test_missing_files_skipped(self, layers, temp_dir):
        merged = merge_yaml_files_if_exists(
            [layers["defaults"], temp_dir / "missing.yaml", layers["user"]]
        )
        assert merged["app"]["title"] == "My Hub"

    def test_all_missing_gives_empty_mapping(self, temp_dir):
        assert merge_yaml_files_if_exists([temp_dir / "a.yaml", temp_dir / "b.yaml"]) == {}

    def test_invalid_existing_file_still_raises(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("- not a mapping\n")
        with pytest.raises(ConfigError):
            merge_yaml_files_if_exists([path])


@pytest.mark.unit
class TestMergeYamlFilesToFile:
    """Test writing merged output."""

    def test_writes_merged_yaml(self, layers, temp_dir):
        out = temp_dir / "out" / "merged.yaml"
        written = merge_yaml_files_to_file([layers["defaults"], layers["user"]], out)

        assert written == out
        assert load_file(out)["app"]["title"] == "My Hub"

    def test_skip_missing(self, layers, temp_dir):
        out = temp_dir / "merged.yaml"
        merge_yaml_files_to_file(
            [layers["user"], temp_dir / "missing.yaml"], out, skip_missing=True
        )
        assert load_file(out)["app"] == {"title": "My Hub"}

    def test_missing_layer_fails_without_writing(self, temp_dir):
        out = temp_dir / "merged.yaml"
        with pytest.raises(ConfigError):
            merge_yaml_files_to_file([temp_dir / "missing.yaml"], out)
        assert not out.exists()


@pytest.mark.unit
class TestMergeLayeredConfig:
    """Test the defaults -> auth provider -> user layering."""

    def test_all_layers(self, layers):
        merged = merge_layered_config(layers["defaults"], layers["auth"], layers["user"])
        assert merged["app"]["title"] == "My Hub"
        assert merged["auth"]["environment"] == "production"
        assert merged["catalog"]["rules"] == [{"allow": ["Component"]}]

    def test_defaults_only(self, layers):
        merged = merge_layered_config(layers["defaults"])
        assert merged["app"]["title"] == "Red Hat Developer Hub"

    def test_missing_optional_layers_skipped(self, layers, temp_dir):
        merged = merge_layered_config(
            layers["defaults"], temp_dir / "no-auth.yaml", layers["user"]
        )
        assert merged["auth"] == {"providers": {}}

    def test_missing_defaults_raises(self, temp_dir):
        with pytest.raises(ConfigError):
            merge_layered_config(temp_dir / "missing.yaml")
