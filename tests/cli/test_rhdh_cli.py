"""
Tests for the rhdh-e2e command line.
"""

from io import StringIO
from pathlib import Path

import pytest

from rhdh_e2e.cli import build_parser, main
from rhdh_e2e.yaml import load, load_file
from tests.fixtures.metadata import (
    NOTIFICATIONS_PATH,
    TECH_RADAR_CONFIG,
    TECH_RADAR_PATH,
)


def run_cli(*argv: str) -> tuple[int, str]:
    out = StringIO()
    code = main(list(argv), out=out)
    return code, out.getvalue()


@pytest.mark.unit
class TestParser:
    """Test argument parsing."""

    def test_group_required(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["plugins"])
        assert exc_info.value.code == 2

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["plugins", "publish"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("rhdh-e2e ")


@pytest.mark.unit
class TestPluginsName:
    """Test `plugins name`."""

    def test_plain(self):
        code, out = run_cli(
            "plugins", "name", "--plain", TECH_RADAR_PATH, "oci://quay.io/rhdh/plugin-b:1.0!b"
        )
        assert code == 0
        assert out.splitlines() == ["backstage-community-plugin-tech-radar", "plugin-b"]

    def test_table(self):
        code, out = run_cli("plugins", "name", "./dist/plugin-a", "oci://q.io/r/plugin-b:1!b")
        assert code == 0
        assert "Reference" in out
        assert "Plugin" in out
        assert "plugin-a" in out
        assert "plugin-b" in out


@pytest.mark.unit
class TestPluginsGenerate:
    """Test `plugins generate`."""

    def test_generate_to_stdout(self, metadata_dir, clean_env):
        code, out = run_cli("plugins", "generate", "--metadata-dir", str(metadata_dir))

        assert code == 0
        packages = [p["package"] for p in load(out)["plugins"]]
        assert sorted(packages) == sorted([TECH_RADAR_PATH, NOTIFICATIONS_PATH])

    def test_generate_to_file(self, metadata_dir, temp_dir, clean_env):
        output = temp_dir / "out" / "dynamic-plugins.yaml"
        code, out = run_cli(
            "plugins", "generate", "--metadata-dir", str(metadata_dir), "-o", str(output)
        )

        assert code == 0
        assert out == ""
        assert len(load_file(output)["plugins"]) == 2

    def test_metadata_dir_from_environment(self, metadata_dir, clean_env):
        clean_env.setenv("RHDH_METADATA_PATH", str(metadata_dir))
        code, out = run_cli("plugins", "generate")
        assert code == 0
        assert len(load(out)["plugins"]) == 2

    def test_periodic_job_generates_empty_config(self, metadata_dir, clean_env):
        clean_env.setenv("JOB_NAME", "periodic-nightly-1")
        code, out = run_cli("plugins", "generate", "--metadata-dir", str(metadata_dir))
        assert code == 0
        assert load(out) == {"plugins": []}

    def test_force_overrides_gating(self, metadata_dir, clean_env):
        clean_env.setenv("JOB_NAME", "periodic-nightly-1")
        code, out = run_cli(
            "plugins", "generate", "--force", "--metadata-dir", str(metadata_dir)
        )
        assert code == 0
        assert len(load(out)["plugins"]) == 2

    def test_missing_metadata_dir_exits_1(self, temp_dir, clean_env, capsys):
        missing = temp_dir / "missing"
        code, out = run_cli("plugins", "generate", "--metadata-dir", str(missing))

        assert code == 1
        assert out == ""
        err = capsys.readouterr().err
        assert "metadata directory not found" in err
        assert "[command:plugins generate]" in err


@pytest.mark.unit
class TestPluginsInject:
    """Test `plugins inject`."""

    def test_inject(self, metadata_dir, temp_dir, clean_env):
        config = temp_dir / "dynamic-plugins.yaml"
        config.write_text(
            "includes:\n  - dynamic-plugins.default.yaml\n"
            "plugins:\n"
            "  - package: oci://quay.io/rhdh/backstage-community-plugin-tech-radar:${TAG}\n"
            "    disabled: false\n"
        )
        clean_env.setenv("TAG", "1.0")

        code, out = run_cli(
            "plugins", "inject", str(config), "--metadata-dir", str(metadata_dir)
        )

        assert code == 0
        result = load(out)
        assert result["includes"] == ["dynamic-plugins.default.yaml"]
        entry = result["plugins"][0]
        assert entry["package"] == "oci://quay.io/rhdh/backstage-community-plugin-tech-radar:1.0"
        assert entry["pluginConfig"] == TECH_RADAR_CONFIG

    def test_inject_skipped_when_disabled(self, metadata_dir, temp_dir, clean_env):
        config = temp_dir / "dynamic-plugins.yaml"
        config.write_text("plugins:\n  - package: " + TECH_RADAR_PATH + "\n")
        clean_env.setenv("RHDH_SKIP_PLUGIN_METADATA_INJECTION", "true")

        code, out = run_cli(
            "plugins", "inject", str(config), "--metadata-dir", str(metadata_dir)
        )

        assert code == 0
        assert load(out) == {"plugins": [{"package": TECH_RADAR_PATH}]}

    def test_missing_config_file_exits_1(self, metadata_dir, temp_dir, clean_env):
        code, _ = run_cli(
            "plugins", "inject", str(temp_dir / "nope.yaml"), "--metadata-dir", str(metadata_dir)
        )
        assert code == 1


@pytest.mark.unit
class TestConfigMerge:
    """Test `config merge`."""

    @pytest.fixture
    def layer_files(self, temp_dir: Path) -> list[Path]:
        base = temp_dir / "base.yaml"
        base.write_text("app:\n  title: Hub\n  baseUrl: http://localhost\n")
        user = temp_dir / "user.yaml"
        user.write_text("app:\n  title: Mine\n")
        return [base, user]

    def test_merge(self, layer_files):
        code, out = run_cli("config", "merge", *map(str, layer_files))
        assert code == 0
        assert load(out) == {"app": {"title": "Mine", "baseUrl": "http://localhost"}}

    def test_missing_layer_exits_1(self, layer_files, temp_dir):
        code, _ = run_cli("config", "merge", str(layer_files[0]), str(temp_dir / "x.yaml"))
        assert code == 1

    def test_if_exists(self, layer_files, temp_dir):
        code, out = run_cli(
            "config", "merge", "--if-exists", str(layer_files[0]), str(temp_dir / "x.yaml")
        )
        assert code == 0
        assert load(out)["app"]["title"] == "Hub"

    def test_output_file(self, layer_files, temp_dir):
        output = temp_dir / "merged.yaml"
        code, _ = run_cli("config", "merge", *map(str, layer_files), "-o", str(output))
        assert code == 0
        assert load_file(output)["app"]["title"] == "Mine"


@pytest.mark.unit
class TestLogLevel:
    """Test the global --log-level option."""

    def test_debug_logs_to_stderr(self, layer_files_dir, capsys):
        code = main(["--log-level", "debug", "config", "merge", "--if-exists", "missing.yaml"])
        assert code == 0
        captured = capsys.readouterr()
        assert "skipping missing config layer" in captured.err
        assert captured.out == "{}\n"

    def test_invalid_level_exits_1(self, layer_files_dir):
        code = main(["--log-level", "loud", "config", "merge", "--if-exists", "missing.yaml"])
        assert code == 1

    def test_invalid_environment_level_exits_1(self, layer_files_dir, clean_env, capsys):
        clean_env.setenv("RHDH_E2E_LOG_LEVEL", "verbose")
        code = main(["config", "merge", "--if-exists", "missing.yaml"])
        assert code == 1
        assert "Invalid log level" in capsys.readouterr().err

    def test_empty_environment_level_means_info(self, layer_files_dir, clean_env, capsys):
        clean_env.setenv("RHDH_E2E_LOG_LEVEL", "")
        code = main(["config", "merge", "--if-exists", "missing.yaml"])
        assert code == 0
        assert capsys.readouterr().out == "{}\n"

    @pytest.fixture
    def layer_files_dir(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        return temp_dir
