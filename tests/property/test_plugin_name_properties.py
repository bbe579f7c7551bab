"""Property-based tests for plugin name extraction and metadata merging."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rhdh_e2e.plugins import extract_plugin_name, inject_metadata_config
from rhdh_e2e.plugins.metadata import PluginMetadata
from rhdh_e2e.yaml import deep_merge

# Path segments as they appear in image and directory names
segment = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Nd"), whitelist_characters="-_."),
    min_size=1,
    max_size=30,
)
tag = st.text(alphabet="0123456789.abcdef", min_size=1, max_size=12)

json_scalars = st.none() | st.booleans() | st.integers() | st.text(max_size=10)
config_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=5), children, max_size=3),
    max_leaves=10,
)
configs = st.dictionaries(st.text(max_size=5), config_values, max_size=4)


@pytest.mark.property
@pytest.mark.unit
class TestExtractPluginNameProperties:
    """Properties of extract_plugin_name."""

    @given(dirs=st.lists(segment, min_size=1, max_size=4), name=segment)
    def test_local_path_gives_last_segment(self, dirs: list[str], name: str) -> None:
        """A local path resolves to its final segment."""
        path = "./" + "/".join(dirs + [name])
        assert extract_plugin_name(path) == name

    @given(
        registry=segment,
        repo=st.lists(segment, min_size=0, max_size=2),
        name=segment,
        version=tag,
        alias=st.one_of(st.none(), segment),
    )
    def test_oci_reference_matches_local_path(
        self,
        registry: str,
        repo: list[str],
        name: str,
        version: str,
        alias: str | None,
    ) -> None:
        """Tag and alias never change the extracted name."""
        ref = "oci://" + "/".join([registry] + repo + [name]) + ":" + version
        if alias is not None:
            ref += "!" + alias
        assert extract_plugin_name(ref) == extract_plugin_name(f"./dist/{name}") == name

    @given(name=segment, digest=st.text(alphabet="0123456789abcdef", min_size=8, max_size=64))
    def test_digest_stripped(self, name: str, digest: str) -> None:
        assert extract_plugin_name(f"oci://quay.io/rhdh/{name}@sha256:{digest}") == name

    @given(text=st.text(max_size=100))
    @settings(max_examples=200)
    def test_arbitrary_input_doesnt_crash(self, text: str) -> None:
        """Any input gives a non-empty name unless the input itself is empty."""
        result = extract_plugin_name(text)
        assert isinstance(result, str)
        assert bool(result) == bool(text)

    @given(text=st.text(alphabet=st.characters(blacklist_characters="/"), max_size=50))
    def test_no_slash_returned_unchanged(self, text: str) -> None:
        assert extract_plugin_name(text) == text


@pytest.mark.property
@pytest.mark.unit
class TestMergeProperties:
    """Properties of deep_merge and metadata injection."""

    @given(base=configs, override=configs)
    def test_override_keys_always_present(self, base: dict, override: dict) -> None:
        merged = deep_merge(base, override)
        assert set(merged) == set(base) | set(override)
        for key, value in override.items():
            if not (isinstance(value, dict) and isinstance(base.get(key), dict)):
                assert merged[key] == value

    @given(config=configs)
    def test_merge_identities(self, config: dict) -> None:
        assert deep_merge(config, {}) == config
        assert deep_merge({}, config) == config

    @given(metadata_config=configs, user_config=configs, name=segment)
    @settings(max_examples=50)
    def test_injection_equals_deep_merge(
        self, metadata_config: dict, user_config: dict, name: str
    ) -> None:
        """Injected pluginConfig is metadata config overridden by user config."""
        index = {
            name: PluginMetadata(
                package_path=f"./dist/{name}",
                plugin_config=metadata_config,
                package_name="",
                source_file=None,  # type: ignore[arg-type]
            )
        }
        entry = {"package": f"oci://quay.io/rhdh/{name}:1.0", "pluginConfig": user_config}
        doc = {"plugins": [entry]}

        result = inject_metadata_config(doc, index)

        assert result["plugins"][0]["pluginConfig"] == deep_merge(metadata_config, user_config)
