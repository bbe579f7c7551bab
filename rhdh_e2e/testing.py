"""
Pytest plugin wiring plugin metadata handling into an e2e test session.

Enable it from a conftest.py:

    pytest_plugins = ["rhdh_e2e.testing"]

The UI fixtures build on the `page` fixture from pytest-playwright.
"""

from pathlib import Path
from typing import Any

import pytest

from .config import E2ESettings
from .log import get_lg
from .playwright import CatalogImportPage, UIHelper
from .plugins import (
    GatingDecision,
    load_dynamic_plugins_file,
    resolve_dynamic_plugins_config,
)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("rhdh-e2e", "RHDH e2e plugin metadata")
    group.addoption(
        "--metadata-dir",
        action="store",
        default=None,
        help="Plugin metadata directory (default: $RHDH_METADATA_PATH or ../metadata)",
    )
    group.addoption(
        "--dynamic-plugins-config",
        action="store",
        default=None,
        help="Dynamic-plugins YAML to inject metadata into; generated when omitted",
    )


@pytest.fixture(scope="session")
def e2e_settings() -> E2ESettings:
    """Settings read once from the environment."""
    return E2ESettings.from_env()


@pytest.fixture(scope="session")
def plugin_metadata_gating(e2e_settings: E2ESettings) -> GatingDecision:
    return GatingDecision.from_settings(e2e_settings)


@pytest.fixture(scope="session")
def metadata_dir(request: pytest.FixtureRequest, e2e_settings: E2ESettings) -> Path:
    option = request.config.getoption("--metadata-dir")
    return Path(option if option else e2e_settings.metadata_path)


@pytest.fixture(scope="session")
def dynamic_plugins_config(
    request: pytest.FixtureRequest,
    metadata_dir: Path,
    plugin_metadata_gating: GatingDecision,
) -> dict[str, Any] | None:
    """
    Dynamic-plugins document for the deployment under test.

    None when no file was given and metadata handling is disabled.
    """
    config_path = request.config.getoption("--dynamic-plugins-config")
    config = load_dynamic_plugins_file(config_path) if config_path else None
    get_lg("testing").debug(
        "resolving dynamic-plugins config",
        extra={"file": config_path, "metadata_dir": str(metadata_dir)},
    )
    return resolve_dynamic_plugins_config(config, metadata_dir, plugin_metadata_gating)


@pytest.fixture
def ui_helper(page: Any) -> UIHelper:
    return UIHelper(page)


@pytest.fixture
def catalog_import_page(page: Any) -> CatalogImportPage:
    return CatalogImportPage(page)
