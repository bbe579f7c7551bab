"""
Page object for the catalog import page.
"""

from playwright.sync_api import Page, expect

from .selectors import CATALOG_IMPORT_COMPONENTS
from .ui_helper import UIHelper

ANALYZE_TIMEOUT_MS = 25_000


class CatalogImportPage:
    """Registers existing components through the catalog import form."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self.ui_helper = UIHelper(page)

    def _analyze_and_wait(self, url: str) -> None:
        """Fill the component URL, click Analyze and wait for processing to finish."""
        self.page.fill(CATALOG_IMPORT_COMPONENTS["componentURL"], url)
        button = self.ui_helper.click_button("Analyze")
        expect(button).not_to_be_visible(timeout=ANALYZE_TIMEOUT_MS)

    def is_component_already_registered(self) -> bool:
        """A Refresh button instead of Import means the component is known."""
        return self.ui_helper.is_btn_visible("Refresh")

    def register_existing_component(self, url: str, click_view_component: bool = True) -> bool:
        """
        Register a component, or refresh it if it is already registered.

        Args:
            url: Component descriptor URL
            click_view_component: Open the component after a fresh import

        Returns:
            True if the component was already registered
        """
        self._analyze_and_wait(url)
        already_registered = self.is_component_already_registered()
        if already_registered:
            self.ui_helper.click_button("Refresh")
            assert self.ui_helper.is_btn_visible("Register another")
        else:
            self.ui_helper.click_button("Import")
            if click_view_component:
                self.ui_helper.click_button("View Component")
        return already_registered

    def analyze_component(self, url: str) -> None:
        self.page.fill(CATALOG_IMPORT_COMPONENTS["componentURL"], url)
        self.ui_helper.click_button("Analyze")

    def inspect_entity_and_verify_yaml(self, text: str) -> None:
        self.page.get_by_title("More").click()
        self.page.get_by_role("menuitem").get_by_text("Inspect entity").click()
        self.ui_helper.click_tab("Raw YAML")
        expect(self.page.get_by_test_id("code-snippet")).to_contain_text(text)
        self.ui_helper.click_button("Close")
