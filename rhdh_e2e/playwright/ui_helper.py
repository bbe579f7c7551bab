"""
Generic UI interactions and verifications for the deployed application.

Thin wrapper over a Playwright page that encodes the application's Material
UI conventions (button labels, tables, cards, sidebar navigation).
"""

from re import Pattern

from playwright.sync_api import Locator, Page, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..exceptions import UIError
from ..log import Logger, get_lg
from .selectors import SEARCH_OBJECTS_COMPONENTS, UI_HELPER_ELEMENTS, WAIT_OBJECTS

TextMatch = str | Pattern[str]

DEFAULT_TIMEOUT_MS = 10_000


class UIHelper:
    """
    UI helper bound to one page.

    Example:
        ui = UIHelper(page)
        ui.open_sidebar("Catalog")
        ui.select_mui_box("Kind", "Component")
        ui.verify_rows_in_table(["my-service"])
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    @property
    def lg(self) -> Logger:
        return get_lg(["ui", "helper"])

    # Waiting and navigation

    def wait_for_load(self, timeout: int = 120_000) -> None:
        """Wait until every progress indicator is hidden."""
        for selector in WAIT_OBJECTS.values():
            self.page.wait_for_selector(selector, state="hidden", timeout=timeout)

    def go_to_page_url(self, url: str, heading: str | None = None) -> None:
        self.page.goto(url)
        expect(self.page).to_have_url(url)
        if heading:
            self.verify_heading(heading)

    def open_sidebar(self, nav_bar_text: str) -> None:
        nav_link = self.page.locator(f'nav a:has-text("{nav_bar_text}")').first
        nav_link.wait_for(state="visible", timeout=15_000)
        nav_link.dispatch_event("click")

    def open_sidebar_button(self, nav_bar_button_label: str) -> None:
        nav_link = self.page.locator(f'nav button[aria-label="{nav_bar_button_label}"]')
        nav_link.wait_for(state="visible")
        nav_link.click()

    def click_tab(self, tab_name: str) -> None:
        tab = self.page.get_by_role("tab", name=tab_name)
        tab.wait_for(state="visible")
        tab.click()

    # Inputs

    def fill_text_input_by_label(self, label: str, text: str) -> None:
        self.page.get_by_label(label).fill(text)

    def search_input_placeholder(self, search_text: str) -> None:
        self.page.fill(SEARCH_OBJECTS_COMPONENTS["placeholderSearch"], search_text)

    def search_input_aria_label(self, search_text: str) -> None:
        self.page.fill(SEARCH_OBJECTS_COMPONENTS["ariaLabelSearch"], search_text)

    def press_tab(self) -> None:
        self.page.keyboard.press("Tab")

    def check_checkbox(self, text: str) -> None:
        self.page.get_by_role("checkbox", name=text).check()

    def uncheck_checkbox(self, text: str) -> None:
        self.page.get_by_role("checkbox", name=text).uncheck()

    def select_mui_box(self, label: str, value: str) -> None:
        self.page.click(f'div[aria-label="{label}"]')
        option = f'li[role="option"]:has-text("{value}")'
        self.page.wait_for_selector(option)
        self.page.click(option)

    # Clicks

    def click_button(self, label: TextMatch, exact: bool = True, force: bool = False) -> Locator:
        """Click a Material UI button by its label and return its locator."""
        button = (
            self.page.locator(UI_HELPER_ELEMENTS.mui_button_label)
            .get_by_text(label, exact=exact)
            .first
        )
        button.click(force=force)
        return button

    def click_button_by_text(
        self,
        button_text: TextMatch,
        exact: bool = True,
        timeout: int = DEFAULT_TIMEOUT_MS,
        force: bool = False,
    ) -> None:
        button = self.page.get_by_role("button").get_by_text(button_text, exact=exact)
        button.wait_for(state="visible", timeout=timeout)
        button.click(force=force)

    def click_button_by_label(self, label: TextMatch) -> None:
        self.page.get_by_role("button", name=label).first.click()

    def click_btn_by_title_if_not_pressed(self, title: str) -> None:
        button = self.page.locator(f'button[title="{title}"]')
        if button.get_attribute("aria-pressed") == "false":
            button.click()

    def click_by_data_test_id(self, data_test_id: str) -> None:
        element = self.page.get_by_test_id(data_test_id)
        element.wait_for(state="visible")
        element.dispatch_event("click")

    def click_link(
        self,
        text: str | None = None,
        *,
        href: str | None = None,
        aria_label: str | None = None,
    ) -> None:
        """Click a link by text, href, or the aria-label of its container."""
        if href is not None:
            link = self.page.locator(f'a[href="{href}"]').first
        elif aria_label is not None:
            link = self.page.locator(f"div[aria-label='{aria_label}'] a").first
        elif text is not None:
            link = self.page.locator("a").filter(has_text=text).first
        else:
            raise ValueError("click_link needs text, href or aria_label")
        link.wait_for(state="visible")
        link.click()

    # Visibility probes

    def _is_element_visible(
        self, selector: str, timeout: int = DEFAULT_TIMEOUT_MS, force: bool = False
    ) -> bool:
        try:
            self.page.wait_for_selector(selector, state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            if force:
                raise
            return False
        return self.page.locator(selector).first.is_visible()

    def is_btn_visible(self, text: str) -> bool:
        return self._is_element_visible(f'button:has-text("{text}")')

    def is_btn_visible_by_title(self, text: str) -> bool:
        return self._is_element_visible(f'BUTTON[title="{text}"]')

    def is_text_visible(self, text: str, timeout: int = DEFAULT_TIMEOUT_MS) -> bool:
        return self._is_element_visible(f':has-text("{text}")', timeout)

    # Verifications

    def verify_heading(self, heading: TextMatch, timeout: int = 20_000) -> None:
        locator = self.page.locator("h1, h2, h3, h4, h5, h6").filter(has_text=heading).first
        locator.wait_for(state="visible", timeout=timeout)
        expect(locator).to_be_visible()

    def verify_paragraph(self, paragraph: str) -> None:
        locator = self.page.locator("p").filter(has_text=paragraph).first
        locator.wait_for(state="visible", timeout=20_000)
        expect(locator).to_be_visible()

    def verify_text(self, text: TextMatch, exact: bool = True) -> None:
        self._verify_text_in_locator("", text, exact)

    def verify_text_visible(
        self, text: str, exact: bool = False, timeout: int = DEFAULT_TIMEOUT_MS
    ) -> None:
        expect(self.page.get_by_text(text, exact=exact)).to_be_visible(timeout=timeout)

    def verify_link_visible(self, text: str, timeout: int = DEFAULT_TIMEOUT_MS) -> None:
        expect(self.page.locator(f'a:has-text("{text}")')).to_be_visible(timeout=timeout)

    def verify_link(self, text: str, exact: bool = True, not_visible: bool = False) -> None:
        link = self.page.locator("a").get_by_text(text, exact=exact).first
        if not_visible:
            expect(link).to_be_hidden()
        else:
            expect(link).to_be_visible()

    def _verify_text_in_locator(self, selector: str, text: TextMatch, exact: bool) -> None:
        base = self.page.locator(selector) if selector else self.page
        element = base.get_by_text(text, exact=exact).first
        element.wait_for(state="visible")
        element.wait_for(state="attached")
        try:
            element.scroll_into_view_if_needed()
        except PlaywrightTimeoutError as e:
            self.lg.warning("could not scroll element into view", extra={"exception": e})
        expect(element).to_be_visible()

    def verify_text_in_selector(self, selector: str, expected_text: str) -> None:
        """Verify an element inside `selector` has exactly `expected_text`."""
        element = self.page.locator(selector).get_by_text(expected_text, exact=True)
        try:
            element.wait_for(state="visible")
        except PlaywrightTimeoutError:
            contents = self.page.locator(selector).all_text_contents()
            self.lg.error(
                "text verification failed",
                extra={"expected": expected_text, "contents": contents},
            )
            raise

        actual = element.text_content() or "No content"
        if actual.strip() != expected_text.strip():
            raise UIError(
                f'Expected text "{expected_text}" not found. Actual content: "{actual}".'
            )
        self.lg.debug("text verified", extra={"text": expected_text, "selector": selector})

    def verify_rows_in_table(self, row_texts: list[TextMatch], exact: bool = True) -> None:
        for row_text in row_texts:
            self._verify_text_in_locator("tr>td", row_text, exact)

    def verify_column_heading(self, headings: list[TextMatch], exact: bool = True) -> None:
        for heading in headings:
            column = self.page.locator("tr>th").get_by_text(heading, exact=exact).first
            column.wait_for(state="visible")
            column.scroll_into_view_if_needed()
            expect(column).to_be_visible()

    def verify_row_in_table_by_unique_text(
        self, unique_row_text: str, cell_texts: list[TextMatch]
    ) -> None:
        """Verify the row containing `unique_row_text` has cells matching each text."""
        row = self.page.locator(UI_HELPER_ELEMENTS.row_by_text(unique_row_text))
        row.wait_for()
        for cell_text in cell_texts:
            expect(row.locator("td").filter(has_text=cell_text).first).to_be_visible()

    def click_on_link_in_table_by_unique_text(
        self, unique_row_text: str, link_text: TextMatch, exact: bool = True
    ) -> None:
        row = self.page.locator(UI_HELPER_ELEMENTS.row_by_text(unique_row_text))
        row.wait_for()
        row.locator("a").get_by_text(link_text, exact=exact).first.click()

    def verify_cells_in_table(self, texts: list[TextMatch]) -> None:
        for text in texts:
            cells = self.page.locator(UI_HELPER_ELEMENTS.mui_table_cell).filter(has_text=text)
            count = cells.count()
            if count == 0:
                raise UIError(
                    f"Expected at least one cell with text matching {text}, "
                    "but none were found."
                )
            for i in range(count):
                expect(cells.nth(i)).to_be_visible()

    def verify_table_is_empty(self) -> None:
        rows = self.page.locator("table tbody tr:not(:has(td[colspan]))")
        if rows.count() != 0:
            raise UIError("Expected an empty table", rows=rows.count())

    def verify_text_in_card(self, card_heading: str, text: TextMatch, exact: bool = True) -> None:
        locator = (
            self.page.locator(UI_HELPER_ELEMENTS.mui_card(card_heading))
            .get_by_text(text, exact=exact)
            .first
        )
        locator.scroll_into_view_if_needed()
        expect(locator).to_be_visible()

    def click_btn_in_card(self, card_text: str, btn_text: str, exact: bool = True) -> None:
        card = self.page.locator(UI_HELPER_ELEMENTS.mui_card_root(card_text)).first
        card.scroll_into_view_if_needed()
        card.get_by_role("button", name=btn_text, exact=exact).first.click()

    def verify_alert_error_message(self, message: TextMatch) -> None:
        alert = self.page.get_by_role("alert")
        alert.wait_for()
        expect(alert).to_have_text(message)

    def verify_component_in_catalog(self, kind: str, expected_rows: list[TextMatch]) -> None:
        self.open_sidebar("Catalog")
        self.select_mui_box("Kind", kind)
        self.verify_rows_in_table(expected_rows)
