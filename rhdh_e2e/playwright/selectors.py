"""
Selectors shared by the UI helpers and page objects.
"""


class UIHelperElements:
    """Material UI selectors used by UIHelper."""

    mui_button_label = 'span[class^="MuiButton-label"],button[class*="MuiButton-root"]'
    mui_table_cell = 'td[class*="MuiTableCell-root"]'

    @staticmethod
    def row_by_text(text: str) -> str:
        return f'tr:has(:text-is("{text}"))'

    @staticmethod
    def mui_card(card_heading: str) -> str:
        return (
            "//div[contains(@class,'MuiCardHeader-root') and "
            f"descendant::*[text()='{card_heading}']]/.."
        )

    @staticmethod
    def mui_card_root(card_text: str) -> str:
        return (
            "//div[contains(@class,'MuiCard-root')]"
            f"[descendant::text()[contains(., '{card_text}')]]"
        )


UI_HELPER_ELEMENTS = UIHelperElements()

# Progress indicators that must be gone before a page counts as loaded
WAIT_OBJECTS = {
    "MuiLinearProgress": 'div[class*="MuiLinearProgress-root"]',
    "MuiCircularProgress": '[class*="MuiCircularProgress-root"]',
}

SEARCH_OBJECTS_COMPONENTS = {
    "placeholderSearch": 'input[placeholder="Search"]',
    "ariaLabelSearch": 'input[aria-label="Search"]',
}

CATALOG_IMPORT_COMPONENTS = {
    "componentURL": 'input[name="url"]',
}
