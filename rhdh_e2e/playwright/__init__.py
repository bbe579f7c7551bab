"""
Playwright UI helpers and page objects.
"""

from .catalog_import import CatalogImportPage
from .selectors import (
    CATALOG_IMPORT_COMPONENTS,
    SEARCH_OBJECTS_COMPONENTS,
    UI_HELPER_ELEMENTS,
    WAIT_OBJECTS,
)
from .ui_helper import UIHelper

__all__ = [
    "UIHelper",
    "CatalogImportPage",
    "UI_HELPER_ELEMENTS",
    "WAIT_OBJECTS",
    "SEARCH_OBJECTS_COMPONENTS",
    "CATALOG_IMPORT_COMPONENTS",
]
