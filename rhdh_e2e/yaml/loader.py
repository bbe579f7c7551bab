"""
Custom YAML Loader with string-normalized mapping keys.

Extends yaml.SafeLoader so that date and numeric mapping keys come back as
strings. Merged configuration documents therefore only ever carry string
keys, and a key written as `8080:` in one layer matches `"8080":` in another.
"""

import datetime
from typing import Any

import yaml  # type: ignore[import-untyped]


class Loader(yaml.SafeLoader):
    """
    Safe YAML loader with automatic key type conversion.

    Example:
        with open("dynamic-plugins.yaml") as f:
            data = yaml.load(f, Loader=Loader)
    """

    @staticmethod
    def _convert_key_to_string(key: Any) -> Any:
        """
        Convert date and numeric keys to strings.

        Booleans are left alone even though they are ints in Python.
        """
        if isinstance(key, datetime.date):
            return str(key)
        elif not isinstance(key, bool) and isinstance(key, (int, float)):
            return str(key)
        return key

    def construct_mapping(self, node: Any, deep: bool = False) -> dict:
        mapping = super().construct_mapping(node, deep=deep)
        for key in list(mapping.keys()):
            converted_key = self._convert_key_to_string(key)
            if converted_key != key:
                mapping[converted_key] = mapping.pop(key)
        return mapping

