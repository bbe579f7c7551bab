"""
Environment variable substitution for configuration text.
"""

import os
import re
from collections.abc import Mapping

# $VAR, ${VAR} and ${VAR:-default}
_VAR_PATTERN = re.compile(
    r"\$(?:\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
    r"|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))"
)


def envsubst(text: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variables in text, like the envsubst utility.

    Supports `$VAR`, `${VAR}` and `${VAR:-default}`. The default is used when
    the variable is unset or empty. Unset variables without a default expand
    to an empty string.

    Args:
        text: Text containing variable references
        environ: Variable source (default: os.environ)

    Returns:
        Text with all references expanded
    """
    env = os.environ if environ is None else environ

    def _replace(match: re.Match) -> str:
        name = match.group("braced") or match.group("bare")
        value = env.get(name, "")
        default = match.group("default")
        if default is not None and not value:
            return default
        return value

    return _VAR_PATTERN.sub(_replace, text)
