"""
Unified exception hierarchy for the e2e test utilities.

Every error raised on purpose by this package derives from E2EError, so a
test harness can stop a deployment with a single except clause.
"""

from typing import Any


class E2EError(Exception):
    """
    Base exception for all e2e utility errors.

    Example:
        try:
            cfg = resolve_dynamic_plugins_config(None)
        except E2EError as e:
            lg.error("cannot prepare deployment", extra={"exception": e})
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(E2EError):
    """
    Configuration-related errors.

    Examples:
        - YAML layer file not found
        - Layer whose top level is not a mapping
        - Invalid environment-derived setting
    """

    pass


class MetadataError(E2EError):
    """
    Plugin metadata could not produce a usable configuration.

    Raised when metadata handling is enabled but the metadata directory is
    missing or holds no valid descriptor. Per-file problems never raise this.
    """

    pass


class CommandError(E2EError):
    """Shell command failed or could not be started."""

    def __init__(
        self,
        message: str,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
        **context: Any,
    ) -> None:
        super().__init__(message, **context)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class UIError(E2EError):
    """UI verification failed in a way Playwright assertions do not cover."""

    pass
