"""
Environment-derived settings validated with Pydantic.
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigError
from ..log.constants import LogConstants

DEFAULT_METADATA_PATH = "../metadata"

# Field name -> environment variable
ENV_VARS: dict[str, str] = {
    "job_name": "JOB_NAME",
    "skip_plugin_metadata_injection": "RHDH_SKIP_PLUGIN_METADATA_INJECTION",
    "metadata_path": "RHDH_METADATA_PATH",
    "log_level": "RHDH_E2E_LOG_LEVEL",
}


class E2ESettings(BaseModel):
    """Settings read once per test run from the process environment."""

    job_name: str = Field(default="", description="CI job identifier")
    skip_plugin_metadata_injection: bool = Field(
        default=False, description="Opt out of plugin metadata handling"
    )
    metadata_path: str = Field(
        default=DEFAULT_METADATA_PATH, description="Plugin metadata directory"
    )
    log_level: str = Field(default="info", description="Log level")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("skip_plugin_metadata_injection", mode="before")
    @classmethod
    def _any_value_opts_out(cls, v: Any) -> Any:
        """Any non-empty string opts out, matching shell truthiness."""
        if isinstance(v, str):
            return v != ""
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        if v.lower() not in LogConstants.LEVEL_NAMES:
            valid = ", ".join(sorted(LogConstants.LEVEL_NAMES))
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid}")
        return v.lower()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "E2ESettings":
        """
        Build settings from environment variables.

        Unset variables keep their defaults; empty metadata path and log
        level values are treated as unset.

        Raises:
            ConfigError: If a value fails validation
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field, var in ENV_VARS.items():
            if var not in env:
                continue
            if field in ("metadata_path", "log_level") and not env[var]:
                continue
            values[field] = env[var]

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError("invalid e2e settings", errors=e.error_count()) from e
