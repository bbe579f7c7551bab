"""
Policy deciding whether plugin metadata handling runs.

Enabled by default (local runs and PR builds). Disabled when:
- RHDH_SKIP_PLUGIN_METADATA_INJECTION is set to any non-empty value, or
- JOB_NAME contains "periodic-" (nightly/periodic builds test the existing
  plugin configuration against a fixed baseline)

Callers build one GatingDecision per run and pass it to the orchestration
functions explicitly.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from ..config.settings import ENV_VARS, E2ESettings
from ..log import get_lg

PERIODIC_JOB_MARKER = "periodic-"


@dataclass(frozen=True)
class GatingDecision:
    """Whether metadata handling is enabled, and why."""

    enabled: bool
    reason: str

    @classmethod
    def enable(cls) -> "GatingDecision":
        return cls(True, "enabled")

    @classmethod
    def disable(cls, reason: str) -> "GatingDecision":
        return cls(False, reason)

    @classmethod
    def evaluate(cls, skip_flag: bool, job_name: str) -> "GatingDecision":
        """Apply the policy; the first matching rule wins."""
        if skip_flag:
            return cls.disable("RHDH_SKIP_PLUGIN_METADATA_INJECTION is set")
        if PERIODIC_JOB_MARKER in job_name:
            return cls.disable("periodic job detected")
        return cls.enable()

    @classmethod
    def from_settings(cls, settings: E2ESettings) -> "GatingDecision":
        return cls.evaluate(settings.skip_plugin_metadata_injection, settings.job_name)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GatingDecision":
        """
        Decide from the opt-out flag and job name only.

        Other settings are not validated here, so a bad log level or
        metadata path never changes the gating outcome.
        """
        env = os.environ if environ is None else environ
        skip_flag = env.get(ENV_VARS["skip_plugin_metadata_injection"], "") != ""
        return cls.evaluate(skip_flag, env.get(ENV_VARS["job_name"], ""))


def should_inject_plugin_metadata(environ: Mapping[str, str] | None = None) -> bool:
    """
    Check whether plugin metadata handling is enabled for this environment.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        True if metadata should be generated or injected
    """
    decision = GatingDecision.from_env(environ)
    if not decision.enabled:
        get_lg("plugin-metadata").info(
            "metadata handling disabled", extra={"reason": decision.reason}
        )
    return decision.enabled
