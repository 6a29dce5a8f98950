# -----------------------------------------------------------------------------
# GITPACK CONFIGURATION
# -----------------------------------------------------------------------------
# Responsibility: One explicit value holding every tunable. It is built once
# by the CLI and handed down to the Orchestrator, which passes the relevant
# parts to the fetcher and the placeholder expander.
#
# Environment Variables:
# - GITPACK_PREFIX: Install prefix substituted for {{prefix}} (/usr/local)
# - GITPACK_TOKEN: Token sent as "Authorization: token <value>"
# - GITPACK_ARCHIVE_HOST: Archive download host (codeload.github.com)
# - GITPACK_MAX_REDIRECTS: Redirects followed per download (10)
# - GITPACK_HTTP_TIMEOUT: Seconds before a download gives up (unset = wait)
# -----------------------------------------------------------------------------

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PREFIX = "/usr/local"
DEFAULT_ARCHIVE_HOST = "codeload.github.com"
DEFAULT_MAX_REDIRECTS = 10


class GitPackConfig(BaseModel):
    """Settings for a single gitpack invocation."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(DEFAULT_PREFIX, min_length=1)
    token: str | None = None
    archive_host: str = Field(DEFAULT_ARCHIVE_HOST, min_length=1)
    max_redirects: int = Field(DEFAULT_MAX_REDIRECTS, ge=0)
    http_timeout: float | None = Field(None, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "GitPackConfig":
        """
        Build a config from GITPACK_* variables.

        Args:
            environ: Mapping to read from (defaults to os.environ).
            **overrides: Values that win over the environment; None is ignored.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        environ = os.environ if environ is None else environ

        values: dict = {}
        env_keys = {
            "prefix": "GITPACK_PREFIX",
            "token": "GITPACK_TOKEN",
            "archive_host": "GITPACK_ARCHIVE_HOST",
            "max_redirects": "GITPACK_MAX_REDIRECTS",
            "http_timeout": "GITPACK_HTTP_TIMEOUT",
        }
        for field_name, env_key in env_keys.items():
            raw = environ.get(env_key, "")
            if raw != "":
                values[field_name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
