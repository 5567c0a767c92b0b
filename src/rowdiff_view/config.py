"""Runtime settings for rowdiff-view."""

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_BACKEND_URL = "http://localhost:8080"

ENV_BACKEND_URL = "ROWDIFF_BACKEND_URL"
ENV_TIMEOUT = "ROWDIFF_TIMEOUT"
ENV_DEFAULT_KEY = "ROWDIFF_DEFAULT_KEY"


@dataclass
class Settings:
    """Backend location and request defaults.

    Attributes:
        backend_url: Base URL of the diff backend
        timeout: Request timeout in seconds (None: no timeout)
        fallback_key: Key column used when a table has none of its own
    """

    backend_url: str = DEFAULT_BACKEND_URL
    timeout: float | None = None
    fallback_key: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read settings from ROWDIFF_* environment variables.

        Raises:
            ValueError: If ROWDIFF_TIMEOUT is not a number
        """
        env = os.environ if environ is None else environ
        timeout = env.get(ENV_TIMEOUT, "").strip()
        try:
            timeout_value = float(timeout) if timeout else None
        except ValueError:
            raise ValueError(f"{ENV_TIMEOUT} must be a number of seconds, got {timeout!r}")
        return cls(
            backend_url=env.get(ENV_BACKEND_URL, "").strip() or DEFAULT_BACKEND_URL,
            timeout=timeout_value,
            fallback_key=env.get(ENV_DEFAULT_KEY, "").strip() or None,
        )

    def override(
        self, backend_url: str | None = None, timeout: float | None = None
    ) -> "Settings":
        """Return a copy with command-line values applied."""
        return Settings(
            backend_url=backend_url or self.backend_url,
            timeout=self.timeout if timeout is None else timeout,
            fallback_key=self.fallback_key,
        )
