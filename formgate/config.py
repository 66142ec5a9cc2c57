"""Environment-backed configuration for the webhook service.

Values are read when they are needed rather than once at import time, so a
rotated ``TYPEFORM_SECRET`` or Supabase key takes effect on the next
delivery without restarting the process.

Usage
-----
Read the signing secret for each delivery:

>>> import os
>>> os.environ["TYPEFORM_SECRET"] = "s3cret"
>>> source = env_secret_source()
>>> source()
's3cret'

Build Supabase credentials:

>>> os.environ["SUPABASE_URL"] = "https://abc.supabase.co"
>>> os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-key"
>>> SupabaseConfig.from_env().rest_url
'https://abc.supabase.co/rest/v1'

"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import os

from formgate.errors import ConfigError

SECRET_ENV_VAR = "TYPEFORM_SECRET"
SUPABASE_URL_ENV_VAR = "SUPABASE_URL"
SUPABASE_KEY_ENV_VAR = "SUPABASE_SERVICE_ROLE_KEY"  # noqa: S105 - env var name

_DEFAULT_TIMEOUT_S = 10.0

SecretSource = cabc.Callable[[], str | None]


def env_secret_source(variable: str = SECRET_ENV_VAR) -> SecretSource:
    """Return a callable that reads the signing secret on every call.

    Blank values are reported as ``None`` so an accidentally empty secret is
    treated the same as a missing one.
    """

    def _read() -> str | None:
        value = os.environ.get(variable, "")
        return value if value.strip() else None

    return _read


def static_secret_source(secret: str | None) -> SecretSource:
    """Return a secret source that always yields ``secret``."""
    return lambda: secret


def _require_env(variable: str) -> str:
    raw = os.environ.get(variable)
    if raw is None:
        raise ConfigError.missing(variable)
    value = raw.strip()
    if not value:
        raise ConfigError.empty(variable)
    return value


@dc.dataclass(frozen=True, slots=True)
class SupabaseConfig:
    """Connection details for the Supabase data API.

    Attributes
    ----------
    url
        Project URL, e.g. ``https://<ref>.supabase.co``. A trailing slash is
        tolerated.
    service_role_key
        Service role key; sent as both ``apikey`` and bearer token.
    timeout_s
        Per-request timeout for inserts.

    """

    url: str
    service_role_key: str
    timeout_s: float = _DEFAULT_TIMEOUT_S

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST endpoint."""
        return f"{self.url.rstrip('/')}/rest/v1"

    @classmethod
    def from_env(cls) -> SupabaseConfig:
        """Build configuration from ``SUPABASE_URL`` and the service role key.

        Raises
        ------
        ConfigError
            If either variable is unset, blank, or the URL has no http(s)
            scheme.

        """
        url = _require_env(SUPABASE_URL_ENV_VAR)
        if not url.startswith(("https://", "http://")):
            raise ConfigError.invalid_url(SUPABASE_URL_ENV_VAR, url)
        return cls(url=url, service_role_key=_require_env(SUPABASE_KEY_ENV_VAR))


__all__ = [
    "SECRET_ENV_VAR",
    "SUPABASE_KEY_ENV_VAR",
    "SUPABASE_URL_ENV_VAR",
    "SecretSource",
    "SupabaseConfig",
    "env_secret_source",
    "static_secret_source",
]
