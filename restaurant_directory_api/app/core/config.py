"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  Settings
are read once at process start by ``Settings.from_env`` and are
immutable afterwards; the resulting value is handed to ``create_app``
and kept on ``app.state`` rather than imported as a module global.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


_TRUTHY = {"1", "true", "yes"}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = "Restaurant Directory API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    log_file: str = ""

    # Path to the SQLite database file holding the restaurants table.  A
    # relative path is resolved against the project root by the ``db``
    # module.
    database_url: str = "restaurants.db"
    table_name: str = "restaurants"

    # Deployment details reported by the ``GET /`` config echo.  The
    # region and cache endpoint are informational only.
    aws_region: str = ""
    cache_endpoint: str = ""

    use_cache: bool = False
    cache_ttl_seconds: int = 300

    host: str = "0.0.0.0"
    port: int = 80

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Invalid integer values raise ``ValueError`` so that a broken
        deployment fails at start rather than on the first request.
        """
        env = os.environ if environ is None else environ
        return cls(
            project_name=env.get("PROJECT_NAME", cls.project_name),
            api_version=env.get("API_VERSION", cls.api_version),
            log_level=env.get("LOG_LEVEL", cls.log_level),
            log_file=env.get("LOG_FILE", cls.log_file),
            database_url=env.get("DATABASE_URL", cls.database_url),
            table_name=env.get("TABLE_NAME", cls.table_name),
            aws_region=env.get("AWS_REGION", cls.aws_region),
            cache_endpoint=env.get("MEMCACHED_CONFIGURATION_ENDPOINT", cls.cache_endpoint),
            use_cache=_as_bool(env.get("USE_CACHE", "false")),
            cache_ttl_seconds=int(env.get("CACHE_TTL_SECONDS", str(cls.cache_ttl_seconds))),
            host=env.get("HOST", cls.host),
            port=int(env.get("PORT", str(cls.port))),
        )

    def public_view(self) -> Dict[str, Any]:
        """Return the configuration echo served at ``GET /``."""
        return {
            "MEMCACHED_CONFIGURATION_ENDPOINT": self.cache_endpoint,
            "TABLE_NAME": self.table_name,
            "AWS_REGION": self.aws_region,
            "USE_CACHE": self.use_cache,
            "DATABASE_URL": self.database_url,
        }
