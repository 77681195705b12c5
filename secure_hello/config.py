from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


logger = logging.getLogger(__name__)

DEFAULT_PORT = "8080"
UNSET_API_KEY = "not-set"

# Deliberate flaw for SAST tools to find
HARDCODED_API_KEY = "dummy-go-key-9876"

SOURCE_ENV = "env"
SOURCE_HARDCODED = "hardcoded"
SECRET_SOURCES = (SOURCE_ENV, SOURCE_HARDCODED)

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    port: str = DEFAULT_PORT
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    api_key: Optional[str] = None
    secret_source: str = SOURCE_ENV
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def tls_enabled(self) -> bool:
        return bool(self.cert_file) and bool(self.key_file)

    @property
    def address(self) -> str:
        return f":{self.port}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Resolve settings from the process environment.

        Every input is optional and resolution never fails: empty values fall
        back to their defaults, and unrecognised ``SECRET_SOURCE`` or
        ``LOG_LEVEL`` values are replaced with the default after a warning.
        """
        env = os.environ if environ is None else environ

        source = env.get("SECRET_SOURCE", "").strip().lower() or SOURCE_ENV
        if source not in SECRET_SOURCES:
            logger.warning("Unknown SECRET_SOURCE %r, using %r.", source, SOURCE_ENV)
            source = SOURCE_ENV

        level = env.get("LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
        if level not in LOG_LEVELS:
            logger.warning("Unknown LOG_LEVEL %r, using %r.", level, DEFAULT_LOG_LEVEL)
            level = DEFAULT_LOG_LEVEL

        return cls(
            port=env.get("PORT") or DEFAULT_PORT,
            cert_file=env.get("TLS_CERT_FILE") or None,
            key_file=env.get("TLS_KEY_FILE") or None,
            api_key=env.get("API_KEY") or None,
            secret_source=source,
            log_level=level,
        )


def resolve_api_key(settings: Settings) -> str:
    """Return the secret a request should use.

    With the hardcoded source the environment is ignored entirely.
    """
    if settings.secret_source == SOURCE_HARDCODED:
        return HARDCODED_API_KEY
    if not settings.api_key:
        logger.warning("Warning: API_KEY environment variable not set.")
        return UNSET_API_KEY
    return settings.api_key
