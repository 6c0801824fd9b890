# =============================================================================
# nora_core/config.py  —  Runtime Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Odoo connection settings from the environment and fails fast
#   when any of them is missing.  main.py calls load_dotenv() first, so a
#   local .env file works the same as exported variables.
#
# REQUIRED:
#   ODOO_URL, ODOO_DB, ODOO_USERNAME and one of ODOO_PASSWORD / ODOO_API_KEY.
#
# OPTIONAL:
#   ODOO_TIMEOUT_SECONDS  HTTP timeout for each JSON-RPC request (default 30)
#   NORA_LOG_LEVEL        logging level name (default INFO)
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from nora_core.errors import ConfigError

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"


def _env_str(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True)
class Settings:
    """Connection settings for one Odoo database."""

    url: str
    database: str
    username: str
    password: str = ""                 # Password or API key; Odoo accepts either
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        # Never let the credential leak into logs or tracebacks.
        return (
            f"Settings(url={self.url!r}, database={self.database!r}, "
            f"username={self.username!r}, password='***', "
            f"timeout_seconds={self.timeout_seconds!r}, log_level={self.log_level!r})"
        )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigError: naming every missing required variable, or the
                first optional variable that cannot be parsed.
        """
        env = os.environ if env is None else env

        url = _env_str(env, "ODOO_URL")
        database = _env_str(env, "ODOO_DB")
        username = _env_str(env, "ODOO_USERNAME")
        password = _env_str(env, "ODOO_PASSWORD") or _env_str(env, "ODOO_API_KEY")

        missing = [
            name
            for name, value in (
                ("ODOO_URL", url),
                ("ODOO_DB", database),
                ("ODOO_USERNAME", username),
                ("ODOO_PASSWORD or ODOO_API_KEY", password),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing Odoo environment variables: {', '.join(missing)}")

        raw_timeout = _env_str(env, "ODOO_TIMEOUT_SECONDS")
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"ODOO_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ConfigError(f"ODOO_TIMEOUT_SECONDS must be positive, got {raw_timeout!r}")

        log_level = (_env_str(env, "NORA_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"NORA_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            url=url.rstrip("/"),
            database=database,
            username=username,
            password=password,
            timeout_seconds=timeout,
            log_level=log_level,
        )
