"""
Runtime configuration read from the environment (and a ``.env`` file).
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ConfigurationError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _int_setting(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _log_level_setting(name: str, default: str) -> str:
    level = os.environ.get(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"{name} must be a logging level name, got {level!r}")
    return level


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    max_upload_mb: int = 16

    @property
    def max_content_length(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            host=os.environ.get("INVOICE_EXPORT_HOST", cls.host),
            port=_int_setting("INVOICE_EXPORT_PORT", cls.port),
            log_level=_log_level_setting("INVOICE_EXPORT_LOG_LEVEL", cls.log_level),
            max_upload_mb=_int_setting("INVOICE_EXPORT_MAX_UPLOAD_MB", cls.max_upload_mb),
        )


def configure_logging(level="INFO") -> None:
    """Set up root logging with the project's format."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
